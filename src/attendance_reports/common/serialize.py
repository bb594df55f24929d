from __future__ import annotations

import dataclasses
from datetime import date, time
from enum import Enum
from typing import Any, Mapping

from ..trends.percentage import NotApplicable, Percentage


def to_jsonable(value: Any) -> Any:
    """Plain JSON-ready structure for dataclasses, dates and percentages."""

    if isinstance(value, (Percentage, NotApplicable)):
        return {"value": value.value, "label": value.label}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, time)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
