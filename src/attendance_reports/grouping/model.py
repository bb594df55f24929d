from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class AggregateBucket:
    """Records sharing one derived key.

    ``total`` counts every record in the bucket, ``matched`` those satisfying
    the grouping predicate (e.g. status == Present).
    """

    key: Hashable
    total: int = 0
    matched: int = 0

    @property
    def unmatched(self) -> int:
        return self.total - self.matched
