from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .container import Container, build_container
from .dashboards.controller import register as register_dashboards
from .settings import get_settings_module


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(__name__).info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(
            api_config=api_config,
            present_status=getattr(settings, "PRESENT_STATUS", "Present"),
            trend_weeks=int(getattr(settings, "TREND_WEEKS", 4)),
            precision=int(getattr(settings, "PERCENT_PRECISION", 1)),
        )

    register_dashboards(app, container)

    return app
