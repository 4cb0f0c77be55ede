# backend/agrostock/__init__.py
from __future__ import annotations

import logging

from flask import Flask

from .config import Config
from .extensions import db


def create_app(overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # Initialize extensions
    db.init_app(app)

    # Import models so metadata and ORM listeners are registered
    from . import models  # noqa: F401

    # The store lives in memory for as long as the app does
    with app.app_context():
        db.create_all()
        if app.config["SEED_DEMO_DATA"]:
            from .services.seed_service import seed_demo_data
            seed_demo_data()

    from .services.summary_service import SummaryBoard
    app.extensions["agrostock_summary"] = SummaryBoard()

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
