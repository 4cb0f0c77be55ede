# backend/agrostock/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # State lives for the process lifetime only: in-memory SQLite by default
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",  # optional alternative location
        "sqlite:///:memory:",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Load the demo catalog, suppliers, users and ledger on startup
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", "true")

    # Actor used by CLI commands when --as is not given
    DEFAULT_ACTOR_ID = os.environ.get("DEFAULT_ACTOR_ID", "u1")

    # AI business summary (Gemini via LangChain)
    GOOGLE_API_KEY = os.environ.get("GOOGLE_API_KEY")
    AI_SUMMARY_MODEL = os.environ.get("AI_SUMMARY_MODEL", "gemini-2.0-flash")
    AI_SUMMARY_TIMEOUT = float(os.environ.get("AI_SUMMARY_TIMEOUT", "20"))
    AI_SUMMARY_TEMPERATURE = float(os.environ.get("AI_SUMMARY_TEMPERATURE", "0.4"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
