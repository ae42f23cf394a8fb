"""Runtime configuration, read from the environment."""

import os


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Version identifier of the running application. Each version owns its own storage slot.
    APP_VERSION = os.environ.get("HANDICAP_CUP_VERSION") or "3"
    STORAGE_PREFIX = os.environ.get("HANDICAP_CUP_STORAGE_PREFIX") or "handicap-cup"
    DATABASE_URL = (
        os.environ.get("HANDICAP_CUP_DATABASE_URL") or "sqlite:///handicap_cup.db"
    )
    DB_ECHO = _env_flag("HANDICAP_CUP_DB_ECHO")
    LOG_LEVEL = (os.environ.get("HANDICAP_CUP_LOG_LEVEL") or "INFO").upper()
