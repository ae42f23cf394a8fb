import logging

from src.core.config import Config

_LOGGERS: dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Create or retrieve a named logger.

    Parameters:
    - name: logger namespace (e.g. services.persistence, db.sql_repository)
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(f"handicap_cup.{name}")
    logger.setLevel(Config.LOG_LEVEL)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    logger.propagate = False
    _LOGGERS[name] = logger

    return logger
