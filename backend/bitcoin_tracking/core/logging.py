from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path

from bitcoin_tracking.core.config import settings

LOG_DIR = Path(__file__).resolve().parents[2] / "logs"
LOG_FILE = LOG_DIR / "app.log"

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "uvicorn.asgi")


def setup_logging(level: str | None = None, log_file: Path | None = None) -> None:
    """Configure application-wide logging."""

    level = (level or settings.log_level).upper()
    log_file = log_file or LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "standard",
                "filename": str(log_file),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 5,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            name: {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            }
            for name in _UVICORN_LOGGERS
        },
        "root": {
            "handlers": ["console", "file"],
            "level": level,
        },
    }

    dictConfig(config)


__all__ = ["setup_logging"]
