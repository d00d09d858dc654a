# backend/educacenso/logging_config.py
"""dictConfig for running the service under uvicorn."""

from typing import Any, Dict

from .config import Settings

ACCESS_FORMAT = '%(levelprefix)s %(asctime)s %(client_addr)s - "%(request_line)s" %(status_code)s'
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """
    uvicorn-compatible logging config.

    The ``educacenso`` logger follows ``LOG_LEVEL``; with ``LOG_FILE`` set its
    records also go to a rotating file.
    """
    level = settings.LOG_LEVEL.upper()
    app_handlers = ["default"]

    handlers: Dict[str, Any] = {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
        "access": {
            "formatter": "access",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    }

    if settings.LOG_FILE:
        handlers["file"] = {
            "formatter": "plain",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": settings.LOG_FILE,
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }
        app_handlers.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": f"%(levelprefix)s {settings.LOG_FORMAT}",
                "datefmt": DATE_FORMAT,
            },
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": ACCESS_FORMAT,
                "datefmt": DATE_FORMAT,
            },
            "plain": {"format": settings.LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            "": {"handlers": ["default"], "level": "INFO"},
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
            "educacenso": {"handlers": app_handlers, "level": level, "propagate": False},
        },
    }
