import logging
import sys
from logging.config import dictConfig

from app.core.config import LOG_LEVEL

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(method)s | "
    "%(path)s | %(status_code)s | %(process_time_ms)sms"
)

# third-party loggers that are too chatty at the app's level
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx", "httpcore", "uvicorn.access")


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    loggers = {
        # fed by request_logging_middleware
        "access": {
            "handlers": ["access_console"],
            "level": "INFO",
            "propagate": False,
        },
    }
    loggers.update({name: {"level": "WARNING"} for name in QUIET_LOGGERS})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": DEFAULT_FORMAT},
            "access": {"format": ACCESS_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
            },
            "access_console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "access",
            },
        },
        "loggers": loggers,
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def setup_logging():
    dictConfig(build_logging_config())
    logging.getLogger(__name__).debug("Logging configured", extra={"level": LOG_LEVEL})
