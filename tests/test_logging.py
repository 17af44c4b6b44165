import logging
from logging.config import dictConfig

from app.core.logging import build_logging_config


def test_driver_loggers_stay_quiet_at_debug():
    config = build_logging_config("DEBUG")

    for name in ("sqlalchemy.engine", "aiosqlite", "httpx"):
        assert config["loggers"][name]["level"] == "WARNING"
    assert config["loggers"]["access"]["propagate"] is False


def test_app_logger_follows_configured_level():
    dictConfig(build_logging_config("INFO"))
    assert logging.getLogger().getEffectiveLevel() == logging.INFO
    assert logging.getLogger("aiosqlite").getEffectiveLevel() == logging.WARNING
