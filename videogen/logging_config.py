import logging
import logging.config
from typing import Dict


LOGGING_CONFIG: Dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": "INFO",
        }
    },
    "loggers": {
        # request lines for every poll attempt are noise at INFO
        "httpx": {"level": "WARNING"},
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
}


def configure_logging(level: str = "INFO") -> None:
    level = level.upper()
    config = dict(LOGGING_CONFIG)
    config["handlers"] = {"console": {**LOGGING_CONFIG["handlers"]["console"], "level": level}}
    config["root"] = {**LOGGING_CONFIG["root"], "level": level}
    logging.config.dictConfig(config)
