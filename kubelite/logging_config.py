"""
Logging configuration that keeps bearer tokens out of log output
"""

import logging
import logging.config
import re
from typing import Any, Dict

BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE)


class TokenRedactionFilter(logging.Filter):
    """Filter that scrubs bearer tokens from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the message with any bearer token redacted."""
        message = record.getMessage()
        redacted = BEARER_PATTERN.sub(r"\1<redacted>", message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True  # Never drop records, only rewrite them


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with token redaction."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "token_redaction_filter": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
                "filters": ["token_redaction_filter"]
            }
        },
        "loggers": {
            "kubelite": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            # httpx logs one INFO line per request
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING" if level != "DEBUG" else "DEBUG",
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(level))
