"""Logging configuration for URL shortener.

Plain format::

    2024-01-01 12:00:00 [INFO] che_shortener.web - Redirect jolly-otter -> https://example.com

JSON format (one object per line, ``extra`` fields included)::

    {"timestamp": "2024-01-01T12:00:00.000Z", "level": "INFO",
     "logger": "che_shortener.web", "message": "...", "short_code": "jolly-otter"}
"""

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Optional


LOGGER_NAME = "che_shortener"

# uvicorn's own loggers share our handlers instead of its default config
SERVER_LOGGERS = ("uvicorn", "uvicorn.error")


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras."""
    
    STANDARD_ATTRS = frozenset(
        logging.LogRecord("", 0, "", 0, "", None, None).__dict__
    ) | {"message", "asctime"}
    
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc) \
            .isoformat(timespec="milliseconds") \
            .replace("+00:00", "Z")
        
        log = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        
        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value
        
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        
        return json.dumps(log, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Setup logging configuration.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format
        
    Returns:
        Configured ``che_shortener`` logger
    """
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    
    handlers = {
        "stdout": {
            "class": "logging.StreamHandler",
            "formatter": "json" if json_format else "plain",
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "json" if json_format else "plain",
            "filename": log_file,
            "encoding": "utf-8",
        }
    
    logger_config = {"level": level, "handlers": list(handlers)}
    
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": JsonFormatter,
            },
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: logger_config,
            **{name: {**logger_config, "propagate": False} for name in SERVER_LOGGERS},
        },
    })
    
    return logging.getLogger(LOGGER_NAME)
