import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

import structlog

from .config_types import Settings

PLAIN_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(name)s - [%(levelname)s] - %(filename)s:%(lineno)d - %(message)s"
)


class JsonFormatter(logging.Formatter):
    """
    JSON formatter that also renders the ``extra_data`` dict attached to a record.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = "".join(
                traceback.format_exception(*record.exc_info)
            )

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_record.update(extra_data)

        return json.dumps(log_record, default=str)


def configure_logging(
    settings: Settings,
    log_file: Optional[str] = None,
    structured: Optional[bool] = None,
    log_level_override: Optional[str] = None,
    log_rotation_config: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Configure logging for applications embedding statize.

    Args:
        settings: Logging settings.
        log_file: Optional path to a log file, overrides settings.log_file.
        structured: If True, logs are rendered as JSON. Defaults to
            settings.structured_logging.
        log_level_override: Optional log level string to override settings.
        log_rotation_config: maxBytes / backupCount for the file handler.
    """
    level_str = "DEBUG" if settings.debug else settings.log_level
    if log_level_override:
        level_str = log_level_override.upper()
    log_level = getattr(logging, level_str, logging.INFO)

    if structured is None:
        structured = settings.structured_logging
    if log_file is None and settings.log_file is not None:
        log_file = str(settings.log_file)

    if structured:
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.dev.set_exc_info,
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )
        console_formatter: logging.Formatter = JsonFormatter()
        file_formatter: logging.Formatter = JsonFormatter()
    else:
        console_formatter = logging.Formatter(PLAIN_FORMAT)
        file_formatter = logging.Formatter(FILE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        rotation_config = log_rotation_config or {}
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=rotation_config.get("maxBytes", 10 * 1024 * 1024),
            backupCount=rotation_config.get("backupCount", 5),
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    for module_name, module_level in settings.module_levels.items():
        logging.getLogger(module_name).setLevel(
            getattr(logging, str(module_level).upper(), logging.INFO)
        )

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "extra_data": {
                "level": logging.getLevelName(log_level),
                "structured": structured,
                "file_logging": log_file is not None,
            }
        },
    )
