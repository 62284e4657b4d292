"""
MoviePin - Logging Configuration
================================

Structured logging built on structlog and the standard library, with
console or JSON output and optional file rotation.

Usage:
    from moviepin.core.logging import get_logger, setup_logging

    # Setup logging (call once at startup)
    setup_logging(settings)

    # Get logger for module
    logger = get_logger(__name__)
    logger.info("Movie added", movie_id=str(movie.id))
"""

import json
import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
from structlog.processors import StackInfoRenderer, TimeStamper, format_exc_info
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

from moviepin.core.config import Settings

# ==========================================
# CONTEXT VARIABLES FOR REQUEST TRACKING
# ==========================================

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_app_context = {}


# ==========================================
# CUSTOM STRUCTLOG PROCESSORS
# ==========================================

def add_request_context(logger, method_name, event_dict):
    """Add request context to log entries"""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_app_context(logger, method_name, event_dict):
    """Add application context to log entries"""
    for key, value in _app_context.items():
        event_dict.setdefault(key, value)
    return event_dict


# ==========================================
# CUSTOM FORMATTERS
# ==========================================

class JSONFormatter(logging.Formatter):
    """JSON formatter for file logs"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def parse_size(max_size: str) -> int:
    """Convert a size such as ``100MB`` to bytes"""
    size_multipliers = {"KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}
    size_str = max_size.strip().upper()

    for suffix, multiplier in size_multipliers.items():
        if size_str.endswith(suffix):
            return int(size_str[:-len(suffix)]) * multiplier
    return int(size_str)


def create_file_handler(filename: str, max_size: str = "100MB", backup_count: int = 5) -> logging.Handler:
    """Create rotating file handler"""
    return logging.handlers.RotatingFileHandler(
        filename=filename,
        maxBytes=parse_size(max_size),
        backupCount=backup_count,
        encoding="utf-8",
    )


# ==========================================
# LOGGING SETUP
# ==========================================

def setup_logging(settings: Settings) -> None:
    """Setup structured logging with console and optional file output"""

    _app_context.update({
        "app_name": settings.APP_NAME,
        "app_version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    })

    processors = [
        structlog.contextvars.merge_contextvars,
        add_request_context,
        add_app_context,
        add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    elif settings.LOG_FORMAT == "structured":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL))
    root_logger.handlers.clear()

    # structlog already rendered the event, the console only prints it
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
        file_handler = create_file_handler(
            settings.LOG_FILE,
            settings.LOG_MAX_SIZE,
            settings.LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if settings.DB_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for the given name"""
    return structlog.get_logger(name)


# ==========================================
# CONTEXT MANAGERS FOR REQUEST TRACKING
# ==========================================

class LogContext:
    """Context manager binding a request id to every log entry inside it"""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._token = None

    def __enter__(self):
        self._token = request_id_var.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        request_id_var.reset(self._token)


def log_api_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    path: str,
    status_code: int,
    duration: float,
) -> None:
    """Log a completed API request"""
    log = logger.warning if status_code >= 500 else logger.info
    log(
        "API request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2),
    )


__all__ = [
    "setup_logging",
    "get_logger",
    "LogContext",
    "log_api_request",
    "request_id_var",
    "JSONFormatter",
]
