"""Logging configuration shared by all bounded contexts.

Both structlog loggers and plain standard library loggers (protean,
uvicorn, sqlalchemy) end up in the same handlers and are rendered by
``structlog.stdlib.ProcessorFormatter``: JSON in production and staging, a
console format everywhere else. Values bound with
``structlog.contextvars.bound_contextvars`` (the saga binds ``order_id``)
appear on every line logged inside the block.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import structlog

from shared.config import Settings, get_settings

LOG_FILE = "orderpay.log"
ERROR_LOG_FILE = "orderpay_error.log"
_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "asyncio")


def get_log_level(settings: Settings | None = None) -> str:
    """Explicit ``log_level`` wins, then the environment's default."""
    settings = settings or get_settings()
    return (settings.log_level or _LEVELS_BY_ENV.get(settings.env.lower(), "INFO")).upper()


def _renders_json(settings: Settings) -> bool:
    return settings.env.lower() in ("production", "staging")


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def build_formatter(settings: Settings | None = None) -> structlog.stdlib.ProcessorFormatter:
    settings = settings or get_settings()
    if _renders_json(settings):
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
    )


def _file_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(settings: Settings | None = None) -> None:
    """Route the root logger to the console and, optionally, rotating files."""
    settings = settings or get_settings()
    log_level = get_log_level(settings)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_dir / LOG_FILE, log_level))
        handlers.append(_file_handler(log_dir / ERROR_LOG_FILE, logging.ERROR))

    formatter = build_formatter(settings)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_structlog() -> None:
    """Hand structlog events to the standard library handlers."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(settings)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
