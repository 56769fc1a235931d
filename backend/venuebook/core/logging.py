"""
structlog setup for the API process.

Development gets coloured console lines, production one JSON object per
line. Every entry carries the service name and environment, plus whatever
request context (request id, principal, role) the middleware and auth
dependency bound through contextvars. Credential-looking keys are masked
before rendering.
"""

import logging
import sys
import structlog
from venuebook.core.config import get_settings

REDACTED_KEYS = frozenset({"password", "confirm_password", "hashed_password", "token", "access_token"})

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


def _redact_secrets(logger, method_name, event_dict):
    for key in REDACTED_KEYS & event_dict.keys():
        event_dict[key] = "***"
    return event_dict


def _service_stamper(service: str, environment: str):
    def stamp(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", environment)
        return event_dict
    return stamp


def setup_logging() -> None:
    settings = get_settings()
    production = settings.ENVIRONMENT == "production"

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_stamper(settings.APP_NAME, settings.ENVIRONMENT),
        _redact_secrets,
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if production:
        final = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    # foreign_pre_chain gives uvicorn/sqlalchemy records the same shape
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # setup_logging can run more than once (tests, reloads)
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
