"""Standard library logging setup.

Application code logs through logfire directly. Libraries that use the
standard ``logging`` module (uvicorn, alembic, asyncpg) are routed into
logfire as well, so one pipeline carries every record.
"""

import logging

import logfire

from chatter.config import Settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "sqlalchemy.engine", "asyncio")


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into logfire.

    Args:
        settings: Application settings (``debug`` lowers the level)
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
