#!/usr/bin/env python3
"""Serve the comments API under uvicorn."""

import sys

import logfire
import uvicorn

from chatter.config import Settings
from chatter.util.logging import setup_logging
from chatter.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting comments API",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
    )
    try:
        uvicorn.run(
            "chatter.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            # Anonymous commenters are identified by IP, so trust the
            # proxy's X-Forwarded-For
            proxy_headers=True,
            forwarded_allow_ips="*",
            log_config=None,
        )
    except Exception:
        logfire.exception("Comments API failed to start")
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
