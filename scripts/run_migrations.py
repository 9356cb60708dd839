#!/usr/bin/env python3
"""Apply the comment schema migrations.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a revision
    python scripts/run_migrations.py -1         # step back one revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from chatter.config import Settings
from chatter.util.logging import setup_logging
from chatter.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Migrate the comment store to a revision, logging failures to Logfire."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    target = argv[1] if len(argv) > 1 else "head"
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database.url)

    with logfire.span("run_migrations", target=target):
        try:
            if target == "base" or target.startswith("-"):
                command.downgrade(alembic_cfg, target)
            else:
                command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Comment store migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy fails instead of serving a broken schema
            raise

    logfire.info("Comment store migrated", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
