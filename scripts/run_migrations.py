#!/usr/bin/env python3
"""Apply pending schema migrations before the services are deployed.

Run from the repository root so ``alembic.ini`` is found::

    DATABASE__URL=postgresql+asyncpg://... python scripts/run_migrations.py

The learning path content table has no cascading foreign key, so a
half-applied schema would leave path deletion broken; a failed upgrade
exits non-zero and the deploy must stop.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from sapp.config import Settings
from sapp.util.logging import setup_logging
from sapp.util.observability import configure_logfire

ALEMBIC_CONFIG = "alembic.ini"
TARGET_REVISION = "head"


def main() -> int:
    """Upgrade the configured database to the latest revision."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span(
        "migrations.upgrade",
        environment=settings.environment,
        target=TARGET_REVISION,
    ):
        try:
            command.upgrade(Config(ALEMBIC_CONFIG), TARGET_REVISION)
        except Exception as e:
            logfire.error(
                "Schema upgrade failed",
                target=TARGET_REVISION,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

        logfire.info("Schema is at latest revision", target=TARGET_REVISION)
    return 0


if __name__ == "__main__":
    sys.exit(main())
