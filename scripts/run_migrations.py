#!/usr/bin/env python3
"""Apply the comment schema migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py              # upgrade to head
    python scripts/run_migrations.py --revision base --downgrade
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from discuss.config import Settings
from discuss.util.observability import configure_logfire


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    parser = argparse.ArgumentParser(description="Apply database migrations")
    parser.add_argument("--revision", default="head", help="Target revision")
    parser.add_argument(
        "--downgrade", action="store_true", help="Downgrade instead of upgrading"
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    direction = "downgrade" if args.downgrade else "upgrade"

    with logfire.span("migrations.run", direction=direction, revision=args.revision):
        try:
            if args.downgrade:
                command.downgrade(alembic_cfg, args.revision)
            else:
                command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy fails instead of serving a broken schema
            raise

    logfire.info("Database migrations completed", direction=direction)
    return 0


if __name__ == "__main__":
    sys.exit(main())
