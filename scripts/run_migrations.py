#!/usr/bin/env python3
"""Apply (or roll back) the board schema with Alembic, logging to Logfire."""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from board.config import Settings
from board.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run board database migrations")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument(
        "--downgrade",
        action="store_true",
        help="Downgrade to REVISION instead of upgrading",
    )
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logfire(settings)

    direction = "downgrade" if args.downgrade else "upgrade"
    alembic_cfg = Config("alembic.ini")

    try:
        logfire.info(
            "Running database migrations",
            direction=direction,
            revision=args.revision,
        )
        if args.downgrade:
            command.downgrade(alembic_cfg, args.revision)
        else:
            command.upgrade(alembic_cfg, args.revision)
        logfire.info("Database migrations completed", direction=direction)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            direction=direction,
            revision=args.revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail loudly so the service never starts on a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main())
