#!/usr/bin/env python3
"""Start the comment board API, reporting startup failures to Logfire."""

import argparse
import sys

import logfire
import uvicorn

from board.config import Settings
from board.util.observability import configure_logfire

APP_PATH = "board.interface.api.app:app"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the board API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting board API",
            environment=settings.environment,
            git_sha=settings.git_sha,
            host=args.host,
            port=args.port,
        )
        # The app module configures Logfire again on import (no-op)
        uvicorn.run(
            APP_PATH,
            host=args.host,
            port=args.port,
            log_level="debug" if settings.debug else "info",
            reload=settings.environment == "development" and settings.debug,
        )
        return 0

    except Exception as e:
        logfire.error(
            "Board API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
