"""`steerengine` console script: serve the debug scene and steering API."""

import argparse
import logging
import sys

import uvicorn

from steerengine import __version__
from steerengine.logging_config import configure_logging

logger = logging.getLogger(__name__)

APP_PATH = "steerengine.server.app:app"


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the console script."""
    parser = argparse.ArgumentParser(
        prog="steerengine",
        description=(
            "Serve the pursuit scene over /ws/frames and stateless steering "
            "ticks over /api/v1/steering/step."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    server = parser.add_argument_group("server")
    server.add_argument("--host", default="127.0.0.1", help="bind address")
    server.add_argument("--port", type=int, default=8000, help="bind port")
    server.add_argument("--reload", action="store_true", help="restart on source changes")

    logs = parser.add_argument_group("logging", "override LOG_LEVEL / LOG_FORMAT")
    logs.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="steerengine log level",
    )
    logs.add_argument("--log-format", choices=["text", "json"], help="log line format")
    return parser


def main(args: list[str] | None = None) -> int:
    """Parse arguments, configure logging and run uvicorn until interrupted.

    Returns:
        Exit code (0 for success).
    """
    parsed = build_parser().parse_args(args)

    level = logging.getLevelName(parsed.log_level) if parsed.log_level else None
    configure_logging(level=level, format_type=parsed.log_format)

    logger.info("Serving SteerEngine %s on http://%s:%d", __version__, parsed.host, parsed.port)
    uvicorn.run(APP_PATH, host=parsed.host, port=parsed.port, reload=parsed.reload)

    return 0


if __name__ == "__main__":
    sys.exit(main())
