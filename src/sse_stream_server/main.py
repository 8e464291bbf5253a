#!/usr/bin/env python3
"""
main.py - Main Server Entry Point

Command-line interface and server runner. Environment variables provide the
defaults; flags given on the command line take precedence.
"""

import argparse
import logging
import sys

import uvicorn

from .app import create_app
from .config import ServerConfig
from .constants import LOG_FORMAT, LOG_LEVELS, SERVER_NAME, SERVER_VERSION
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def setup_logging(level: str = "info") -> None:
    """Set up logging configuration."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, stream=sys.stderr)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="Server-sent event stream server with resumable streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  PORT             Port to bind to (default: 8080)
  AUTH_TOKEN       Shared bearer token; empty disables authentication
  AUTH_TOKEN_FILE  File holding the token; takes precedence over AUTH_TOKEN
  LOG_LEVEL        Log level (default: info)
  EVENT_INTERVAL   Seconds between events (default: 1.0)

Examples:
  sse-stream-server
  sse-stream-server --port 9000 --log-level debug
  curl -N http://localhost:8080/stream?count=3
        """,
    )

    parser.add_argument("--host", default=None, help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (default: $PORT or 8080)")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between events (default: 1.0)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="Log level (default: info)")
    parser.add_argument("--access-log", action="store_true", default=None, help="Enable uvicorn access logging")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug mode")
    parser.add_argument("--version", action="version", version=f"{SERVER_NAME} {SERVER_VERSION}")

    return parser


def build_config(args: argparse.Namespace) -> ServerConfig:
    return ServerConfig.from_environment(
        host=args.host,
        port=args.port,
        event_interval=args.interval,
        log_level=args.log_level,
        access_log=args.access_log,
        debug=args.debug,
    )


def run_server(config: ServerConfig) -> None:
    """Run the server with given configuration"""
    app = create_app(config)
    logger.info(f"Starting {SERVER_NAME} {SERVER_VERSION} on {config.host}:{config.port}")
    try:
        uvicorn.run(app, **config.get_uvicorn_config())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


def main(argv: list[str] | None = None) -> None:
    """Main entry point"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        parser.exit(2, f"{SERVER_NAME}: error: {e}\n")

    setup_logging("debug" if config.debug else config.log_level)
    run_server(config)


if __name__ == "__main__":
    main()
