"""MCP server exposing Zoho Projects portals, projects, tasks, issues and comments."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from .utils.logging import setup_logging

__version__ = "0.1.0"

TRANSPORTS = ("stdio", "sse", "streamable-http")

logger = setup_logging(
    logging.DEBUG
    if os.getenv("MCP_VERY_VERBOSE", "").lower() in ("true", "1", "yes")
    else logging.INFO
    if os.getenv("MCP_VERBOSE", "").lower() in ("true", "1", "yes")
    else logging.WARNING
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zoho-projects-mcp",
        description="Run the Zoho Projects MCP server.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Path to a .env file to load before reading configuration",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=None,
        help="Transport type (default: TRANSPORT env var or stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host for sse/streamable-http (default: HOST env var or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for sse/streamable-http (default: PORT env var or 8000)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Only expose read tools (also READ_ONLY_MODE=true)",
    )
    parser.add_argument(
        "--enabled-tools",
        help="Comma-separated list of tool names to expose (also ENABLED_TOOLS)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``zoho-projects-mcp`` console script."""
    args = _build_parser().parse_args(argv)

    if args.env_file is not None:
        if not args.env_file.exists():
            sys.exit(f"Env file not found: {args.env_file}")
        load_dotenv(args.env_file, override=True)
    else:
        load_dotenv()

    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logger.getEffectiveLevel()
    setup_logging(level)

    # The lifespan reads these from the environment, so CLI flags are written back.
    if args.read_only:
        os.environ["READ_ONLY_MODE"] = "true"
    if args.enabled_tools:
        os.environ["ENABLED_TOOLS"] = args.enabled_tools

    transport = (args.transport or os.getenv("TRANSPORT", "stdio")).lower()
    if transport not in TRANSPORTS:
        sys.exit(f"Unsupported transport: {transport}")

    from .servers import create_main_server

    server = create_main_server()
    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = args.host or os.getenv("HOST", "0.0.0.0")
        try:
            run_kwargs["port"] = args.port or int(os.getenv("PORT", "8000"))
        except ValueError:
            sys.exit(f"Invalid PORT value: {os.getenv('PORT')}")
        logger.info(
            f"Starting server with {transport.upper()} transport on "
            f"{run_kwargs['host']}:{run_kwargs['port']}"
        )
    else:
        logger.info("Starting server with STDIO transport.")

    try:
        server.run(**run_kwargs)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Server shutdown requested.")
    finally:
        server.close()


__all__ = ["main", "__version__"]
