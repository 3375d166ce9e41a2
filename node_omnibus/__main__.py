"""CLI entry point: ``python -m node_omnibus`` or ``node-omnibus-server``."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from .config import ServerConfig
from .server import NodeOmnibusServer
from .utils import configure_logging, console


def main() -> None:
    """Parse arguments, configure logging, and serve over stdio."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Node.js Omnibus MCP server -- project scaffolding over stdio",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a JSON configuration file (default: environment variables)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the log level (DEBUG, INFO, WARNING, ERROR)",
    )
    args = parser.parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            console.print(f"[bold red]Error:[/bold red] Config file not found: {config_path}")
            sys.exit(1)
        config = ServerConfig.load(config_path)
    else:
        config = ServerConfig.from_env()
    if args.log_level:
        config = ServerConfig(**{**config.model_dump(), "log_level": args.log_level})

    configure_logging(config.log_level)

    server = NodeOmnibusServer(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
