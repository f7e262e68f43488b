#!/usr/bin/env python3
"""
Live scoreboard server.
Keeps a ranked board of in-progress contests in memory and serves it
over a TCP command socket and a web interface.
"""

import argparse
import asyncio
import logging
import os
from pathlib import Path

from live_scoreboard.config import ScoreboardConfig
from live_scoreboard.system import ScoreboardSystem


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the server."""
    parser = argparse.ArgumentParser(
        description="Live scoreboard server with TCP socket and web interfaces",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--socket-port",
        type=int,
        default=None,
        help="TCP socket server port (env: SOCKET_PORT)"
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=None,
        help="Web interface port (env: WEB_PORT)"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind servers to (env: HOST)"
    )
    parser.add_argument(
        "--config",
        default=os.getenv("CONFIG_PATH"),
        help="Configuration file path (env: CONFIG_PATH)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=ScoreboardConfig.LOG_LEVELS,
        default=None,
        help="Logging level (env: LOG_LEVEL)"
    )
    return parser


async def main():
    """Main function with command line interface."""

    args = build_parser().parse_args()

    if args.config:
        config_path = Path(args.config)
        if config_path.exists() and not config_path.is_file():
            print(f"Error: {args.config} exists but is not a file")
            return

    config = ScoreboardConfig(args.config)

    # Command line flags win over file and environment settings
    if args.socket_port is not None:
        config.config["server"]["socket_port"] = args.socket_port
    if args.web_port is not None:
        config.config["server"]["web_port"] = args.web_port
    if args.host is not None:
        config.config["server"]["host"] = args.host
    if args.log_level is not None:
        config.config["logging"]["level"] = args.log_level

    logging.basicConfig(
        level=config.get("logging", "level"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    system = ScoreboardSystem(config)

    try:
        await system.run_both_servers()
    except asyncio.CancelledError:
        print("\nServer interrupted")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nServer interrupted")
