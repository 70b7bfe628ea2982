#!/usr/bin/env python3
"""
Webflow Designer MCP relay server.

Serves MCP clients (WebSocket at /mcp, inspector SSE at /sse) and the
Designer extension's polling bridge from one HTTP process.

Usage:
    webflow-designer-mcp [--host=0.0.0.0] [--port=8787] [--log-level=INFO]
    PORT=4000 python -m webflow_mcp
"""

import argparse
from typing import List, Optional

import uvicorn

from .app import create_app
from .config import Settings
from .log import configure_logging, logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Webflow Designer MCP relay server")
    parser.add_argument("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: $PORT or 8787)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
    # parse_known_args so wrapper launchers can pass through extra flags
    args, _unknown = parser.parse_known_args(argv)
    return args


def build_settings(args: argparse.Namespace) -> Settings:
    settings = Settings()
    if args.host is not None:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.log_level is not None:
        settings.log_level = args.log_level
    return settings


def main(argv: Optional[List[str]] = None) -> None:
    settings = build_settings(parse_args(argv))
    configure_logging(settings.log_level)
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
