"""Logging setup.

ALL output goes to stderr so the process can also be wrapped by an MCP stdio
launcher without polluting its transport.
"""

import logging
import sys

logger = logging.getLogger("webflow_mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
