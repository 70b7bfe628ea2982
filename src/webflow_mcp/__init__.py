"""Webflow Designer MCP relay."""

__version__ = "2.0.0"
