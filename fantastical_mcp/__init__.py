"""Fantastical MCP server: configuration and shared helpers."""

__version__ = "1.0.0"
