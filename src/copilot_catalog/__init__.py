"""MCP server for searching and loading a directory of Copilot customizations."""

__version__ = "1.0.0"
