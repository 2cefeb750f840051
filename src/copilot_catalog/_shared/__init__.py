"""Shared MCP base classes for the catalog server."""

from .mcp_base import ErrorCodes, MCPError, MCPPrompt, MCPResult, MCPServer, MCPTool, PromptMessage

__all__ = ["MCPServer", "MCPTool", "MCPPrompt", "PromptMessage", "MCPResult", "MCPError", "ErrorCodes"]
