"""
JSON-RPC 2.0 Transport Utilities

Low-level JSON-RPC message handling for the catalog server.
Used by mcp_base.py; tool implementations never import it directly.
"""

from __future__ import annotations

from typing import Any

JSONRPC_VERSION = "2.0"


def success_response(request_id: str | int | None, result: Any) -> dict[str, Any]:
    """Create a JSON-RPC success response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(
    request_id: str | int | None,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    """Create a JSON-RPC error response."""
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


def is_notification(msg: dict[str, Any]) -> bool:
    """A request without an ``id`` expects no response."""
    return "id" not in msg


def is_valid_request(msg: Any) -> bool:
    """Validate that a parsed message is a JSON-RPC 2.0 request or notification."""
    if not isinstance(msg, dict):
        return False
    if msg.get("jsonrpc") != JSONRPC_VERSION or not isinstance(msg.get("method"), str):
        return False
    if "id" in msg and not isinstance(msg["id"], (str, int)):
        return False
    params = msg.get("params")
    return params is None or isinstance(params, dict)
