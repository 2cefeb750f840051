"""
MCP Server Base Classes

Foundation for the catalog MCP server.
Implements JSON-RPC 2.0 over stdio transport, tool registration and
prompt registration.

Usage:
    from copilot_catalog._shared import MCPServer, MCPTool, MCPResult, MCPError
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from .json_rpc import error_response, is_notification, is_valid_request, success_response

# ─── Type Variables ──────────────────────────────────────────────────────────

TParams = TypeVar("TParams", bound=BaseModel)
TResult = TypeVar("TResult")

PROTOCOL_VERSION = "2024-11-05"

_logger = logging.getLogger("catalog.server")

# ─── Result & Error Types ────────────────────────────────────────────────────


@dataclass
class MCPResult(Generic[TResult]):
    """Result returned by a tool execution."""

    success: bool
    data: TResult | None = None


class MCPError(Exception):
    """Structured error for MCP tool failures."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


class ErrorCodes:
    """Standard MCP error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    # Custom codes for the catalog server
    SANDBOX_VIOLATION = -32001
    FILE_NOT_FOUND = -32003
    INVALID_CATEGORY = -32005


# ─── Generic Helpers ─────────────────────────────────────────────────────────


def _params_model_of(obj: object) -> type[BaseModel]:
    """Extract the pydantic params model from a Generic subclass."""
    for base in type(obj).__orig_bases__:  # type: ignore[attr-defined]
        if hasattr(base, "__args__") and len(base.__args__) >= 1:
            return base.__args__[0]
    raise TypeError(f"{type(obj).__name__} must specify Generic params type")


def _to_jsonable(data: Any) -> Any:
    """Dump pydantic models (and lists of them) into plain JSON values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True)
    if isinstance(data, list):
        return [_to_jsonable(item) for item in data]
    return data


# ─── Tool Base Class ─────────────────────────────────────────────────────────


class MCPTool(ABC, Generic[TParams, TResult]):
    """
    Abstract base class for MCP tools.

    Every tool must define:
    - name: the tool name advertised to the client
    - description: for the LLM
    - Params type: pydantic BaseModel for input validation
    - Result type: what execute() hands back in MCPResult.data
    - execute(): the implementation
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    async def execute(self, params: TParams) -> MCPResult[TResult]:
        """Execute the tool with validated parameters."""
        ...

    def get_params_model(self) -> type[BaseModel]:
        """Get the Pydantic model class for params validation."""
        return _params_model_of(self)

    def get_input_schema(self) -> dict[str, Any]:
        """Generate JSON Schema from the Pydantic params model."""
        return self.get_params_model().model_json_schema()

    def render(self, data: TResult | None) -> str:
        """Turn the result payload into the text block sent to the client."""
        return json.dumps(_to_jsonable(data), indent=2)

    def to_definition(self) -> dict[str, Any]:
        """Generate the tools/list entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.get_input_schema(),
        }


# ─── Prompt Base Class ───────────────────────────────────────────────────────


class PromptMessage(BaseModel):
    """A single message in a rendered prompt."""

    role: str = "user"
    text: str

    def to_wire(self) -> dict[str, Any]:
        return {"role": self.role, "content": {"type": "text", "text": self.text}}


class MCPPrompt(ABC, Generic[TParams]):
    """
    Abstract base class for MCP prompt templates.

    Arguments are declared with a pydantic model, exactly like tool params;
    the prompts/list manifest is derived from its fields.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def render(self, params: TParams) -> list[PromptMessage]:
        """Produce the prompt messages for validated arguments."""
        ...

    def get_params_model(self) -> type[BaseModel]:
        return _params_model_of(self)

    def to_definition(self) -> dict[str, Any]:
        """Generate the prompts/list entry for this prompt."""
        model = self.get_params_model()
        arguments = [
            {
                "name": field_name,
                "description": field.description or "",
                "required": field.is_required(),
            }
            for field_name, field in model.model_fields.items()
        ]
        return {"name": self.name, "description": self.description, "arguments": arguments}


# ─── MCP Server ──────────────────────────────────────────────────────────────


class MCPServer:
    """
    Base MCP Server.

    Registers tools and prompts, handles JSON-RPC over stdio, validates
    params, and dispatches calls.

    Usage:
        server = MCPServer(
            name="copilot-catalog",
            version="1.0.0",
            tools=[SearchInstructions(), LoadInstruction(), ListFiles()],
            prompts=[SearchPrompt()],
        )
        server.start()
    """

    def __init__(
        self,
        name: str,
        version: str,
        tools: list[MCPTool[Any, Any]],
        prompts: list[MCPPrompt[Any]] | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.tools: dict[str, MCPTool[Any, Any]] = {tool.name: tool for tool in tools}
        self.prompts: dict[str, MCPPrompt[Any]] = {
            prompt.name: prompt for prompt in (prompts or [])
        }

    def start(self) -> None:
        """Start the JSON-RPC listener on stdio (blocking)."""
        asyncio.run(self._run())

    async def _run(self) -> None:
        """Main event loop: read stdin, dispatch, write stdout."""
        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await asyncio.get_running_loop().connect_read_pipe(lambda: protocol, sys.stdin)

        while True:
            line = await reader.readline()
            if not line:
                break  # stdin closed

            response = await self.handle_line(line.decode("utf-8"))
            if response is not None:
                sys.stdout.write(json.dumps(response) + "\n")
                sys.stdout.flush()

    async def handle_line(self, line: str) -> dict[str, Any] | None:
        """Parse one framed message and produce the response, if any."""
        line = line.strip()
        if not line:
            return None

        try:
            request = json.loads(line)
        except json.JSONDecodeError:
            return error_response(None, ErrorCodes.PARSE_ERROR, "Invalid JSON")

        if not is_valid_request(request):
            request_id = request.get("id") if isinstance(request, dict) else None
            return error_response(request_id, ErrorCodes.INVALID_REQUEST, "Invalid request")

        response = await self._handle_request(request)
        if is_notification(request):
            return None
        return response

    def _build_init_result(self) -> dict[str, Any]:
        """Build the initialization result payload."""
        capabilities: dict[str, Any] = {"tools": {}}
        if self.prompts:
            capabilities["prompts"] = {}
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {"name": self.name, "version": self.version},
            "capabilities": capabilities,
        }

    async def _handle_request(self, request: dict[str, Any]) -> dict[str, Any] | None:
        """Dispatch a JSON-RPC request."""
        method = request["method"]
        request_id = request.get("id")

        if method == "initialize":
            return success_response(request_id, self._build_init_result())

        if method == "tools/call":
            return await self._handle_tool_call(request)

        if method == "tools/list":
            tool_defs = [tool.to_definition() for tool in self.tools.values()]
            return success_response(request_id, {"tools": tool_defs})

        if method == "prompts/list":
            prompt_defs = [prompt.to_definition() for prompt in self.prompts.values()]
            return success_response(request_id, {"prompts": prompt_defs})

        if method == "prompts/get":
            return self._handle_prompt_get(request)

        if method == "ping":
            return success_response(request_id, {})

        if method.startswith("notifications/"):
            return None

        return error_response(
            request_id, ErrorCodes.METHOD_NOT_FOUND, f"Unknown method: {method}"
        )

    async def _handle_tool_call(self, request: dict[str, Any]) -> dict[str, Any]:
        """Handle a tools/call request."""
        request_id = request.get("id")
        params = request.get("params") or {}
        tool_name = params.get("name", "")
        arguments = params.get("arguments") or {}
        if not isinstance(tool_name, str) or not isinstance(arguments, dict):
            return error_response(
                request_id,
                ErrorCodes.INVALID_PARAMS,
                "tools/call expects a string \"name\" and an object \"arguments\"",
            )

        tool = self.tools.get(tool_name)
        if not tool:
            return error_response(
                request_id, ErrorCodes.METHOD_NOT_FOUND, f"Unknown tool: {tool_name}"
            )

        # Validate params
        try:
            validated_params = tool.get_params_model()(**arguments)
        except ValidationError as e:
            return error_response(
                request_id, ErrorCodes.INVALID_PARAMS, f"Invalid parameters: {e}"
            )

        # Execute tool
        try:
            result = await tool.execute(validated_params)
            text = tool.render(result.data)
        except MCPError as e:
            _logger.info("Tool %s failed: %s", tool_name, e)
            return error_response(request_id, e.code, str(e))
        except Exception as e:
            _logger.exception("Tool %s raised an unexpected error", tool_name)
            return error_response(
                request_id, ErrorCodes.INTERNAL_ERROR, f"Internal error: {e!s}"
            )

        return success_response(
            request_id, {"content": [{"type": "text", "text": text}]}
        )

    def _handle_prompt_get(self, request: dict[str, Any]) -> dict[str, Any]:
        """Handle a prompts/get request."""
        request_id = request.get("id")
        params = request.get("params") or {}
        prompt_name = params.get("name", "")
        arguments = params.get("arguments") or {}
        if not isinstance(prompt_name, str) or not isinstance(arguments, dict):
            return error_response(
                request_id,
                ErrorCodes.INVALID_PARAMS,
                "prompts/get expects a string \"name\" and an object \"arguments\"",
            )

        prompt = self.prompts.get(prompt_name)
        if not prompt:
            return error_response(
                request_id, ErrorCodes.METHOD_NOT_FOUND, f"Unknown prompt: {prompt_name}"
            )

        try:
            validated_params = prompt.get_params_model()(**arguments)
        except ValidationError as e:
            return error_response(
                request_id, ErrorCodes.INVALID_PARAMS, f"Invalid arguments: {e}"
            )

        messages = prompt.render(validated_params)
        return success_response(
            request_id,
            {
                "description": prompt.description,
                "messages": [message.to_wire() for message in messages],
            },
        )
