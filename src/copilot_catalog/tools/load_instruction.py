"""
load_instruction — Return the full text of one catalog file.

The text is returned exactly as stored; nothing is parsed or trimmed.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from copilot_catalog._shared.mcp_base import ErrorCodes, MCPError, MCPResult, MCPTool
from copilot_catalog.corpus import ACCEPTED_NAMES, read_file, require_category

# ─── Params ──────────────────────────────────────────────────────────────────


class Params(BaseModel):
    """Parameters for load_instruction."""

    mode: str = Field(
        description="The type of content to load",
        json_schema_extra={"enum": list(ACCEPTED_NAMES)},
    )
    filename: str = Field(
        description="The filename to load (e.g., 'python-django.instructions.md')",
    )


# ─── Tool ─────────────────────────────────────────────────────────────────────


class LoadInstruction(MCPTool[Params, str]):
    """Load one instruction, prompt, collection or agent file."""

    name = "load_instruction"
    description = (
        "Load the complete content of a specific instruction, prompt, "
        "collection, or agent file from the catalog."
    )

    async def execute(self, params: Params) -> MCPResult[str]:
        return MCPResult(success=True, data=load_file(params.mode, params.filename))

    def render(self, data: str | None) -> str:
        return data or ""


# ─── Helpers ──────────────────────────────────────────────────────────────────


def load_file(mode: str, filename: str) -> str:
    """Resolve *mode* and read *filename* from it, with context on failure."""
    category = require_category(mode)
    try:
        return read_file(category, filename)
    except MCPError as e:
        if e.code != ErrorCodes.FILE_NOT_FOUND:
            raise
        raise MCPError(e.code, f"Failed to load file {filename} from {mode}: {e}") from e
