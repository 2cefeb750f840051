"""
list_files — List every eligible file in one category with its metadata.

Order follows the directory listing; callers that need alphabetical output
sort it themselves. A category whose directory is missing lists as empty.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from copilot_catalog._shared.mcp_base import ErrorCodes, MCPError, MCPResult, MCPTool
from copilot_catalog.catalog_types import FileSummary
from copilot_catalog.corpus import ACCEPTED_NAMES, read_file, require_category, scan_category
from copilot_catalog.frontmatter import extract

_logger = logging.getLogger("catalog.list")

# ─── Params ──────────────────────────────────────────────────────────────────


class Params(BaseModel):
    """Parameters for list_files."""

    mode: str = Field(
        description="The type of content to list",
        json_schema_extra={"enum": list(ACCEPTED_NAMES)},
    )


# ─── Tool ─────────────────────────────────────────────────────────────────────


class ListFiles(MCPTool[Params, list[FileSummary]]):
    """List the files available in one category."""

    name = "list_files"
    description = (
        "List all available files for a specific mode "
        "(instructions, prompts, collections, or agents)."
    )

    async def execute(self, params: Params) -> MCPResult[list[FileSummary]]:
        return MCPResult(success=True, data=list_category(params.mode))


# ─── Helpers ──────────────────────────────────────────────────────────────────


def list_category(mode: str) -> list[FileSummary]:
    """Summarise each eligible file of *mode* (title/description, no chat mode)."""
    category = require_category(mode)
    scan = scan_category(category)
    if not scan.ok:
        raise MCPError(
            ErrorCodes.FILE_NOT_FOUND,
            f"Failed to list files from {mode}: {scan.error}",
        )

    summaries: list[FileSummary] = []
    for filename in scan.files:
        try:
            text = read_file(category, filename)
        except MCPError as e:
            _logger.warning("Skipping %s in %s: %s", filename, mode, e)
            continue

        metadata = extract(filename, text)
        summaries.append(
            FileSummary(
                filename=filename,
                title=metadata.title,
                description=metadata.description,
            )
        )
    return summaries
