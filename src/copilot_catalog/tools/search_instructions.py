"""
search_instructions — Keyword search across every catalog category.

Re-scans the corpus on each call. A file matches when any keyword occurs
(case-insensitively) in its filename, its description or its full text.
Results follow category order, then directory order; there is no ranking.

Never fails: unreadable categories and files are logged and skipped.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from copilot_catalog._shared.mcp_base import MCPError, MCPResult, MCPTool
from copilot_catalog.catalog_types import Category, SearchHit
from copilot_catalog.corpus import category_dir, read_file, scan_category
from copilot_catalog.frontmatter import extract

_logger = logging.getLogger("catalog.search")

# ─── Params ──────────────────────────────────────────────────────────────────


class Params(BaseModel):
    """Parameters for search_instructions."""

    keywords: str = Field(
        min_length=1,
        description="Keywords to search for in titles, descriptions, and content",
    )


# ─── Tool ─────────────────────────────────────────────────────────────────────


class SearchInstructions(MCPTool[Params, list[SearchHit]]):
    """Keyword search over instructions, prompts, collections and agents."""

    name = "search_instructions"
    description = (
        "Search for GitHub Copilot customizations (instructions, prompts, "
        "collections, agents) based on keywords. Returns a list of matching "
        "items with their type, filename, title, and description."
    )

    async def execute(self, params: Params) -> MCPResult[list[SearchHit]]:
        """Return every catalog entry matching any of *params.keywords*."""
        return MCPResult(success=True, data=search_catalog(params.keywords))


# ─── Helpers ──────────────────────────────────────────────────────────────────


def tokenize(keywords: str) -> list[str]:
    """Lower-case whitespace-separated tokens; blank input gives no tokens."""
    return keywords.lower().split()


def matches(tokens: list[str], filename: str, description: str, text: str) -> bool:
    """True when any token is a substring of the combined haystack."""
    haystack = f"{filename} {description} {text}".lower()
    return any(token in haystack for token in tokens)


def search_catalog(keywords: str) -> list[SearchHit]:
    """Sweep every category in declared order and collect the matching files."""
    tokens = tokenize(keywords)
    if not tokens:
        return []

    hits: list[SearchHit] = []
    for category in Category:
        scan = scan_category(category)
        if not scan.ok:
            continue
        hits.extend(_search_files(category, scan.files, tokens))

    _logger.debug("Search %r matched %d file(s)", keywords, len(hits))
    return hits


def _search_files(category: Category, files: list[str], tokens: list[str]) -> list[SearchHit]:
    hits: list[SearchHit] = []
    for filename in files:
        try:
            text = read_file(category, filename)
        except MCPError as e:
            _logger.warning("Skipping %s: %s", category_dir(category) / filename, e)
            continue

        metadata = extract(filename, text)
        if not matches(tokens, filename, metadata.description, text):
            continue

        hits.append(
            SearchHit(
                category=category,
                filename=filename,
                title=metadata.title,
                description=metadata.description,
                mode=metadata.mode,
            )
        )
    return hits
