"""
Shared models for the catalog MCP server.

- Category — the canonical content categories, in scan order
- EntryMetadata — what the extractor derives from one file
- SearchHit, FileSummary — tool output rows
- CategoryScan — outcome of sweeping one category directory
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class Category(str, Enum):
    """Canonical content categories. Declaration order is the search order."""

    INSTRUCTIONS = "instructions"
    PROMPTS = "prompts"
    COLLECTIONS = "collections"
    AGENTS = "agents"


# ─── Extracted Metadata ──────────────────────────────────────────────────────


class EntryMetadata(BaseModel):
    """Normalized metadata for one corpus file."""

    title: str = Field(description="Front-matter title, or a title derived from the filename")
    description: str = Field(default="", description="One-line summary, empty when absent")
    mode: str | None = Field(default=None, description="Auxiliary chat mode from front-matter")


# ─── Tool Output Rows ────────────────────────────────────────────────────────


class SearchHit(BaseModel):
    """A single search match."""

    category: Category
    filename: str
    title: str
    description: str
    mode: str | None = None


class FileSummary(BaseModel):
    """A single row of a category listing."""

    filename: str
    title: str
    description: str


# ─── Sweep Outcome ───────────────────────────────────────────────────────────


@dataclass
class CategoryScan:
    """Eligible files found in one category, or the reason the sweep failed."""

    category: Category
    files: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
