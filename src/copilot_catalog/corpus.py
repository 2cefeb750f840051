"""
Corpus accessor — category resolution and all filesystem reads.

The corpus root holds one subdirectory per canonical category. Nothing here
writes to it, and nothing is cached: every call goes back to disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Final, Mapping

from copilot_catalog._shared.mcp_base import ErrorCodes, MCPError
from copilot_catalog._shared.validation import assert_sandboxed, is_eligible
from copilot_catalog.catalog_types import Category, CategoryScan

_logger = logging.getLogger("catalog.corpus")

# ─── Constants ────────────────────────────────────────────────────────────────

ROOT_ENV_VAR: Final[str] = "COPILOT_CATALOG_ROOT"

# Renamed categories kept for older clients.
CATEGORY_ALIASES: Final[Mapping[str, Category]] = MappingProxyType(
    {"chatmodes": Category.COLLECTIONS}
)

ACCEPTED_NAMES: Final[tuple[str, ...]] = (
    *(category.value for category in Category),
    *CATEGORY_ALIASES,
)

# ─── Corpus root ─────────────────────────────────────────────────────────────

_root: Path | None = None


def get_corpus_root() -> Path:
    """Return the configured corpus root, falling back to the env var or cwd."""
    if _root is not None:
        return _root
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root)
    return Path.cwd()


def set_corpus_root(path: str | Path) -> None:
    """Point the accessor at a corpus directory (CLI flag, tests)."""
    global _root
    _root = Path(path)


def reset_corpus_root() -> None:
    """Forget any explicit root so the env var / cwd apply again."""
    global _root
    _root = None


# ─── Categories ──────────────────────────────────────────────────────────────


def resolve_category(name: str) -> Category | None:
    """Map a category name or legacy alias to its canonical category."""
    alias = CATEGORY_ALIASES.get(name)
    if alias is not None:
        return alias
    try:
        return Category(name)
    except ValueError:
        return None


def require_category(name: str) -> Category:
    """Like resolve_category, but unknown names raise an INVALID_CATEGORY error."""
    category = resolve_category(name)
    if category is None:
        raise MCPError(
            ErrorCodes.INVALID_CATEGORY,
            f"Invalid mode: {name}. Must be one of: {', '.join(ACCEPTED_NAMES)}",
        )
    return category


def category_dir(category: Category) -> Path:
    return get_corpus_root() / category.value


# ─── Listing ─────────────────────────────────────────────────────────────────


def list_eligible_files(category: Category) -> list[str]:
    """
    Return eligible filenames in directory order (not sorted).

    A category whose directory does not exist is simply empty; any other
    OSError (permissions, not a directory) propagates.
    """
    directory = category_dir(category)
    try:
        with os.scandir(directory) as entries:
            return [
                entry.name
                for entry in entries
                if entry.is_file() and is_eligible(entry.name)
            ]
    except FileNotFoundError:
        _logger.debug("Category directory %s does not exist", directory)
        return []


def scan_category(category: Category) -> CategoryScan:
    """Non-raising sweep of one category, for callers that aggregate partial results."""
    try:
        return CategoryScan(category=category, files=list_eligible_files(category))
    except OSError as e:
        _logger.warning("Error reading directory %s: %s", category_dir(category), e)
        return CategoryScan(category=category, error=str(e))


# ─── Reading ─────────────────────────────────────────────────────────────────


def read_text_exact(path: Path) -> str:
    """Read UTF-8 text with line endings left untouched."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def read_file(category: Category, filename: str) -> str:
    """
    Return the exact text of *filename* inside *category*.

    Raises MCPError (FILE_NOT_FOUND) when the file is missing, is not a
    regular file or cannot be decoded, and SANDBOX_VIOLATION when the name
    escapes the category directory.
    """
    directory = category_dir(category)
    path = directory / filename
    try:
        assert_sandboxed(path, directory)
    except ValueError as e:
        # e.g. an embedded NUL byte, which no file on disk can have
        raise MCPError(
            ErrorCodes.FILE_NOT_FOUND,
            f"File not found: {filename!r} in {category.value}",
        ) from e

    if not path.is_file():
        raise MCPError(
            ErrorCodes.FILE_NOT_FOUND,
            f"File not found: {filename} in {category.value}",
        )

    try:
        return read_text_exact(path)
    except (OSError, UnicodeDecodeError) as e:
        raise MCPError(
            ErrorCodes.FILE_NOT_FOUND,
            f"Could not read {filename} in {category.value}: {e}",
        ) from e
