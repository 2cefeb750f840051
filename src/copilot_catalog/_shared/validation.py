"""
Shared Validation Utilities

Path sandboxing and file-kind helpers used by the corpus accessor.
"""

from __future__ import annotations

import os
from pathlib import Path

from .mcp_base import ErrorCodes, MCPError

# ─── Sandbox Validation ──────────────────────────────────────────────────────


def is_within(target: Path, root: Path) -> bool:
    """Return True when *target* resolves to *root* or somewhere below it."""
    resolved = target.resolve()
    allowed = root.resolve()
    return resolved == allowed or str(resolved).startswith(str(allowed) + os.sep)


def assert_sandboxed(target: Path, root: Path) -> None:
    """
    Assert that a path stays inside *root* once symlinks and ``..`` are resolved.
    Raises MCPError with SANDBOX_VIOLATION code if not.
    """
    if not is_within(target, root):
        raise MCPError(
            ErrorCodes.SANDBOX_VIOLATION,
            f'Path "{target}" is outside the corpus directory "{root}"',
        )


# ─── File Kind Helpers ───────────────────────────────────────────────────────

FILE_KINDS: dict[str, tuple[str, ...]] = {
    "markdown": (".md",),
    "yaml": (".yml", ".yaml"),
}

ELIGIBLE_EXTENSIONS: frozenset[str] = frozenset(
    ext for extensions in FILE_KINDS.values() for ext in extensions
)


def get_file_kind(filename: str) -> str:
    """Get the kind of a file by its extension ("other" when not indexable)."""
    ext = Path(filename).suffix.lower()
    for kind, extensions in FILE_KINDS.items():
        if ext in extensions:
            return kind
    return "other"


def is_eligible(filename: str) -> bool:
    """Check whether a filename carries one of the indexable extensions."""
    return Path(filename).suffix.lower() in ELIGIBLE_EXTENSIONS
