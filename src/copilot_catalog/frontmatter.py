"""
Metadata extraction for catalog files.

Markdown files carry a ``---`` delimited front-matter block of ``key: value``
lines. Collection files (YAML) are not parsed as YAML; their top-level
``name:`` and ``description:`` lines are picked out wherever they appear.

Extraction never fails: anything missing falls back to a default.
"""

from __future__ import annotations

import re

from copilot_catalog._shared.validation import get_file_kind
from copilot_catalog.catalog_types import EntryMetadata

# ─── Patterns ────────────────────────────────────────────────────────────────

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

_NAME_LINE_RE = re.compile(r"^name:\s*(.+)$", re.MULTILINE)
_DESCRIPTION_LINE_RE = re.compile(r"^description:\s*(.+)$", re.MULTILINE)

_TITLE_SUFFIX_RE = re.compile(
    r"\.(instructions|prompt|chatmode|agent|collection)\.(md|ya?ml)$",
    re.IGNORECASE,
)

_QUOTES = ('"', "'")


# ─── Helpers ─────────────────────────────────────────────────────────────────


def strip_quotes(value: str) -> str:
    """Remove one layer of matching single or double quotes around *value*."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_front_matter_lines(block: str) -> dict[str, str]:
    """Parse ``key: value`` lines; later keys win, colon-less lines are skipped."""
    fields: dict[str, str] = {}
    for line in block.splitlines():
        key, sep, value = line.partition(":")
        if not sep or not key:
            continue
        fields[key.strip()] = strip_quotes(value.strip())
    return fields


def split_front_matter(text: str) -> tuple[dict[str, str], str]:
    """
    Split *text* into its front-matter fields and the remaining body.

    Without a well-formed block (both delimiters present, at the very start)
    the fields are empty and the body is the whole text.
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text
    return parse_front_matter_lines(match.group(1)), text[match.end():]


def default_title(filename: str) -> str:
    """Drop the ``.<kind>.<ext>`` suffix, e.g. ``python.instructions.md`` -> ``python``."""
    return _TITLE_SUFFIX_RE.sub("", filename, count=1)


def _first_line_value(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    return strip_quotes(match.group(1).strip())


# ─── Extraction ──────────────────────────────────────────────────────────────


def extract(filename: str, text: str) -> EntryMetadata:
    """Derive the metadata record for *filename* from its raw *text*."""
    if get_file_kind(filename) == "yaml":
        return EntryMetadata(
            title=_first_line_value(_NAME_LINE_RE, text) or filename,
            description=_first_line_value(_DESCRIPTION_LINE_RE, text) or "",
        )

    fields, _body = split_front_matter(text)
    return EntryMetadata(
        title=fields.get("title") or default_title(filename),
        description=fields.get("description") or "",
        mode=fields.get("mode") or None,
    )
