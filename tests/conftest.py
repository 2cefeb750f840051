"""
Shared fixtures for catalog server tests.

Builds a temporary corpus and points the corpus accessor at it for every
test, so tests never touch the real working directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from copilot_catalog import corpus

EXAMPLE_INSTRUCTIONS = (
    "---\n"
    'title: "Example Guide"\n'
    "description: Helpful notes\n"
    "---\n"
    "Body text mentioning widgets.\n"
)


@pytest.fixture()
def corpus_dir(tmp_path: Path) -> Path:
    """
    Create a sample corpus.

    Structure:
        tmp_path/
        ├── instructions/
        │   ├── example.instructions.md
        │   ├── python.instructions.md
        │   ├── broken.instructions.md   (no closing delimiter)
        │   └── notes.txt                (not eligible)
        ├── prompts/
        │   └── review-code.prompt.md
        └── collections/
            └── testing.collection.yml
    (agents/ is intentionally missing)
    """
    instructions = tmp_path / "instructions"
    instructions.mkdir()
    (instructions / "example.instructions.md").write_text(EXAMPLE_INSTRUCTIONS, encoding="utf-8")
    (instructions / "python.instructions.md").write_text(
        "---\n"
        "description: 'Python coding conventions'\n"
        "applyTo: '**/*.py'\n"
        "---\n"
        "# Python\n\n"
        "Follow PEP 8 and write type hints.\n",
        encoding="utf-8",
    )
    (instructions / "broken.instructions.md").write_text(
        "---\n"
        "title: Never Closed\n"
        "description: lost\n"
        "Talks about gadgets.\n",
        encoding="utf-8",
    )
    (instructions / "notes.txt").write_text("widgets everywhere\n", encoding="utf-8")

    prompts = tmp_path / "prompts"
    prompts.mkdir()
    (prompts / "review-code.prompt.md").write_text(
        "---\n"
        "mode: 'agent'\n"
        "description: \"Review a pull request\"\n"
        "---\n"
        "Review the current changes for bugs.\n",
        encoding="utf-8",
    )

    collections = tmp_path / "collections"
    collections.mkdir()
    (collections / "testing.collection.yml").write_text(
        "id: testing\n"
        'name: "Testing Automation"\n'
        "description: 'Tools for writing tests'\n"
        "items:\n"
        "  - path: prompts/review-code.prompt.md\n"
        "    kind: prompt\n",
        encoding="utf-8",
    )

    return tmp_path


@pytest.fixture(autouse=True)
def _use_corpus(corpus_dir: Path):  # type: ignore[no-untyped-def]
    """Point the corpus accessor at the sample corpus for every test."""
    corpus.set_corpus_root(corpus_dir)
    yield
    corpus.reset_corpus_root()
