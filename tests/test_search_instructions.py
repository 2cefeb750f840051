"""
Tests for search_instructions.

Verifies any-keyword matching over filename, description and body,
case-insensitivity, category ordering, and graceful degradation when
parts of the corpus cannot be read.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from copilot_catalog.catalog_types import Category
from copilot_catalog.tools.search_instructions import (
    Params,
    SearchInstructions,
    matches,
    search_catalog,
    tokenize,
)


def _names(hits) -> set[tuple[str, str]]:  # type: ignore[no-untyped-def]
    return {(hit.category.value, hit.filename) for hit in hits}


class TestHelpers:
    def test_tokenize_collapses_whitespace(self) -> None:
        assert tokenize("  Python\t\nDjango  ") == ["python", "django"]

    def test_tokenize_blank(self) -> None:
        assert tokenize("   ") == []

    def test_matches_any_token(self) -> None:
        assert matches(["nope", "body"], "a.md", "", "Some BODY text")
        assert not matches(["nope"], "a.md", "desc", "text")

    def test_matches_filename_and_description(self) -> None:
        assert matches(["react"], "react.instructions.md", "", "")
        assert matches(["hooks"], "a.md", "About Hooks", "")


class TestSearchInstructions:
    """Test the search_instructions tool execution."""

    @pytest.mark.asyncio
    async def test_search_finds_body_text(self) -> None:
        tool = SearchInstructions()
        result = await tool.execute(Params(keywords="widgets"))

        assert result.success is True
        assert result.data is not None
        assert len(result.data) == 1
        hit = result.data[0]
        assert hit.category == Category.INSTRUCTIONS
        assert hit.filename == "example.instructions.md"
        assert hit.title == "Example Guide"
        assert hit.description == "Helpful notes"
        assert hit.mode is None

    @pytest.mark.asyncio
    async def test_search_no_match(self) -> None:
        tool = SearchInstructions()
        result = await tool.execute(Params(keywords="nomatch"))

        assert result.success is True
        assert result.data == []

    def test_search_is_case_insensitive(self) -> None:
        assert _names(search_catalog("PYTHON")) == _names(search_catalog("python"))
        assert ("instructions", "python.instructions.md") in _names(search_catalog("PyThOn"))

    def test_search_is_any_keyword(self) -> None:
        widgets = _names(search_catalog("widgets"))
        gadgets = _names(search_catalog("gadgets"))
        both = _names(search_catalog("widgets gadgets"))

        assert widgets and gadgets
        assert both == widgets | gadgets

    def test_adding_tokens_never_shrinks_results(self) -> None:
        fewer = _names(search_catalog("review"))
        more = _names(search_catalog("review nomatch automation"))
        assert fewer <= more

    def test_malformed_front_matter_still_searchable(self) -> None:
        hits = search_catalog("gadgets")
        assert len(hits) == 1
        assert hits[0].filename == "broken.instructions.md"
        assert hits[0].title == "broken"
        assert hits[0].description == ""

    def test_prompt_mode_is_reported(self) -> None:
        hits = search_catalog("pull request")
        review = [h for h in hits if h.filename == "review-code.prompt.md"]
        assert len(review) == 1
        assert review[0].category == Category.PROMPTS
        assert review[0].mode == "agent"

    def test_collection_metadata(self) -> None:
        hits = search_catalog("automation")
        assert len(hits) == 1
        assert hits[0].category == Category.COLLECTIONS
        assert hits[0].title == "Testing Automation"
        assert hits[0].description == "Tools for writing tests"
        assert hits[0].mode is None

    def test_ineligible_files_are_ignored(self) -> None:
        assert all(hit.filename != "notes.txt" for hit in search_catalog("widgets"))

    def test_results_follow_category_order(self) -> None:
        order = list(Category)
        hits = search_catalog("md yml")
        positions = [order.index(hit.category) for hit in hits]

        assert len(hits) == 5
        assert positions == sorted(positions)

    def test_blank_keywords_match_nothing(self) -> None:
        assert search_catalog("  \t ") == []

    def test_empty_keywords_rejected_by_params(self) -> None:
        with pytest.raises(ValidationError):
            Params(keywords="")

    def test_missing_category_directory_is_skipped(self, corpus_dir: Path) -> None:
        assert not (corpus_dir / "agents").exists()
        assert len(search_catalog("widgets")) == 1

    def test_unreadable_category_is_skipped(self, corpus_dir: Path) -> None:
        (corpus_dir / "agents").write_text("not a directory")
        hits = search_catalog("widgets automation")
        assert _names(hits) == {
            ("instructions", "example.instructions.md"),
            ("collections", "testing.collection.yml"),
        }

    def test_unreadable_file_is_skipped(self, corpus_dir: Path) -> None:
        (corpus_dir / "prompts" / "latin1.prompt.md").write_bytes(b"review caf\xe9\n")
        hits = search_catalog("review")
        assert ("prompts", "review-code.prompt.md") in _names(hits)
        assert all(hit.filename != "latin1.prompt.md" for hit in hits)

    def test_sees_corpus_changes_between_calls(self, corpus_dir: Path) -> None:
        assert search_catalog("zeppelin") == []
        (corpus_dir / "instructions" / "zeppelin.instructions.md").write_text("Airships.\n")
        assert len(search_catalog("zeppelin")) == 1

    @pytest.mark.asyncio
    async def test_render_omits_absent_mode(self) -> None:
        tool = SearchInstructions()
        result = await tool.execute(Params(keywords="widgets review"))
        rows = json.loads(tool.render(result.data))

        by_name = {row["filename"]: row for row in rows}
        assert by_name["example.instructions.md"] == {
            "category": "instructions",
            "filename": "example.instructions.md",
            "title": "Example Guide",
            "description": "Helpful notes",
        }
        assert by_name["review-code.prompt.md"]["mode"] == "agent"
