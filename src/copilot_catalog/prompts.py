"""
Prompt templates served over prompts/list and prompts/get.

search_prompt walks an agent through searching the catalog, comparing the
hits with the customizations already present in the user's repository, and
offering to save the missing ones unmodified.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from copilot_catalog._shared.mcp_base import MCPPrompt, PromptMessage

KEYWORD_PLACEHOLDER = "{keyword}"

SEARCH_TEMPLATE = """\
Please search all the collections, instructions, prompts, and agents that are related to the search keyword, "<<keyword>>".

Here's the process to follow:

1. Use the '<<server>>' MCP server.
2. Search all collections, instructions, prompts, and agents for the keyword provided.
3. DO NOT load any collections, instructions, prompts, or agents from the MCP server until the user asks to do so.
4. Scan local collections, instructions, prompts, and agents files in .github/collections, .github/instructions, .github/prompts, and .github/agents directories respectively.
5. Compare existing collections, instructions, prompts, and agents with the search results.
6. Provide a structured response in a table format that includes the already exists, mode (collections, instructions, prompts or agents), filename, title and description of each item found. Here's an example of the table format:

| Exists | Mode         | Filename                          | Title         | Description   |
|--------|--------------|-----------------------------------|---------------|---------------|
| ✅     | collections  | awesome-collection.collection.yml | My Collection | Description 1 |
| ❌     | instructions | instruction1.instructions.md      | Instruction 1 | Description 1 |
| ✅     | prompts      | prompt1.prompt.md                 | Prompt 1      | Description 1 |
| ❌     | agents       | agent1.agent.md                   | Agent 1       | Description 1 |

✅ indicates that the item already exists in this repository, while ❌ indicates that it does not.

7. If any item doesn't exist in the repository, ask which item the user wants to save.
8. If the user wants to save it, save the item in the appropriate directory (.github/collections, .github/instructions, .github/prompts, or .github/agents) using the mode and filename, with NO modification."""


def render_search_prompt(keyword: str | None, server_name: str) -> str:
    """Fill the search template; a missing keyword leaves the placeholder in place."""
    return SEARCH_TEMPLATE.replace("<<server>>", server_name).replace(
        "<<keyword>>", keyword or KEYWORD_PLACEHOLDER
    )


class SearchPromptParams(BaseModel):
    """Arguments for search_prompt."""

    keyword: str | None = Field(default=None, description="The keyword to search for")


class SearchPrompt(MCPPrompt[SearchPromptParams]):
    """Prompt template for searching the catalog with a keyword."""

    name = "search_prompt"
    description = "Get a prompt template for searching copilot instructions with specific keywords"

    def __init__(self, server_name: str = "copilot-catalog") -> None:
        self.server_name = server_name

    def render(self, params: SearchPromptParams) -> list[PromptMessage]:
        return [PromptMessage(text=render_search_prompt(params.keyword, self.server_name))]
