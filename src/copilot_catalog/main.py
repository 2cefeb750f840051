"""
Copilot Catalog MCP Server — Entry Point

Registers the catalog tools and prompts and starts the JSON-RPC listener.
The server exposes a directory of curated Copilot customizations
(instructions, prompts, collections, agents) for search and retrieval.

Tools (3):
  search_instructions — keyword search across every category
  load_instruction    — full text of one file
  list_files          — files and metadata of one category

Prompts (1):
  search_prompt       — guided search-and-compare workflow

Configuration:
  --root / COPILOT_CATALOG_ROOT            corpus directory (default: cwd)
  --log-level / COPILOT_CATALOG_LOG_LEVEL  logging level (default: INFO)

Logs go to stderr; stdout carries the protocol.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from copilot_catalog import __version__
from copilot_catalog._shared.mcp_base import MCPServer
from copilot_catalog.corpus import ROOT_ENV_VAR, get_corpus_root, set_corpus_root
from copilot_catalog.prompts import SearchPrompt
from copilot_catalog.tools import ListFiles, LoadInstruction, SearchInstructions

SERVER_NAME = "copilot-catalog"
LOG_LEVEL_ENV_VAR = "COPILOT_CATALOG_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_logger = logging.getLogger("catalog")


def create_server() -> MCPServer:
    return MCPServer(
        name=SERVER_NAME,
        version=__version__,
        tools=[
            SearchInstructions(),
            LoadInstruction(),
            ListFiles(),
        ],
        prompts=[SearchPrompt(SERVER_NAME)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="Serve a directory of Copilot customizations over MCP (stdio).",
    )
    parser.add_argument(
        "--root",
        default=None,
        help=f"Corpus directory holding instructions/, prompts/, collections/, agents/ "
        f"(default: ${ROOT_ENV_VAR} or the current directory)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV_VAR, "INFO"),
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging verbosity (logs are written to stderr)",
    )
    args = parser.parse_args(argv)
    # argparse does not check choices against the default
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid ${LOG_LEVEL_ENV_VAR}: {args.log_level!r} "
            f"(choose from {', '.join(LOG_LEVELS)})"
        )
    return args


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(argv: list[str] | None = None) -> None:
    """Console-script entry point."""
    args = parse_args(argv)
    configure_logging(args.log_level)
    if args.root:
        set_corpus_root(args.root)

    _logger.info("%s MCP server running on stdio (corpus: %s)", SERVER_NAME, get_corpus_root())
    create_server().start()


if __name__ == "__main__":
    run()
