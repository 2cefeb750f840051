"""Catalog tools: one module per tool."""

from .list_files import ListFiles
from .load_instruction import LoadInstruction
from .search_instructions import SearchInstructions

__all__ = ["SearchInstructions", "LoadInstruction", "ListFiles"]
