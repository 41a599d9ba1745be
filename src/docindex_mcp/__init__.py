"""Load and search documentation search indexes, served over MCP."""

from .parser import ParseError, Record, load_search_index
from .storage import IndexStore

__version__ = "0.1.0"

__all__ = ["IndexStore", "ParseError", "Record", "load_search_index"]
