"""Storage package for in-memory indexes and the on-disk cache."""

from .index_cache import IndexCache, INDEX_VERSION, validate_index_name
from .index_store import IndexStore, RecordView

__all__ = ["IndexCache", "IndexStore", "RecordView", "INDEX_VERSION", "validate_index_name"]
