"""List cached search indexes."""

import time
from typing import Optional

from ..storage import IndexCache
from ._common import make_meta


def list_indexes(storage_path: Optional[str] = None) -> dict:
    """List all cached indexes.

    Returns:
        Dict with count, list of indexes, and _meta envelope.
    """
    start = time.perf_counter()
    indexes = IndexCache(base_path=storage_path).list_indexes()
    elapsed = (time.perf_counter() - start) * 1000

    return {
        "count": len(indexes),
        "indexes": indexes,
        "_meta": make_meta(elapsed),
    }
