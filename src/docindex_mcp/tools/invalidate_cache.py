"""Invalidate cache / delete index tool."""

from typing import Optional

from ..storage import IndexCache


def invalidate_cache(
    index: str,
    storage_path: Optional[str] = None
) -> dict:
    """Delete a cached index.

    Use when the documentation was rebuilt and should be re-imported.

    Args:
        index: Cached index name.
        storage_path: Custom storage path.

    Returns:
        Dict with success status.
    """
    try:
        deleted = IndexCache(base_path=storage_path).delete_index(index)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    if deleted:
        return {
            "success": True,
            "index": index,
            "message": f"Cached index deleted: {index}",
        }
    else:
        return {
            "success": False,
            "error": f"No index found: {index}",
        }
