"""Helpers shared by the tool functions."""

from typing import Optional, Union

from ..storage import IndexCache, IndexStore


def make_meta(timing_ms: float, **kwargs) -> dict:
    """Build a _meta envelope dict."""
    meta = {"timing_ms": round(timing_ms, 1)}
    meta.update(kwargs)
    return meta


def open_index(index: str, storage_path: Optional[str] = None) -> Union[IndexStore, dict]:
    """Load a cached index by name, or return an error dict."""
    try:
        store = IndexCache(base_path=storage_path).load_index(index)
    except ValueError as e:
        return {"error": str(e)}
    if store is None:
        return {"error": f"Index not found: {index}"}
    return store


def truncate(text: str, limit: int) -> str:
    """Shorten text to limit characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."
