"""Full-text search across a cached search index."""

import time
from typing import Optional

from ._common import make_meta, open_index, truncate

SNIPPET_LENGTH = 300


def search_docs(
    index: str,
    query: str,
    category: Optional[str] = None,
    page: Optional[str] = None,
    max_results: int = 20,
    storage_path: Optional[str] = None,
) -> dict:
    """Search documentation fragments by title or text.

    Args:
        index: Cached index name.
        query: Text to search for (case-insensitive substring match).
            An empty query matches every fragment.
        category: Optional exact category filter (e.g., "type").
        page: Optional exact page filter.
        max_results: Maximum number of fragments to return.
        storage_path: Custom storage path.

    Returns:
        Dict with matching fragments in document order, plus _meta envelope.
    """
    start = time.perf_counter()

    store = open_index(index, storage_path)
    if isinstance(store, dict):
        return store

    results = []
    total = 0
    for record in store.search(query):
        if category is not None and record.category != category:
            continue
        if page is not None and record.page != page:
            continue
        total += 1
        if len(results) < max_results:
            results.append({
                "location": record.location,
                "page": record.page,
                "title": record.title,
                "category": record.category,
                "text": truncate(record.text, SNIPPET_LENGTH),
            })

    elapsed = (time.perf_counter() - start) * 1000

    return {
        "index": index,
        "query": query,
        "result_count": len(results),
        "results": results,
        "_meta": make_meta(
            elapsed,
            total_records=len(store),
            total_matches=total,
            truncated=total > max_results,
        ),
    }
