"""Get high-level index outline."""

import time
from collections import Counter
from typing import Optional

from ._common import make_meta, open_index


def get_index_outline(
    index: str,
    storage_path: Optional[str] = None,
) -> dict:
    """Get a high-level overview of a cached index.

    Returns: pages with fragment counts, category breakdown and a
    list of documented types. Lighter than pulling pages one by one.

    Args:
        index: Cached index name.
        storage_path: Custom storage path.

    Returns:
        Dict with index outline and _meta envelope.
    """
    start = time.perf_counter()

    store = open_index(index, storage_path)
    if isinstance(store, dict):
        return store

    page_counts: Counter = Counter(r.page for r in store)

    elapsed = (time.perf_counter() - start) * 1000

    return {
        "index": index,
        "record_count": len(store),
        "pages": {p: page_counts[p] for p in store.pages()},
        "categories": store.categories(),
        "types": [r.title for r in store.by_category("type")],
        "_meta": make_meta(elapsed),
    }
