"""Get every fragment of one documentation page."""

import time
from typing import Optional

from ..parser import record_to_dict
from ._common import make_meta, open_index


def get_page(
    index: str,
    page: str,
    storage_path: Optional[str] = None,
) -> dict:
    """Get all fragments for a page, full text, in document order.

    Args:
        index: Cached index name.
        page: Exact page name (e.g., "DEQ Layers").
        storage_path: Custom storage path.

    Returns:
        Dict with the page's fragments and _meta envelope.
    """
    start = time.perf_counter()

    store = open_index(index, storage_path)
    if isinstance(store, dict):
        return store

    records = [record_to_dict(r) for r in store.by_page(page)]
    if not records:
        return {"error": f"Page not found: {page}", "pages": store.pages()}

    elapsed = (time.perf_counter() - start) * 1000

    return {
        "index": index,
        "page": page,
        "record_count": len(records),
        "records": records,
        "_meta": make_meta(elapsed),
    }
