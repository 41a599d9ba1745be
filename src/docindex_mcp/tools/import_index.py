"""Import a search index file - check, parse, save."""

import logging
import re
import time
from pathlib import Path
from typing import Optional

from ..parser import ParseError, load_search_index
from ..security import should_exclude_file, DEFAULT_MAX_FILE_SIZE
from ..storage import IndexCache
from ._common import make_meta

logger = logging.getLogger(__name__)


def default_index_name(path: Path) -> str:
    """Derive an index name from the directory holding the file.

    Example: docs/build/search_index.js -> build
    """
    base = path.parent.name or path.stem
    name = re.sub(r"[^A-Za-z0-9._-]+", "-", base).strip(".-")
    return name or "docs"


def import_index(
    path: str,
    name: Optional[str] = None,
    storage_path: Optional[str] = None,
    root: Optional[str] = None,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> dict:
    """Parse a search index file and save it to the cache.

    Args:
        path: Path to ``search_index.js`` or a plain JSON index.
        name: Index name. Defaults to the parent directory name.
        storage_path: Custom storage path.
        root: Optional directory imports are confined to. Paths that
            resolve outside it, directly or through a symlink, are refused.
        max_file_size: Maximum accepted file size in bytes.

    Returns:
        Dict with import summary and _meta envelope.
    """
    start = time.perf_counter()

    file_path = Path(path).expanduser()
    allowed_root = Path(root).expanduser() if root else None
    reason = should_exclude_file(file_path, root=allowed_root, max_file_size=max_file_size)
    if reason:
        return {"success": False, "error": f"Cannot import {path}: {reason}"}

    name = name or default_index_name(file_path.resolve())

    try:
        store = load_search_index(file_path)
    except ParseError as e:
        return {"success": False, "error": f"Failed to parse {path}: {e}"}
    except OSError as e:
        return {"success": False, "error": f"Failed to read {path}: {e}"}

    try:
        summary = IndexCache(base_path=storage_path).save_index(
            name, store, source=str(file_path.resolve())
        )
    except ValueError as e:
        return {"success": False, "error": str(e)}

    logger.info("Imported %d records from %s as %s", len(store), file_path, name)
    elapsed = (time.perf_counter() - start) * 1000

    return {
        "success": True,
        "index": name,
        "record_count": summary["record_count"],
        "page_count": len(store.pages()),
        "categories": store.categories(),
        "_meta": make_meta(elapsed),
    }
