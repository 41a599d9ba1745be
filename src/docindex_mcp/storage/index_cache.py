"""On-disk cache of imported search indexes, keyed by name."""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..parser.records import ParseError
from .index_store import IndexStore

logger = logging.getLogger(__name__)

# Bump this when the cache file schema changes in an incompatible way.
INDEX_VERSION = 1

_NAME_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9._-]*$")


def validate_index_name(name: str) -> str:
    """Reject names that could escape the cache directory."""
    if not name or not _NAME_RE.match(name):
        raise ValueError(f"Invalid index name: {name!r}")
    return name


class IndexCache:
    """Storage for imported search indexes."""

    def __init__(self, base_path: Optional[str] = None):
        """Initialize cache.

        Args:
            base_path: Base directory for storage. Defaults to ~/.doc-index/
        """
        if base_path:
            self.base_path = Path(base_path)
        else:
            self.base_path = Path.home() / ".doc-index"

        self.base_path.mkdir(parents=True, exist_ok=True)

    def _index_path(self, name: str) -> Path:
        """Path to index JSON file."""
        return self.base_path / f"{validate_index_name(name)}.json"

    def save_index(self, name: str, store: IndexStore, source: str = "") -> dict:
        """Save a store under name, replacing any previous copy.

        Args:
            name: Index name.
            store: Loaded records.
            source: Where the index was imported from.

        Returns:
            Summary dict (same shape as list_indexes entries).
        """
        index_path = self._index_path(name)
        data = {
            "name": name,
            "source": source,
            "imported_at": datetime.now().isoformat(),
            "record_count": len(store),
            "index_version": INDEX_VERSION,
            "docs": store.to_dict()["docs"],
        }

        # Write to temp then rename so readers never see a partial file
        tmp_path = index_path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(index_path)

        logger.debug("Saved index %s (%d records) to %s", name, len(store), index_path)
        return self._summary(data)

    def _read(self, index_path: Path) -> dict:
        """Read a cache file, rejecting anything that is not an index object.

        Raises:
            ParseError: If the file holds valid JSON of the wrong shape.
        """
        with open(index_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ParseError(f"Cache file is not an object: {index_path.name}")
        version = data.get("index_version", 1)
        if not isinstance(version, int) or isinstance(version, bool):
            raise ParseError(f"Cache file has invalid index_version: {version!r}")
        return data

    def load_index(self, name: str) -> Optional[IndexStore]:
        """Load index from storage. Rejects incompatible versions.

        Raises:
            ParseError: If the cache file is corrupt.
        """
        index_path = self._index_path(name)

        if not index_path.exists():
            return None

        data = self._read(index_path)

        stored_version = data.get("index_version", 1)
        if stored_version > INDEX_VERSION:
            logger.warning("Index %s has unsupported version %s", name, stored_version)
            return None

        return IndexStore.load(data)

    def list_indexes(self) -> list[dict]:
        """List all cached indexes."""
        indexes = []

        for index_file in sorted(self.base_path.glob("*.json")):
            try:
                indexes.append(self._summary(self._read(index_file)))
            except (OSError, ValueError, KeyError) as e:
                logger.warning("Skipping unreadable index file %s: %s", index_file, e)
                continue

        return indexes

    def delete_index(self, name: str) -> bool:
        """Delete a cached index."""
        index_path = self._index_path(name)
        if index_path.exists():
            index_path.unlink()
            return True
        return False

    def _summary(self, data: dict) -> dict:
        record_count = data.get("record_count")
        if record_count is None:
            docs = data["docs"]
            if not isinstance(docs, list):
                raise ParseError("Cache file 'docs' is not an array")
            record_count = len(docs)

        return {
            "name": data["name"],
            "source": data.get("source", ""),
            "imported_at": data["imported_at"],
            "record_count": record_count,
            "index_version": data.get("index_version", 1),
        }
