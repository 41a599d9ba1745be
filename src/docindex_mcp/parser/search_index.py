"""Read and write Documenter-style ``search_index.js`` files."""

import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .records import ParseError

if TYPE_CHECKING:
    from ..storage.index_store import IndexStore

logger = logging.getLogger(__name__)

# Name of the global the generator assigns the index to.
JS_VARIABLE = "documenterSearchIndex"

_JS_PREFIX = re.compile(r"^\s*(?:var|let|const)\s+[A-Za-z_$][\w$]*\s*=\s*")


def parse_search_index(text: str) -> dict:
    """Decode search index text into its structural form.

    Accepts plain JSON or the JavaScript wrapper
    ``var documenterSearchIndex = {...}`` (optionally ending in ``;``).

    Args:
        text: File contents.

    Returns:
        The decoded JSON value (normally ``{"docs": [...]}``).

    Raises:
        ParseError: If the payload is not valid JSON or nests too deeply.
    """
    body = text.lstrip("\ufeff")
    match = _JS_PREFIX.match(body)
    if match:
        body = body[match.end():]
    body = body.strip()
    if body.endswith(";"):
        body = body[:-1].rstrip()

    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid search index JSON: {e}") from e
    except RecursionError as e:
        raise ParseError("Search index JSON is nested too deeply") from e


def load_search_index(path: Union[str, Path]) -> "IndexStore":
    """Read a search index file from disk into an IndexStore."""
    from ..storage.index_store import IndexStore

    path = Path(path)
    data = path.read_bytes().decode("utf-8", errors="replace")
    store = IndexStore.load(parse_search_index(data))
    logger.debug("Loaded %d records from %s", len(store), path)
    return store


def dump_search_index(store: "IndexStore", wrap: bool = True) -> str:
    """Serialize a store back to search index text.

    With ``wrap`` the output matches the generator's JavaScript form,
    otherwise it is bare JSON.
    """
    payload = json.dumps(store.to_dict(), ensure_ascii=False)
    if wrap:
        return f"var {JS_VARIABLE} = {payload}\n"
    return payload
