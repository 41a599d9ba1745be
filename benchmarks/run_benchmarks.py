"""Benchmark harness for docindex-mcp.

Measures: load time, search time, filter time, cache save/load time.
Outputs: Markdown table + JSON artifact.
"""

import json
import sys
import tempfile
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from docindex_mcp.parser import dump_search_index, parse_search_index
from docindex_mcp.storage import IndexCache, IndexStore

CATEGORIES = ["section", "page", "type"]


def generate_docs(count: int) -> dict:
    """Generate a synthetic search index with count records."""
    docs = []
    for i in range(count):
        page = f"Page {i // 20}"
        docs.append({
            "location": f"manual/page{i // 20}/#Symbol{i}",
            "page": page,
            "title": f"DeepEquilibriumNetworks.Symbol{i}",
            "text": f"Symbol{i}(model, solver; kwargs...)\n\nSolves a fixed point problem number {i}.",
            "category": CATEGORIES[i % len(CATEGORIES)],
        })
    return {"docs": docs}


def _time_ms(fn, repeat: int = 5) -> float:
    """Best-of-N wall time in milliseconds."""
    best = float("inf")
    for _ in range(repeat):
        start = time.perf_counter()
        fn()
        best = min(best, (time.perf_counter() - start) * 1000)
    return best


def run(sizes: list[int]) -> list[dict]:
    results = []
    for size in sizes:
        text = dump_search_index(IndexStore.load(generate_docs(size)))
        store = IndexStore.load(parse_search_index(text))

        with tempfile.TemporaryDirectory() as tmp:
            cache = IndexCache(base_path=tmp)
            save_ms = _time_ms(lambda: cache.save_index("bench", store))
            cache_load_ms = _time_ms(lambda: cache.load_index("bench"))

        results.append({
            "records": size,
            "parse_ms": round(_time_ms(lambda: IndexStore.load(parse_search_index(text))), 2),
            "search_ms": round(_time_ms(lambda: list(store.search("fixed point number 7"))), 2),
            "search_all_ms": round(_time_ms(lambda: list(store.search(""))), 2),
            "by_category_ms": round(_time_ms(lambda: list(store.by_category("type"))), 2),
            "by_page_ms": round(_time_ms(lambda: list(store.by_page("Page 3"))), 2),
            "cache_save_ms": round(save_ms, 2),
            "cache_load_ms": round(cache_load_ms, 2),
        })
    return results


def to_markdown(results: list[dict]) -> str:
    headers = list(results[0].keys())
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    for row in results:
        lines.append("| " + " | ".join(str(row[h]) for h in headers) + " |")
    return "\n".join(lines)


def main():
    results = run([100, 1_000, 10_000])
    print(to_markdown(results))

    out = Path(__file__).parent / "results.json"
    out.write_text(json.dumps(results, indent=2), encoding="utf-8")
    print(f"\nWrote {out}")


if __name__ == "__main__":
    main()
