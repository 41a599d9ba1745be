"""Tests for record decoding and IndexStore queries."""

import pytest

from docindex_mcp.parser import ParseError, Record, parse_records, record_to_dict
from docindex_mcp.storage import IndexStore, RecordView


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

TWO_RECORDS = {
    "docs": [
        {"location": "a", "page": "P1", "title": "T1", "text": "hello world", "category": "section"},
        {"location": "b", "page": "P1", "title": "T2", "text": "", "category": "page"},
    ]
}


def _doc(location: str, page: str = "Home", title: str = "", text: str = "", category: str = "section") -> dict:
    return {"location": location, "page": page, "title": title, "text": text, "category": category}


def _locations(records) -> list[str]:
    return [r.location for r in records]


@pytest.fixture
def store() -> IndexStore:
    return IndexStore.load({"docs": [
        _doc("index/#Overview", "Home", "Overview", "Deep Equilibrium Networks in Lux"),
        _doc("index/", "Home", "Home", "", "page"),
        _doc("manual/deqs/", "DEQ Layers", "DEQ Layers", "DeepEquilibriumNetwork", "page"),
        _doc("manual/deqs/#DEQs.DeepEquilibriumNetwork", "DEQ Layers",
             "DEQs.DeepEquilibriumNetwork", "Solves for a fixed point.", "type"),
        _doc("manual/nlsolve/#DEQs.BroydenSolver", "Non Linear Solvers",
             "DEQs.BroydenSolver", "Broyden solver for discrete deqs.", "type"),
        _doc("manual/misc/", "Miscellaneous", "Miscellaneous", "", "page"),
    ]})


# ===========================================================================
# 1. Loading
# ===========================================================================


class TestLoad:
    def test_load_wrapped_docs(self):
        store = IndexStore.load(TWO_RECORDS)
        assert len(store) == 2
        assert store.records[0] == Record("a", "P1", "section", title="T1", text="hello world")

    def test_load_bare_list(self):
        store = IndexStore.load(TWO_RECORDS["docs"])
        assert store == IndexStore.load(TWO_RECORDS)

    def test_load_empty(self):
        store = IndexStore.load({"docs": []})
        assert len(store) == 0
        assert list(store.search("")) == []

    def test_title_and_text_default_to_empty(self):
        store = IndexStore.load([{"location": "x", "page": "P", "category": "page"}])
        assert store.records[0].title == ""
        assert store.records[0].text == ""

    def test_extra_keys_ignored(self):
        doc = _doc("x")
        doc["score"] = 3
        store = IndexStore.load([doc])
        assert store.records[0] == Record("x", "Home", "section")

    def test_unknown_category_accepted(self):
        store = IndexStore.load([_doc("x", category="example")])
        assert list(store.by_category("example"))[0].location == "x"

    def test_duplicates_preserved(self):
        store = IndexStore.load([_doc("x"), _doc("x")])
        assert len(store) == 2


class TestParseErrors:
    @pytest.mark.parametrize("field", ["location", "page", "category"])
    def test_missing_required_field(self, field):
        doc = _doc("x")
        del doc[field]
        with pytest.raises(ParseError) as exc:
            IndexStore.load([_doc("ok"), doc])
        assert exc.value.index == 1
        assert exc.value.field == field

    def test_null_required_field(self):
        doc = _doc("x")
        doc["page"] = None
        with pytest.raises(ParseError):
            IndexStore.load([doc])

    def test_wrong_value_type(self):
        doc = _doc("x")
        doc["text"] = 42
        with pytest.raises(ParseError) as exc:
            IndexStore.load([doc])
        assert exc.value.field == "text"

    def test_record_not_an_object(self):
        with pytest.raises(ParseError):
            IndexStore.load([_doc("x"), "not a record"])

    def test_docs_not_a_list(self):
        with pytest.raises(ParseError):
            IndexStore.load({"docs": {"location": "x"}})

    def test_missing_docs_key(self):
        with pytest.raises(ParseError):
            IndexStore.load({"records": []})

    def test_scalar_source(self):
        with pytest.raises(ParseError):
            IndexStore.load("docs")

    def test_failed_load_produces_no_store(self):
        """A bad record anywhere fails the whole load."""
        bad = TWO_RECORDS["docs"] + [{"page": "P2", "category": "page"}]
        store = None
        with pytest.raises(ParseError):
            store = IndexStore.load({"docs": bad})
        assert store is None

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_records([{}])


# ===========================================================================
# 2. Queries
# ===========================================================================


class TestSearch:
    def test_example_hello(self):
        store = IndexStore.load(TWO_RECORDS)
        assert _locations(store.search("hello")) == ["a"]

    def test_example_by_page(self):
        store = IndexStore.load(TWO_RECORDS)
        assert _locations(store.by_page("P1")) == ["a", "b"]

    def test_empty_query_returns_all_in_order(self, store):
        assert list(store.search("")) == list(store.records)

    def test_case_insensitive(self, store):
        assert list(store.search("DEQ")) == list(store.search("deq"))
        assert list(store.search("DeQ")) == list(store.search("deq"))

    def test_matches_title_or_text(self, store):
        assert _locations(store.search("broyden")) == ["manual/nlsolve/#DEQs.BroydenSolver"]
        assert _locations(store.search("fixed point")) == ["manual/deqs/#DEQs.DeepEquilibriumNetwork"]

    def test_location_not_searched(self, store):
        assert list(store.search("nlsolve")) == []

    def test_preserves_order(self, store):
        assert _locations(store.search("deq")) == [
            "manual/deqs/",
            "manual/deqs/#DEQs.DeepEquilibriumNetwork",
            "manual/nlsolve/#DEQs.BroydenSolver",
        ]

    def test_full_unicode_case_folding(self):
        store = IndexStore.load([_doc("a", title="Straße"), _doc("b", text="STRASSE")])
        assert _locations(store.search("strasse")) == ["a", "b"]
        assert _locations(store.search("STRAßE")) == ["a", "b"]

    def test_no_match_is_empty(self, store):
        view = store.search("transformer")
        assert list(view) == []
        assert not view


class TestFilters:
    def test_by_category_type(self, store):
        types = list(store.by_category("type"))
        assert [r.category for r in types] == ["type", "type"]
        assert _locations(types) == [
            "manual/deqs/#DEQs.DeepEquilibriumNetwork",
            "manual/nlsolve/#DEQs.BroydenSolver",
        ]

    def test_by_category_idempotent(self, store):
        assert list(store.by_category("type")) == list(store.by_category("type"))

    def test_by_category_exact(self, store):
        assert list(store.by_category("Type")) == []

    def test_by_page(self, store):
        assert _locations(store.by_page("Home")) == ["index/#Overview", "index/"]

    def test_by_page_unknown(self, store):
        assert list(store.by_page("Nope")) == []

    def test_pages_first_seen_order(self, store):
        assert store.pages() == ["Home", "DEQ Layers", "Non Linear Solvers", "Miscellaneous"]

    def test_categories(self, store):
        assert store.categories() == {"section": 1, "page": 3, "type": 2}


class TestRecordView:
    def test_view_is_restartable(self, store):
        view = store.search("deq")
        assert isinstance(view, RecordView)
        first = list(view)
        second = list(view)
        assert first == second
        assert len(first) == 3

    def test_view_is_lazy(self):
        calls = []
        records = (Record("a", "P", "page"), Record("b", "P", "page"))

        def predicate(r):
            calls.append(r.location)
            return True

        view = RecordView(records, predicate)
        assert calls == []
        assert next(iter(view)).location == "a"
        assert calls == ["a"]


# ===========================================================================
# 3. Immutability & round-trip
# ===========================================================================


class TestRoundTrip:
    def test_to_dict_round_trip(self, store):
        assert IndexStore.load(store.to_dict()) == store

    def test_to_dict_shape(self):
        assert IndexStore.load(TWO_RECORDS).to_dict() == TWO_RECORDS

    def test_record_to_dict(self):
        record = Record("a", "P1", "section", title="T1", text="hello world")
        assert record_to_dict(record) == TWO_RECORDS["docs"][0]

    def test_records_are_frozen(self, store):
        with pytest.raises(AttributeError):
            store.records[0].title = "changed"

    def test_record_requires_category(self):
        with pytest.raises(TypeError):
            Record("a", "P1")

    def test_records_is_tuple(self, store):
        assert isinstance(store.records, tuple)

    def test_no_mutation_api(self, store):
        for attr in ("append", "add", "remove", "clear"):
            assert not hasattr(store, attr)
