"""Parser package for search index records."""

from .records import ParseError, Record, parse_records, record_from_dict, record_to_dict
from .search_index import JS_VARIABLE, dump_search_index, load_search_index, parse_search_index

__all__ = [
    "ParseError",
    "Record",
    "parse_records",
    "record_from_dict",
    "record_to_dict",
    "JS_VARIABLE",
    "dump_search_index",
    "load_search_index",
    "parse_search_index",
]
