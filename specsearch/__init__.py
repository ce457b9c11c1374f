"""Relevance-ranked search over markdown spec documents."""

from .search import (
    SearchableDocument,
    SearchOptions,
    SearchOutput,
    advanced_search_specs,
    fuzzy_match,
    get_search_syntax_help,
    levenshtein_distance,
    parse_query,
    search_specs,
    tokenize,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SearchableDocument",
    "SearchOptions",
    "SearchOutput",
    "tokenize",
    "parse_query",
    "search_specs",
    "advanced_search_specs",
    "fuzzy_match",
    "levenshtein_distance",
    "get_search_syntax_help",
]
