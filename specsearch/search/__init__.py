"""Search functionality for spec documents.

This module provides a small query language and a relevance-ranked
matching engine over in-memory spec documents.

Main components:
- tokenize / parse_query: query lexing, parsing and analysis
- search_specs: plain multi-term search with cross-field AND
- advanced_search_specs: boolean, field, date, phrase and fuzzy search
- fuzzy_match / levenshtein_distance: typo-tolerant matching
"""

from .advanced import advanced_search_specs
from .engine import collect_matches, search_specs, spec_contains_all_terms
from .filters import filter_documents
from .highlighting import (
    deduplicate_matches,
    extract_context,
    extract_smart_context,
    limit_matches,
)
from .matcher import QueryMatcher, matches_field
from .models import (
    DEFAULT_CONTEXT_LENGTH,
    DEFAULT_MAX_MATCHES_PER_SPEC,
    MatchField,
    SearchableDocument,
    SearchMatch,
    SearchMetadata,
    SearchOptions,
    SearchOutput,
    SearchResult,
)
from .query import (
    SUPPORTED_FIELDS,
    ASTNode,
    DateFilter,
    DateOperator,
    FieldFilter,
    NodeType,
    ParsedQuery,
    ParseError,
    SearchField,
    Token,
    TokenType,
    fuzzy_match,
    get_search_syntax_help,
    levenshtein_distance,
    parse_query,
    tokenize,
)
from .scoring import (
    FIELD_WEIGHTS,
    calculate_match_score,
    calculate_spec_score,
    contains_all_terms,
    contains_any_term,
    count_occurrences,
    find_match_positions,
)

__all__ = [
    # Engines
    "search_specs",
    "advanced_search_specs",
    "spec_contains_all_terms",
    "collect_matches",
    "filter_documents",
    "QueryMatcher",
    "matches_field",
    # Models
    "SearchableDocument",
    "SearchMatch",
    "SearchResult",
    "SearchMetadata",
    "SearchOutput",
    "SearchOptions",
    "MatchField",
    "DEFAULT_CONTEXT_LENGTH",
    "DEFAULT_MAX_MATCHES_PER_SPEC",
    # Query language
    "tokenize",
    "parse_query",
    "Token",
    "TokenType",
    "ASTNode",
    "NodeType",
    "ParsedQuery",
    "ParseError",
    "FieldFilter",
    "DateFilter",
    "DateOperator",
    "SearchField",
    "SUPPORTED_FIELDS",
    "fuzzy_match",
    "levenshtein_distance",
    "get_search_syntax_help",
    # Scoring and snippets
    "FIELD_WEIGHTS",
    "calculate_match_score",
    "calculate_spec_score",
    "contains_all_terms",
    "contains_any_term",
    "count_occurrences",
    "find_match_positions",
    "extract_context",
    "extract_smart_context",
    "deduplicate_matches",
    "limit_matches",
]
