"""Query language: lexing, parsing, analysis and fuzzy matching."""

from .analyzer import (
    DateFilter,
    DateOperator,
    FieldFilter,
    ParsedQuery,
    extract_date_filters,
    extract_field_filters,
    extract_fuzzy_terms,
    extract_terms,
    has_advanced_syntax,
    parse_date_filter,
    parse_query,
)
from .fuzzy import default_max_distance, fuzzy_match, levenshtein_distance
from .help import get_search_syntax_help
from .lexer import (
    DATE_FIELDS,
    SUPPORTED_FIELDS,
    SearchField,
    Token,
    TokenType,
    tokenize,
)
from .parser import ASTNode, NodeType, ParseError, QueryParser

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "SearchField",
    "SUPPORTED_FIELDS",
    "DATE_FIELDS",
    "QueryParser",
    "ASTNode",
    "NodeType",
    "ParseError",
    "parse_query",
    "ParsedQuery",
    "FieldFilter",
    "DateFilter",
    "DateOperator",
    "extract_terms",
    "extract_field_filters",
    "extract_date_filters",
    "extract_fuzzy_terms",
    "has_advanced_syntax",
    "parse_date_filter",
    "levenshtein_distance",
    "fuzzy_match",
    "default_max_distance",
    "get_search_syntax_help",
]
