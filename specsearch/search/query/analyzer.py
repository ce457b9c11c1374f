"""Flatten parsed query trees into the projections the engines consume."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .lexer import DATE_FIELDS, Token, TokenType, tokenize
from .parser import ASTNode, NodeType, ParseError, QueryParser

logger = logging.getLogger(__name__)


class DateOperator(str, Enum):
    """Comparison operators for date filters."""

    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    EQ = "="
    RANGE = "range"


# longest prefixes first so ">=" is not read as ">"
_DATE_PREFIXES = (
    (">=", DateOperator.GTE),
    ("<=", DateOperator.LTE),
    (">", DateOperator.GT),
    ("<", DateOperator.LT),
)

_ADVANCED_TOKENS = frozenset(
    {
        TokenType.AND,
        TokenType.OR,
        TokenType.NOT,
        TokenType.FIELD,
        TokenType.FUZZY,
        TokenType.PHRASE,
        TokenType.LPAREN,
    }
)


@dataclass(frozen=True)
class FieldFilter:
    """A ``field:value`` restriction taken from the query."""

    field: str
    value: str
    exact: bool = True


@dataclass(frozen=True)
class DateFilter:
    """A comparison against a document's created/updated date."""

    field: str
    operator: DateOperator
    value: str
    end_value: str | None = None

    def matches(self, date: str | None) -> bool:
        """Check a document date against this filter.

        Only the ``YYYY-MM-DD`` prefix of the date takes part, compared as
        a string. Missing dates never match; an empty range bound is open.
        """
        if not date:
            return False
        day = str(date)[:10]

        match self.operator:
            case DateOperator.GT:
                return day > self.value
            case DateOperator.LT:
                return day < self.value
            case DateOperator.GTE:
                return day >= self.value
            case DateOperator.LTE:
                return day <= self.value
            case DateOperator.EQ:
                return day == self.value
            case DateOperator.RANGE:
                if self.value and day < self.value:
                    return False
                if self.end_value and day > self.end_value:
                    return False
                return True


@dataclass
class ParsedQuery:
    """A parsed query and the flat views derived from its tree."""

    ast: ASTNode | None
    original_query: str
    terms: list[str] = field(default_factory=list)
    fields: list[FieldFilter] = field(default_factory=list)
    date_filters: list[DateFilter] = field(default_factory=list)
    fuzzy_terms: list[str] = field(default_factory=list)
    has_advanced_syntax: bool = False
    errors: list[ParseError] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.ast is None

    def to_dict(self) -> dict:
        return {
            "ast": self.ast.to_string() if self.ast else None,
            "terms": list(self.terms),
            "fields": [
                {"field": f.field, "value": f.value, "exact": f.exact}
                for f in self.fields
            ],
            "dateFilters": [
                {
                    "field": d.field,
                    "operator": d.operator.value,
                    "value": d.value,
                    **({"endValue": d.end_value} if d.end_value is not None else {}),
                }
                for d in self.date_filters
            ],
            "fuzzyTerms": list(self.fuzzy_terms),
            "hasAdvancedSyntax": self.has_advanced_syntax,
            "originalQuery": self.original_query,
            "errors": [str(error) for error in self.errors],
        }


def extract_terms(ast: ASTNode | None) -> list[str]:
    """Collect TERM and PHRASE values, lower-cased, in traversal order."""
    if ast is None:
        return []
    return [
        node.value.lower()
        for node in ast.walk()
        if node.type in (NodeType.TERM, NodeType.PHRASE) and node.value
    ]


def extract_field_filters(ast: ASTNode | None) -> list[FieldFilter]:
    """Collect FIELD leaves as exact field filters."""
    if ast is None:
        return []
    return [
        FieldFilter(field=node.field, value=node.value, exact=True)
        for node in ast.walk()
        if node.type == NodeType.FIELD
        and node.field is not None
        and node.value is not None
    ]


def extract_fuzzy_terms(ast: ASTNode | None) -> list[str]:
    """Collect FUZZY values, lower-cased."""
    if ast is None:
        return []
    return [
        node.value.lower()
        for node in ast.walk()
        if node.type == NodeType.FUZZY and node.value
    ]


def parse_date_filter(field_name: str, value: str) -> DateFilter:
    """Interpret the value of a created/updated filter.

    Accepts ``start..end``, ``>=D``, ``<=D``, ``>D``, ``<D`` or a bare
    date for an exact match.
    """
    if ".." in value:
        start, end = value.split("..")[:2]
        return DateFilter(field_name, DateOperator.RANGE, start, end)

    for prefix, operator in _DATE_PREFIXES:
        if value.startswith(prefix):
            return DateFilter(field_name, operator, value[len(prefix) :])

    return DateFilter(field_name, DateOperator.EQ, value)


def extract_date_filters(field_filters: list[FieldFilter]) -> list[DateFilter]:
    """Derive date filters from field filters on date fields."""
    return [
        parse_date_filter(f.field, f.value)
        for f in field_filters
        if f.field in DATE_FIELDS
    ]


def has_advanced_syntax(tokens: list[Token]) -> bool:
    """Check whether the token stream uses anything beyond plain terms."""
    return any(token.type in _ADVANCED_TOKENS for token in tokens)


def parse_query(query: str) -> ParsedQuery:
    """Parse a search query string into a structured query.

    Never raises. Syntax problems are reported in ``errors`` alongside a
    best-effort tree; a blank query yields an empty ParsedQuery.

    Args:
        query: Raw query string from the user

    Returns:
        ParsedQuery with AST, terms, filters and fuzzy terms
    """
    trimmed = query.strip()
    if not trimmed:
        return ParsedQuery(ast=None, original_query=query)

    tokens = tokenize(trimmed)
    ast, errors = QueryParser(tokens).parse()

    fields = extract_field_filters(ast)
    parsed = ParsedQuery(
        ast=ast,
        original_query=query,
        terms=extract_terms(ast),
        fields=fields,
        date_filters=extract_date_filters(fields),
        fuzzy_terms=extract_fuzzy_terms(ast),
        has_advanced_syntax=has_advanced_syntax(tokens),
        errors=errors,
    )

    if ast is not None:
        logger.debug("Parsed %r as %s", trimmed, ast.to_string())
    return parsed
