"""Plain multi-term search over spec documents.

Every whitespace-separated query term must appear somewhere in a
document, though not necessarily in the same field. Matching documents
are scored by field importance and returned with highlighted snippets.
"""

import logging
import time

from .highlighting import (
    deduplicate_matches,
    extract_smart_context,
    limit_matches,
)
from .models import (
    MatchField,
    SearchableDocument,
    SearchMatch,
    SearchMetadata,
    SearchOptions,
    SearchOutput,
    SearchResult,
)
from .scoring import (
    calculate_match_score,
    calculate_spec_score,
    contains_any_term,
    count_occurrences,
    find_match_positions,
)

logger = logging.getLogger(__name__)


def split_terms(query: str) -> list[str]:
    """Split a query on whitespace into lower-cased terms."""
    return query.lower().split()


def spec_contains_all_terms(document: SearchableDocument, terms: list[str]) -> bool:
    """Check that every term occurs somewhere across the document's fields.

    Returns False for an empty term list.
    """
    if not terms:
        return False
    text = document.text
    return all(term in text for term in terms)


def _field_match(
    field: MatchField,
    text: str,
    terms: list[str],
    total: int = 1,
    position: int = 0,
) -> SearchMatch:
    return SearchMatch(
        field=field,
        text=text,
        score=calculate_match_score(field, text, terms, total, position),
        highlights=find_match_positions(text, terms),
        occurrences=count_occurrences(text, terms),
    )


def _content_matches(
    content: str, terms: list[str], context_length: int
) -> list[SearchMatch]:
    lines = content.split("\n")
    matches = []

    for index, line in enumerate(lines):
        if not contains_any_term(line, terms):
            continue

        snippet, highlights = extract_smart_context(line, terms, context_length)
        matches.append(
            SearchMatch(
                field=MatchField.CONTENT,
                text=snippet,
                score=calculate_match_score(
                    MatchField.CONTENT, line, terms, len(lines), index
                ),
                highlights=highlights,
                occurrences=count_occurrences(line, terms),
                line_number=index + 1,
            )
        )

    return matches


def collect_matches(
    document: SearchableDocument, terms: list[str], context_length: int
) -> list[SearchMatch]:
    """Find every field of a document that contains any of the terms.

    Partial field matches are included so that a document matched across
    several fields still shows context for each term.
    """
    if not terms:
        return []

    matches: list[SearchMatch] = []

    if document.title and contains_any_term(document.title, terms):
        matches.append(_field_match(MatchField.TITLE, document.title, terms))

    if document.name and contains_any_term(document.name, terms):
        matches.append(_field_match(MatchField.NAME, document.name, terms))

    tags = document.tags or []
    for index, tag in enumerate(tags):
        if contains_any_term(tag, terms):
            matches.append(
                _field_match(MatchField.TAGS, tag, terms, len(tags), index)
            )

    if document.description and contains_any_term(document.description, terms):
        matches.append(
            _field_match(MatchField.DESCRIPTION, document.description, terms)
        )

    if document.content:
        matches.extend(_content_matches(document.content, terms, context_length))

    return matches


def build_result(
    document: SearchableDocument,
    matches: list[SearchMatch],
    options: SearchOptions,
) -> SearchResult:
    """Rank, de-duplicate and cap a document's matches into a result."""
    selected = deduplicate_matches(matches)
    selected = limit_matches(selected, options.max_matches_per_spec)

    return SearchResult(
        document=document,
        score=calculate_spec_score(selected),
        total_matches=len(matches),
        matches=selected,
    )


def build_output(
    query: str,
    results: list[SearchResult],
    documents_searched: int,
    started: float,
) -> SearchOutput:
    """Sort results by score and attach call metadata."""
    # stable sort keeps input order among equal scores
    results.sort(key=lambda r: r.score, reverse=True)

    elapsed = (time.perf_counter() - started) * 1000
    logger.debug(
        "Query %r matched %d of %d specs in %.2fms",
        query,
        len(results),
        documents_searched,
        elapsed,
    )

    return SearchOutput(
        results=results,
        metadata=SearchMetadata(
            query=query,
            total_results=len(results),
            search_time=round(elapsed, 3),
            specs_searched=documents_searched,
        ),
    )


def search_specs(
    query: str,
    documents: list[SearchableDocument],
    options: SearchOptions | None = None,
) -> SearchOutput:
    """Search documents for all terms of a plain query.

    No boolean syntax is interpreted here: terms are implicitly ANDed and
    matched as literal, case-insensitive substrings.

    Args:
        query: Search query string, echoed verbatim in the metadata
        documents: Documents to search
        options: Match cap and snippet length

    Returns:
        SearchOutput with results sorted by descending score
    """
    started = time.perf_counter()
    options = options or SearchOptions()

    terms = split_terms(query)
    if not terms:
        return build_output(query, [], len(documents), started)

    results = []
    for document in documents:
        if not spec_contains_all_terms(document, terms):
            continue

        matches = collect_matches(document, terms, options.context_length)
        if matches:
            results.append(build_result(document, matches, options))

    return build_output(query, results, len(documents), started)
