"""Search with the full query language.

Boolean operators, field and date filters, phrases and fuzzy terms are
evaluated per document. Documents that pass are scored with the same
field-weighted logic as plain search, using only the query's plain terms,
so rankings stay comparable between the two modes.
"""

import logging
import time

from .engine import build_output, build_result, collect_matches, search_specs
from .matcher import QueryMatcher
from .models import SearchableDocument, SearchOptions, SearchOutput, SearchResult
from .query.analyzer import parse_query

logger = logging.getLogger(__name__)

# score for a document that passed a query without any plain terms
FILTER_ONLY_SCORE = 100
# score for a document that passed without any of its plain terms
NO_TEXT_MATCH_SCORE = 1


def advanced_search_specs(
    query: str,
    documents: list[SearchableDocument],
    options: SearchOptions | None = None,
) -> SearchOutput:
    """Search documents with boolean, field, date and fuzzy syntax.

    A query without any advanced syntax is delegated to
    :func:`~specsearch.search.engine.search_specs` unchanged. Syntax
    errors are logged and the best-effort tree is used; they never fail
    the search.

    Args:
        query: Search query string
        documents: Documents to search
        options: Match cap and snippet length

    Returns:
        SearchOutput with results sorted by descending score
    """
    started = time.perf_counter()
    options = options or SearchOptions()

    parsed = parse_query(query)
    if not parsed.has_advanced_syntax:
        return search_specs(query, documents, options)

    for error in parsed.errors:
        logger.warning("Query %r: %s", query, error)

    if parsed.ast is None:
        return build_output(query, [], len(documents), started)

    matcher = QueryMatcher(parsed.ast)
    terms = parsed.terms

    results = []
    for document in documents:
        if not matcher.matches(document):
            continue

        matches = collect_matches(document, terms, options.context_length)
        if matches:
            results.append(build_result(document, matches, options))
        else:
            results.append(
                SearchResult(
                    document=document,
                    score=NO_TEXT_MATCH_SCORE if terms else FILTER_ONLY_SCORE,
                    total_matches=0,
                    matches=[],
                )
            )

    return build_output(query, results, len(documents), started)
