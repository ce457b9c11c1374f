"""Context snippets and match selection for search results."""

from .models import DEFAULT_CONTEXT_LENGTH, MatchField, SearchMatch
from .scoring import find_match_positions

ELLIPSIS = "..."
SENTENCE_BREAK = ". "
SENTENCE_SNAP_DISTANCE = 20
DEDUPLICATION_DISTANCE = 3

FIELD_ORDER = {
    MatchField.TITLE: 0,
    MatchField.NAME: 1,
    MatchField.TAGS: 2,
    MatchField.DESCRIPTION: 3,
    MatchField.CONTENT: 4,
}


def _first_match_position(line: str, terms: list[str]) -> int:
    line_lower = line.lower()
    positions = [line_lower.find(term) for term in terms if term]
    found = [pos for pos in positions if pos != -1]
    return min(found) if found else len(line)


def _wrap(line: str, start: int, end: int) -> str:
    snippet = line[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(line):
        snippet = snippet + ELLIPSIS
    return snippet


def extract_context(
    line: str, terms: list[str], context_length: int = DEFAULT_CONTEXT_LENGTH
) -> tuple[str, list[tuple[int, int]]]:
    """Cut a window around the first term occurrence in a line.

    Lines of at most ``2 * context_length`` characters are returned
    whole. Longer lines are cut to ``context_length`` characters either
    side of the first match and marked with ellipses.

    Returns:
        Tuple of (snippet, highlight spans within the snippet)
    """
    if len(line) <= context_length * 2:
        return line, find_match_positions(line, terms)

    first = _first_match_position(line, terms)
    start = max(0, first - context_length)
    end = min(len(line), first + context_length)

    snippet = _wrap(line, start, end)
    return snippet, find_match_positions(snippet, terms)


def extract_smart_context(
    line: str, terms: list[str], context_length: int = DEFAULT_CONTEXT_LENGTH
) -> tuple[str, list[tuple[int, int]]]:
    """Like :func:`extract_context`, but prefer sentence boundaries.

    When a sentence break lies just outside the window, the window is
    widened to it so the snippet starts or ends on a full sentence.
    """
    if len(line) <= context_length * 2:
        return extract_context(line, terms, context_length)

    first = _first_match_position(line, terms)
    start = max(0, first - context_length)
    end = min(len(line), first + context_length)

    previous_break = line.rfind(SENTENCE_BREAK, 0, start)
    if previous_break != -1 and start - previous_break < SENTENCE_SNAP_DISTANCE:
        start = previous_break + len(SENTENCE_BREAK)

    next_break = line.find(SENTENCE_BREAK, end)
    if next_break != -1 and next_break - end < SENTENCE_SNAP_DISTANCE:
        end = next_break + 1

    snippet = _wrap(line, start, end)
    return snippet, find_match_positions(snippet, terms)


def deduplicate_matches(
    matches: list[SearchMatch], min_distance: int = DEDUPLICATION_DISTANCE
) -> list[SearchMatch]:
    """Drop content matches that sit too close to a better one.

    Non-content matches are always kept. The result is ordered by field
    (title first, content last) and then by score.
    """
    if not matches:
        return matches

    ranked = sorted(matches, key=lambda m: (-m.score, m.line_number or 0))

    kept: list[SearchMatch] = []
    used_lines: set[int] = set()

    for match in ranked:
        if match.field != MatchField.CONTENT:
            kept.append(match)
            continue

        line = match.line_number or 0
        if any(
            neighbour in used_lines
            for neighbour in range(line - min_distance, line + min_distance + 1)
        ):
            continue

        kept.append(match)
        used_lines.add(line)

    kept.sort(key=lambda m: (FIELD_ORDER[m.field], -m.score))
    return kept


def limit_matches(matches: list[SearchMatch], max_matches: int) -> list[SearchMatch]:
    """Keep at most ``max_matches`` matches.

    Metadata matches (title, name, tags, description) take the first
    slots in field order; the best content matches fill the rest.
    """
    if len(matches) <= max_matches:
        return matches

    metadata = sorted(
        (m for m in matches if m.field != MatchField.CONTENT),
        key=lambda m: FIELD_ORDER[m.field],
    )
    content = sorted(
        (m for m in matches if m.field == MatchField.CONTENT),
        key=lambda m: m.score,
        reverse=True,
    )

    return (metadata + content)[:max_matches]
