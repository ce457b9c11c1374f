"""Relevance scoring for spec search matches.

Scores combine a per-field weight with bonuses for whole-word hits and
early positions, and a penalty for terms that appear everywhere. All
scores are integers between 1 and 100.
"""

import re
from collections.abc import Iterable

from .models import MatchField, SearchMatch

FIELD_WEIGHTS: dict[MatchField, int] = {
    MatchField.TITLE: 100,
    MatchField.NAME: 70,
    MatchField.TAGS: 70,
    MatchField.DESCRIPTION: 50,
    MatchField.CONTENT: 10,
}

EXACT_WORD_BONUS = 2.0
MAX_POSITION_BONUS = 1.5
POSITION_DECAY = 0.1
FREQUENCY_CAP = 3.0

# largest multiplier a field weight can receive
_MAX_MULTIPLIER = EXACT_WORD_BONUS * MAX_POSITION_BONUS

MIN_SCORE = 1
MAX_SCORE = 100


def clamp_score(score: float) -> int:
    """Round a raw score into the 1-100 range."""
    return max(MIN_SCORE, min(MAX_SCORE, round(score)))


def has_exact_word(text: str, terms: Iterable[str]) -> bool:
    """Check whether any term occurs in text as a whole word."""
    return any(
        re.search(rf"\b{re.escape(term)}\b", text, re.IGNORECASE) for term in terms
    )


def calculate_match_score(
    field: MatchField,
    text: str,
    terms: list[str],
    total_matches: int,
    position: int,
) -> int:
    """Calculate the relevance score for one match.

    Args:
        field: Field the match was found in
        text: Matched text
        terms: Lower-cased query terms
        total_matches: Number of candidates in the field (lines, tags)
        position: Zero-based index of this candidate in the field

    Returns:
        Score between 1 and 100
    """
    score = float(FIELD_WEIGHTS[field])

    if has_exact_word(text, terms):
        score *= EXACT_WORD_BONUS

    score *= max(1.0, MAX_POSITION_BONUS - position * POSITION_DECAY)

    score *= min(1.0, FREQUENCY_CAP / max(1, total_matches))

    return clamp_score(score / _MAX_MULTIPLIER)


def calculate_spec_score(matches: list[SearchMatch]) -> int:
    """Calculate the overall score of a document from its matches.

    Takes the best match per field and averages them weighted by field
    importance. Returns 0 when there are no matches.
    """
    if not matches:
        return 0

    best: dict[MatchField, int] = {}
    for match in matches:
        best[match.field] = max(best.get(match.field, 0), match.score)

    total_weight = sum(FIELD_WEIGHTS[field] for field in best)
    weighted = sum(score * FIELD_WEIGHTS[field] for field, score in best.items())

    return clamp_score(weighted / total_weight)


def contains_all_terms(text: str, terms: list[str]) -> bool:
    """Check if text contains every term (case-insensitive substring)."""
    text_lower = text.lower()
    return all(term in text_lower for term in terms)


def contains_any_term(text: str, terms: list[str]) -> bool:
    """Check if text contains at least one term (case-insensitive substring)."""
    text_lower = text.lower()
    return any(term in text_lower for term in terms)


def count_occurrences(text: str, terms: list[str]) -> int:
    """Count non-overlapping literal occurrences of each term."""
    text_lower = text.lower()
    return sum(text_lower.count(term.lower()) for term in terms if term)


def find_match_positions(text: str, terms: list[str]) -> list[tuple[int, int]]:
    """Find ``(start, end)`` spans of all term occurrences.

    Spans are sorted by start offset and overlapping spans are merged.
    """
    text_lower = text.lower()
    positions: list[tuple[int, int]] = []

    for term in terms:
        term_lower = term.lower()
        if not term_lower:
            continue
        index = text_lower.find(term_lower)
        while index != -1:
            positions.append((index, index + len(term_lower)))
            index = text_lower.find(term_lower, index + len(term_lower))

    positions.sort()

    merged: list[tuple[int, int]] = []
    for start, end in positions:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))

    return merged
