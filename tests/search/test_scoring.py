"""Tests for relevance scoring."""

from specsearch.search.models import MatchField, SearchMatch
from specsearch.search.scoring import (
    FIELD_WEIGHTS,
    calculate_match_score,
    calculate_spec_score,
    clamp_score,
    contains_all_terms,
    contains_any_term,
    count_occurrences,
    find_match_positions,
    has_exact_word,
)


def make_match(field: MatchField, score: int) -> SearchMatch:
    return SearchMatch(
        field=field, text="x", score=score, highlights=[], occurrences=1
    )


class TestFieldWeights:
    """Test field importance."""

    def test_weight_order(self):
        """Title outranks name and tags, which outrank description and content."""
        assert FIELD_WEIGHTS[MatchField.TITLE] > FIELD_WEIGHTS[MatchField.NAME]
        assert FIELD_WEIGHTS[MatchField.NAME] == FIELD_WEIGHTS[MatchField.TAGS]
        assert FIELD_WEIGHTS[MatchField.TAGS] > FIELD_WEIGHTS[MatchField.DESCRIPTION]
        assert FIELD_WEIGHTS[MatchField.DESCRIPTION] > FIELD_WEIGHTS[MatchField.CONTENT]


class TestCalculateMatchScore:
    """Test calculate_match_score()."""

    def test_clamp(self):
        """Scores are rounded into 1..100."""
        assert clamp_score(0) == 1
        assert clamp_score(150) == 100
        assert clamp_score(42.4) == 42

    def test_exact_title_match_scores_full(self):
        """A whole-word title hit at the first position scores 100."""
        score = calculate_match_score(
            MatchField.TITLE, "OAuth2 Authentication Flow", ["authentication"], 1, 0
        )

        assert score == 100

    def test_content_match(self):
        """A whole-word content hit scores its field weight."""
        score = calculate_match_score(
            MatchField.CONTENT, "uses authentication", ["authentication"], 1, 0
        )

        assert score == 10

    def test_partial_word_scores_lower(self):
        """Substring hits inside a longer word lose the whole-word bonus."""
        exact = calculate_match_score(
            MatchField.CONTENT, "uses authentication", ["authentication"], 1, 0
        )
        partial = calculate_match_score(
            MatchField.CONTENT, "uses authentications", ["authentication"], 1, 0
        )

        assert partial == 5
        assert partial < exact

    def test_position_decay(self):
        """Later positions lose the early-position bonus."""
        first = calculate_match_score(MatchField.CONTENT, "token", ["token"], 1, 0)
        later = calculate_match_score(MatchField.CONTENT, "token", ["token"], 1, 5)

        assert later == 7
        assert later < first

    def test_frequency_penalty(self):
        """Fields with many candidates are scaled down."""
        score = calculate_match_score(
            MatchField.TITLE, "JWT Token Service", ["token"], 6, 0
        )

        assert score == 50

    def test_never_below_one(self):
        """Even heavily penalized matches keep a score of 1."""
        score = calculate_match_score(
            MatchField.CONTENT, "tokens", ["token"], 1000, 500
        )

        assert score == 1


class TestCalculateSpecScore:
    """Test calculate_spec_score()."""

    def test_no_matches(self):
        """No matches score zero."""
        assert calculate_spec_score([]) == 0

    def test_weighted_average_of_best_per_field(self):
        """Only the best match of each field counts, weighted by field."""
        matches = [
            make_match(MatchField.TITLE, 100),
            make_match(MatchField.CONTENT, 10),
            make_match(MatchField.CONTENT, 4),
        ]

        assert calculate_spec_score(matches) == 92

    def test_single_field(self):
        """A single field's best score is the spec score."""
        matches = [
            make_match(MatchField.DESCRIPTION, 30),
            make_match(MatchField.DESCRIPTION, 60),
        ]

        assert calculate_spec_score(matches) == 60


class TestTextHelpers:
    """Test substring helpers."""

    def test_has_exact_word(self):
        """Whole-word detection respects word boundaries."""
        assert has_exact_word("Authentication flow", ["flow"])
        assert not has_exact_word("Authentication flow", ["auth"])

    def test_has_exact_word_escapes_terms(self):
        """Terms are matched literally."""
        assert not has_exact_word("authentication flow", ["auth.*flow"])

    def test_contains_all_and_any(self):
        """Containment is case-insensitive substring matching."""
        assert contains_all_terms("JWT Token Service", ["jwt", "token"])
        assert not contains_all_terms("JWT Token Service", ["jwt", "oauth"])
        assert contains_any_term("JWT Token Service", ["oauth", "service"])
        assert not contains_any_term("JWT Token Service", ["oauth"])

    def test_count_occurrences(self):
        """Occurrences are counted case-insensitively."""
        assert count_occurrences("token Token TOKEN", ["token"]) == 3
        assert count_occurrences("token refresh", ["token", "refresh"]) == 2


class TestFindMatchPositions:
    """Test find_match_positions()."""

    def test_all_occurrences(self):
        """Every occurrence produces a span."""
        assert find_match_positions("Token refresh token", ["token"]) == [
            (0, 5),
            (14, 19),
        ]

    def test_sorted_across_terms(self):
        """Spans from different terms are sorted by offset."""
        assert find_match_positions("refresh the token", ["token", "refresh"]) == [
            (0, 7),
            (12, 17),
        ]

    def test_overlapping_spans_merge(self):
        """Overlapping spans become one."""
        assert find_match_positions("authentication", ["auth", "then"]) == [(0, 6)]

    def test_no_match(self):
        """Missing terms produce no spans."""
        assert find_match_positions("token", ["oauth", ""]) == []
