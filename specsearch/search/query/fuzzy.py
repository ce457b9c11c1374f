"""Edit-distance based approximate matching."""


def levenshtein_distance(a: str, b: str) -> int:
    """Number of single-character insertions, deletions or substitutions
    needed to turn ``a`` into ``b``. Case-sensitive.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(
                        previous[j - 1] + 1,  # substitution
                        current[j - 1] + 1,  # insertion
                        previous[j] + 1,  # deletion
                    )
                )
        previous = current

    return previous[-1]


def default_max_distance(term: str) -> int:
    """Edit threshold for a term: 1 for terms up to 4 characters, else 2."""
    return 1 if len(term) <= 4 else 2


def fuzzy_match(term: str, text: str, max_distance: int | None = None) -> bool:
    """Check whether any word of ``text`` is within edit distance of ``term``.

    Args:
        term: The search term
        text: Text to search in, split on whitespace
        max_distance: Maximum edit distance (default depends on term length)

    Returns:
        True if some word is close enough to the term
    """
    term_lower = term.lower()
    threshold = (
        max_distance if max_distance is not None else default_max_distance(term_lower)
    )

    return any(
        levenshtein_distance(term_lower, word) <= threshold
        for word in text.lower().split()
    )
