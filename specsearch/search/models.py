"""Data models for spec search using msgspec for serialization."""

from __future__ import annotations

from enum import Enum
from typing import Any

import msgspec

DEFAULT_MAX_MATCHES_PER_SPEC = 5
DEFAULT_CONTEXT_LENGTH = 80


class MatchField(str, Enum):
    """Document fields that produce search matches."""

    TITLE = "title"
    NAME = "name"
    TAGS = "tags"
    DESCRIPTION = "description"
    CONTENT = "content"


class SearchableDocument(msgspec.Struct, frozen=True, kw_only=True):
    """A spec document prepared for searching.

    Metadata fields are precomputed by the caller from the document's
    frontmatter. Dates are ISO ``YYYY-MM-DD`` strings.
    """

    path: str
    name: str
    status: str | None = None
    priority: str | None = None
    tags: list[str] | None = None
    title: str | None = None
    description: str | None = None
    content: str | None = None
    created: str | None = None
    updated: str | None = None
    assignee: str | None = None

    @property
    def text(self) -> str:
        """All searchable text joined into one lower-cased string."""
        parts = [
            self.title or "",
            self.name or "",
            " ".join(self.tags or []),
            self.description or "",
            self.content or "",
        ]
        return " ".join(parts).lower()


class SearchOptions(msgspec.Struct, kw_only=True, rename="camel"):
    """Tuning knobs shared by simple and advanced search."""

    max_matches_per_spec: int = DEFAULT_MAX_MATCHES_PER_SPEC
    context_length: int = DEFAULT_CONTEXT_LENGTH

    def __post_init__(self):
        if self.max_matches_per_spec < 1:
            raise ValueError("max_matches_per_spec must be at least 1")
        if self.context_length < 1:
            raise ValueError("context_length must be at least 1")


class SearchMatch(msgspec.Struct, kw_only=True, rename="camel", omit_defaults=True):
    """A single highlighted match inside one field of a document."""

    field: MatchField
    text: str
    score: int
    highlights: list[tuple[int, int]]
    occurrences: int
    line_number: int | None = None


class SearchResult(msgspec.Struct, kw_only=True, rename="camel"):
    """A matching document with its ranked matches."""

    document: SearchableDocument
    score: int
    total_matches: int
    matches: list[SearchMatch] = msgspec.field(default_factory=list)


class SearchMetadata(msgspec.Struct, kw_only=True, rename="camel"):
    """Statistics about one search call."""

    query: str
    total_results: int
    search_time: float
    specs_searched: int


class SearchOutput(msgspec.Struct, kw_only=True, rename="camel"):
    """Search results sorted by relevance plus call metadata."""

    results: list[SearchResult]
    metadata: SearchMetadata

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def top_result(self) -> SearchResult | None:
        return self.results[0] if self.results else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary with camelCase keys."""
        return msgspec.to_builtins(self)

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)
