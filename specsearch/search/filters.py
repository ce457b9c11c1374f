"""Metadata pre-filters applied before a query runs."""

from .models import SearchableDocument


def _same(actual: str | None, expected: str) -> bool:
    return actual is not None and actual.lower() == expected.lower()


def filter_documents(
    documents: list[SearchableDocument],
    status: str | None = None,
    tags: list[str] | None = None,
    priority: str | None = None,
    assignee: str | None = None,
) -> list[SearchableDocument]:
    """Keep documents matching every given metadata criterion.

    Comparisons are case-insensitive. All listed tags must be present.
    """
    wanted_tags = {tag.lower() for tag in tags or []}

    def keep(document: SearchableDocument) -> bool:
        if status and not _same(document.status, status):
            return False
        if priority and not _same(document.priority, priority):
            return False
        if assignee and not _same(document.assignee, assignee):
            return False
        if wanted_tags:
            present = {tag.lower() for tag in document.tags or []}
            if not wanted_tags <= present:
                return False
        return True

    return [document for document in documents if keep(document)]
