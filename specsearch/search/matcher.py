"""Evaluate parsed query trees against documents."""

from .models import SearchableDocument
from .query.analyzer import parse_date_filter
from .query.fuzzy import fuzzy_match
from .query.lexer import SearchField
from .query.parser import ASTNode, NodeType


def _equals(actual: str | None, expected: str) -> bool:
    return actual is not None and actual.lower() == expected.lower()


def _contains(actual: str | None, expected: str) -> bool:
    return actual is not None and expected.lower() in actual.lower()


def matches_field(document: SearchableDocument, field: str, value: str) -> bool:
    """Check a single ``field:value`` filter against a document.

    Missing attributes never match. Unknown field names do not match
    either, though the lexer only produces supported ones.
    """
    try:
        search_field = SearchField(field)
    except ValueError:
        return False

    match search_field:
        case SearchField.STATUS:
            return _equals(document.status, value)
        case SearchField.PRIORITY:
            return _equals(document.priority, value)
        case SearchField.ASSIGNEE:
            return _equals(document.assignee, value)
        case SearchField.TITLE:
            return _contains(document.title, value)
        case SearchField.NAME:
            return _contains(document.name, value)
        case SearchField.TAG | SearchField.TAGS:
            return any(_equals(tag, value) for tag in document.tags or [])
        case SearchField.CREATED:
            return parse_date_filter(field, value).matches(document.created)
        case SearchField.UPDATED:
            return parse_date_filter(field, value).matches(document.updated)


class QueryMatcher:
    """Boolean predicate built from a query tree.

    The document's searchable text is computed once per evaluation and
    shared by every term, phrase and fuzzy leaf.
    """

    def __init__(self, ast: ASTNode):
        self.ast = ast

    def matches(self, document: SearchableDocument) -> bool:
        """Check whether a document satisfies the whole query."""
        return self._evaluate(self.ast, document, document.text)

    def _evaluate(self, node: ASTNode, document: SearchableDocument, text: str) -> bool:
        match node.type:
            case NodeType.AND:
                return self._evaluate_child(
                    node.left, document, text
                ) and self._evaluate_child(node.right, document, text)
            case NodeType.OR:
                return self._evaluate_child(
                    node.left, document, text
                ) or self._evaluate_child(node.right, document, text)
            case NodeType.NOT:
                return not self._evaluate_child(node.left, document, text)
            case NodeType.TERM | NodeType.PHRASE:
                return (node.value or "").lower() in text
            case NodeType.FIELD:
                return matches_field(document, node.field or "", node.value or "")
            case NodeType.FUZZY:
                return fuzzy_match(node.value or "", text)

    def _evaluate_child(
        self, node: ASTNode | None, document: SearchableDocument, text: str
    ) -> bool:
        if node is None:
            return False
        return self._evaluate(node, document, text)
