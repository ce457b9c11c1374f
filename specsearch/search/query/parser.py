"""Recursive-descent parser building a boolean AST from query tokens."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .lexer import Token, TokenType


class NodeType(Enum):
    """Types of AST nodes."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    TERM = "TERM"
    PHRASE = "PHRASE"
    FIELD = "FIELD"
    FUZZY = "FUZZY"


@dataclass(frozen=True)
class ASTNode:
    """Node of a parsed query tree.

    AND/OR nodes use ``left`` and ``right``; NOT uses only ``left``.
    TERM, PHRASE and FUZZY leaves carry ``value``; FIELD leaves carry
    ``field`` and ``value``.
    """

    type: NodeType
    value: str | None = None
    field: str | None = None
    left: ASTNode | None = None
    right: ASTNode | None = None

    def children(self) -> Iterator[ASTNode]:
        if self.left is not None:
            yield self.left
        if self.right is not None:
            yield self.right

    def walk(self) -> Iterator[ASTNode]:
        """Yield this node and its descendants depth-first, left to right."""
        yield self
        for child in self.children():
            yield from child.walk()

    def to_string(self) -> str:
        """Convert the tree back to query syntax."""
        match self.type:
            case NodeType.AND | NodeType.OR:
                left = self.left.to_string() if self.left else ""
                right = self.right.to_string() if self.right else ""
                return f"({left} {self.type.value} {right})"
            case NodeType.NOT:
                operand = self.left.to_string() if self.left else ""
                return f"NOT {operand}"
            case NodeType.PHRASE:
                return f'"{self.value}"'
            case NodeType.FIELD:
                return f"{self.field}:{self.value}"
            case NodeType.FUZZY:
                return f"{self.value}~"
            case _:
                return self.value or ""


@dataclass(frozen=True)
class ParseError:
    """A recoverable syntax problem found while parsing."""

    message: str
    position: int

    def __str__(self) -> str:
        return f"{self.message} (at position {self.position})"


_TERM_START = frozenset(
    {
        TokenType.TERM,
        TokenType.PHRASE,
        TokenType.FIELD,
        TokenType.FUZZY,
        TokenType.LPAREN,
        TokenType.NOT,
    }
)


class QueryParser:
    """Parser for query token sequences.

    Grammar, lowest precedence first::

        or   := and (OR and)*
        and  := not (AND? not)*
        not  := NOT primary | primary
        primary := "(" or ")" | TERM | PHRASE | FIELD | FUZZY

    Syntax errors are collected instead of raised, and the parser
    returns whatever tree it managed to build.
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.current = 0
        self.errors: list[ParseError] = []

    def parse(self) -> tuple[ASTNode | None, list[ParseError]]:
        """Parse the token list.

        Returns:
            Tuple of (root node or None, collected errors)
        """
        if self._peek().type == TokenType.EOF:
            return None, []

        ast = self._parse_or()

        if not self._is_at_end():
            token = self._peek()
            self._error(f"Unexpected {token.type.value} '{token.value}'", token)

        return ast, self.errors

    def _parse_or(self) -> ASTNode | None:
        left = self._parse_and()
        if left is None:
            return None

        while self._check(TokenType.OR):
            operator = self._advance()
            right = self._parse_and()
            if right is None:
                self._error("Expected term after OR", operator)
                break
            left = ASTNode(NodeType.OR, left=left, right=right)

        return left

    def _parse_and(self) -> ASTNode | None:
        left = self._parse_not()
        if left is None:
            return None

        # juxtaposed terms are joined with an implicit AND
        while self._check(TokenType.AND) or self._is_term_start():
            operator = self._advance() if self._check(TokenType.AND) else None
            right = self._parse_not()
            if right is None:
                if operator is not None:
                    self._error("Expected term after AND", operator)
                break
            left = ASTNode(NodeType.AND, left=left, right=right)

        return left

    def _parse_not(self) -> ASTNode | None:
        if self._check(TokenType.NOT):
            operator = self._advance()
            operand = self._parse_primary()
            if operand is None:
                self._error("Expected term after NOT", operator)
                return None
            return ASTNode(NodeType.NOT, left=operand)
        return self._parse_primary()

    def _parse_primary(self) -> ASTNode | None:
        token = self._peek()

        match token.type:
            case TokenType.LPAREN:
                self._advance()
                expr = self._parse_or()
                if self._check(TokenType.RPAREN):
                    self._advance()
                else:
                    self._error("Expected closing parenthesis", token)
                return expr
            case TokenType.TERM:
                self._advance()
                return ASTNode(NodeType.TERM, value=token.value)
            case TokenType.PHRASE:
                self._advance()
                return ASTNode(NodeType.PHRASE, value=token.value)
            case TokenType.FIELD:
                self._advance()
                field, _, value = token.value.partition(":")
                return ASTNode(NodeType.FIELD, field=field.lower(), value=value)
            case TokenType.FUZZY:
                self._advance()
                return ASTNode(NodeType.FUZZY, value=token.value)
            case _:
                return None

    def _is_term_start(self) -> bool:
        return self._peek().type in _TERM_START

    def _peek(self) -> Token:
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return Token(TokenType.EOF, "", 0)

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().type == token_type

    def _advance(self) -> Token:
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _error(self, message: str, token: Token) -> None:
        self.errors.append(ParseError(message, token.position))
