"""Lexer turning a query string into a flat token sequence."""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of tokens produced by the lexer."""

    TERM = "TERM"
    PHRASE = "PHRASE"
    FIELD = "FIELD"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    FUZZY = "FUZZY"
    EOF = "EOF"


class SearchField(str, Enum):
    """Field prefixes recognized in ``field:value`` expressions."""

    STATUS = "status"
    TAG = "tag"
    TAGS = "tags"
    PRIORITY = "priority"
    ASSIGNEE = "assignee"
    TITLE = "title"
    NAME = "name"
    CREATED = "created"
    UPDATED = "updated"


SUPPORTED_FIELDS = frozenset(field.value for field in SearchField)
DATE_FIELDS = frozenset({SearchField.CREATED.value, SearchField.UPDATED.value})

_OPERATORS = {
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "NOT": TokenType.NOT,
}
_WORD_BREAKS = frozenset('()"')


@dataclass(frozen=True)
class Token:
    """A lexical token and its offset in the query string."""

    type: TokenType
    value: str
    position: int


def tokenize(query: str) -> list[Token]:
    """Split a query into tokens.

    Never raises; unrecognized input degrades to TERM tokens. The
    returned list always ends with an EOF token.
    """
    tokens: list[Token] = []
    position = 0
    length = len(query)

    while position < length:
        char = query[position]

        if char.isspace():
            position += 1
            continue

        if char == '"':
            start = position
            end = query.find('"', position + 1)
            if end == -1:
                end = length
            tokens.append(Token(TokenType.PHRASE, query[start + 1 : end], start))
            position = end + 1
            continue

        if char == "(":
            tokens.append(Token(TokenType.LPAREN, char, position))
            position += 1
            continue
        if char == ")":
            tokens.append(Token(TokenType.RPAREN, char, position))
            position += 1
            continue

        start = position
        while (
            position < length
            and not query[position].isspace()
            and query[position] not in _WORD_BREAKS
        ):
            position += 1
        word = query[start:position]

        tokens.append(_classify_word(word, start))

    tokens.append(Token(TokenType.EOF, "", length))
    return tokens


def _classify_word(word: str, position: int) -> Token:
    operator = _OPERATORS.get(word.upper())
    if operator is not None:
        return Token(operator, word, position)

    colon = word.find(":")
    if colon > 0 and word[:colon].lower() in SUPPORTED_FIELDS:
        return Token(TokenType.FIELD, word, position)

    if word.endswith("~"):
        return Token(TokenType.FUZZY, word[:-1], position)

    return Token(TokenType.TERM, word, position)
