"""
Token definitions for the condlang lexer.

The condition language is a small s-expression format, so the token set
is tiny:
- Delimiters (parentheses)
- Keywords (VAR, EQUALS, AND, OR and the `_` wildcard)
- Literals (numbers and strings)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token types in the condition language."""

    # Delimiters
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )

    # Keywords
    VAR = auto()                    # var (variable reference)
    EQUALS = auto()                 # equals (equality test)
    AND = auto()                    # and
    OR = auto()                     # or
    WILDCARD = auto()               # _ (any state)

    # Literals
    NUMBER = auto()                 # 42, -7, 2.5
    STRING = auto()                 # "name"


@dataclass(frozen=True)
class SourceLocation:
    """A position in the source text, used for error reporting."""
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of source

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Tokens compare by type and value only. The lexeme and location are
    carried along for diagnostics, so `and` and `AND` are the same token,
    and a token built by hand equals the one lexed from source.
    """
    type: TokenType
    lexeme: str = field(compare=False)
    value: Any = None
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type.name}, {self.lexeme!r})"
        return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token carries a literal payload."""
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORD_TYPES


# Source spelling -> token type. Lookup is done on the upper-cased word.
KEYWORDS = {
    "VAR": TokenType.VAR,
    "EQUALS": TokenType.EQUALS,
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "_": TokenType.WILDCARD,
}

DELIMITERS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

KEYWORD_TYPES = frozenset(KEYWORDS.values())
LITERAL_TYPES = frozenset({TokenType.NUMBER, TokenType.STRING})


def keyword(token_type: TokenType) -> Token:
    """Build a keyword or delimiter token without a source location."""
    for spelling, kind in list(KEYWORDS.items()) + list(DELIMITERS.items()):
        if kind is token_type:
            return Token(token_type, spelling)
    raise ValueError(f"{token_type.name} is not a keyword or delimiter")


def number_token(value) -> Token:
    """Build a NUMBER literal token."""
    return Token(TokenType.NUMBER, str(value), value)


def string_token(value: str) -> Token:
    """Build a STRING literal token."""
    return Token(TokenType.STRING, f'"{value}"', value)
