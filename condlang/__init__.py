"""
condlang Package

A parser-combinator front end for a small s-expression language that
describes states and the conditions on them.

Architecture:
    condlang/
    ├── lexer/           # Tokenization of condition source text
    └── parser/          # Combinator engine, grammar productions, typed nodes

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexerError
from .parser import Parser, ParseError, parse_condition_source

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",

    # Errors
    "LexerError",
    "ParseError",

    # Helpers
    "parse_condition_source",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
