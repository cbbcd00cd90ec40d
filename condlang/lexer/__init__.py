"""
condlang Lexer Package

Tokenizer for the condition language. The parser consumes its output and
never touches raw characters.

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexerError, Diagnostic

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "LexerError",
    "Diagnostic",
    "tokenize_string",
    "tokenize_file",
]
