"""
condlang Lexer - turns condition source text into tokens

The source format is s-expressions: parentheses, a handful of bare
keywords, numbers and double-quoted strings. `;` starts a comment that
runs to the end of the line.

The parser never sees raw text, so anything malformed has to be caught
here.

xwest
"""

import re
from typing import List, Optional

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, DELIMITERS
from .errors import (
    LexerError, create_invalid_character_error, create_unterminated_string_error,
    create_invalid_number_error, create_unknown_word_error
)


class Lexer:
    """
    condlang lexical analyzer.

    Converts source text into a list of tokens. Errors are collected and
    lexing resumes after the offending input, so one pass reports every
    problem in the source.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Source string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.number_pattern = re.compile(r'-?\d+(?:\.\d*)?', re.ASCII)
        self.word_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_\-]*')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens. No end-of-file token is appended; the end of
            input is simply the end of the list.
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens.clear()
        self.errors.clear()

        while self.pos < len(self.source):
            try:
                self._skip_whitespace_and_comments()

                if self.pos >= len(self.source):
                    break

                self.tokens.append(self._next_token())

            except LexerError as e:
                self.errors.append(e)
                # Skip the problematic character if the failing rule did not move
                if self.pos == e.location.offset:
                    self._advance()

        return self.tokens

    def _location(self, line: int, column: int, offset: int) -> SourceLocation:
        return SourceLocation(self.filename, line, column, offset)

    def _next_token(self) -> Token:
        """Get the next token from the source."""
        start_pos = self.pos
        start_line = self.line
        start_column = self.column
        location = self._location(start_line, start_column, start_pos)

        current_char = self.source[self.pos]

        if current_char in DELIMITERS:
            self._advance()
            return Token(DELIMITERS[current_char], current_char, None, location)

        if self.number_pattern.match(self.source, self.pos):
            return self._tokenize_number(location)

        if current_char == '"':
            return self._tokenize_string(location)

        if self.word_pattern.match(self.source, self.pos):
            return self._tokenize_keyword(location)

        raise create_invalid_character_error(current_char, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize an integer or decimal literal."""
        match = self.number_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))

        if lexeme.endswith('.'):
            raise create_invalid_number_error(lexeme, location)

        value = float(lexeme) if '.' in lexeme else int(lexeme)
        return Token(TokenType.NUMBER, lexeme, value, location)

    def _tokenize_keyword(self, location: SourceLocation) -> Token:
        """Tokenize a bare word, which must be a keyword."""
        match = self.word_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))

        token_type = KEYWORDS.get(lexeme.upper())
        if token_type is None:
            raise create_unknown_word_error(lexeme, location)

        return Token(token_type, lexeme, None, location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """Tokenize a double-quoted string literal."""
        start_pos = self.pos
        self._advance()  # Skip opening quote

        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\' and self.pos + 1 < len(self.source):
                self._advance()  # Skip backslash
                value_parts.append(self._handle_escape_sequence())
            else:
                value_parts.append(self.source[self.pos])
                self._advance()

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(location)

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts), location)

    def _handle_escape_sequence(self) -> str:
        """Handle an escape sequence inside a string; unknown escapes are kept literally."""
        escape_char = self.source[self.pos]
        self._advance()

        escape_sequences = {
            'n': '\n',
            't': '\t',
            '\\': '\\',
            '"': '"',
        }
        return escape_sequences.get(escape_char, escape_char)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and ; line comments."""
        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            if self.source[self.pos] == ';':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            break

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Raises:
        LexerError: the first error encountered, if any
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str, encoding: Optional[str] = 'utf-8') -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding=encoding) as f:
        source = f.read()

    return tokenize_string(source, filepath)
