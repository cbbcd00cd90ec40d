"""
Error handling for the condlang parser facade.

The combinators report failure by returning ``FAILURE``. Only the
``Parser`` facade, which insists on a complete parse, turns that into a
``ParseError`` for the caller.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when a token sequence is not a complete production.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


PARSER_ERROR_CODES = {
    "P001": "Input does not match the production",
    "P002": "Unconsumed tokens after a complete production",
}


def create_no_match_error(production: str, first: Optional[Token]) -> ParseError:
    """Create an error for a production that did not match at all."""
    if first is None:
        return ParseError(
            message=f"Expected {production}, found end of input",
            code="P001",
            help_text=f"The input is empty, but a {production} was expected.",
        )

    return ParseError(
        message=f"Expected {production}",
        location=first.location,
        token=first,
        code="P001",
        help_text=f"The tokens starting at {first} do not form a {production}.",
        suggestions=["Check that every '(' has a matching ')'",
                     "Check the keyword at the start of each form"]
    )


def create_trailing_tokens_error(production: str, extra: Token, index: int) -> ParseError:
    """Create an error for tokens left over after a complete production."""
    return ParseError(
        message=f"Unexpected {extra} after {production}",
        location=extra.location,
        token=extra,
        code="P002",
        help_text=f"A complete {production} ends before token {index}; "
                  f"the rest of the input was not consumed.",
        suggestions=["Remove the extra tokens", "Wrap several conditions in (and ...) or (or ...)"]
    )
