"""
condlang Parser facade

Runs a grammar production over a whole token list and hands back a typed
node. This is the layer that decides what a failed parse means to the
user; the combinators underneath only say "no".

Author: xwest
"""

from typing import Any, Callable, List, Sequence

from ..lexer.tokens import Token
from ..lexer.lexer import tokenize_string
from . import grammar
from .ast_nodes import (
    Condition, NewState, ValueSet, VariableRef,
    build_condition, build_new_state, build_value_set, build_variable
)
from .combinators import Parser as Combinator
from .errors import ParseError, create_no_match_error, create_trailing_tokens_error


class Parser:
    """
    Whole-input parser for condlang token lists.

    Each ``parse_*`` method runs one production from index 0, requires it
    to consume every token, and returns the typed node.
    """

    def __init__(self, tokens: Sequence[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer (or built by hand)
        """
        self.tokens = tokens
        self.errors: List[ParseError] = []

    def _parse_complete(self, production: Combinator, name: str,
                        build: Callable[[Any], Any]) -> Any:
        result = production(self.tokens, 0)

        if not result:
            first = self.tokens[0] if self.tokens else None
            error = create_no_match_error(name, first)
        elif result.index < len(self.tokens):
            error = create_trailing_tokens_error(name, self.tokens[result.index], result.index)
        else:
            return build(result.tree)

        self.errors.append(error)
        raise error

    def parse_condition(self) -> Condition:
        """Parse the whole token list as a condition."""
        return self._parse_complete(grammar.condition, "condition", build_condition)

    def parse_variable(self) -> VariableRef:
        """Parse the whole token list as a variable reference."""
        return self._parse_complete(grammar.variable, "variable", build_variable)

    def parse_value_set(self) -> ValueSet:
        """Parse the whole token list as a value set."""
        return self._parse_complete(grammar.value_set, "value set", build_value_set)

    def parse_new_state(self) -> NewState:
        """Parse the whole token list as a new-state target."""
        return self._parse_complete(grammar.new_state, "new state", build_new_state)

    def has_errors(self) -> bool:
        """Check if a parse on this instance failed."""
        return len(self.errors) > 0


def parse_condition_source(source: str, filename: str = "<unknown>") -> Condition:
    """
    Tokenize and parse condition source text.

    Raises:
        LexerError: If the source cannot be tokenized
        ParseError: If the tokens are not exactly one condition
    """
    tokens = tokenize_string(source, filename)
    return Parser(tokens).parse_condition()
