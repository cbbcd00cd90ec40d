"""
Parsing combinators for condlang.

A parser is a pure function from ``(tokens, index)`` to a result: either
``Success(tree, index)`` with the index just past the consumed tokens, or
the falsy singleton ``FAILURE``. Failure is returned, never raised, so
alternation and repetition can probe and discard attempts cheaply.
Parsers never slice or mutate the token sequence; all progress is carried
by the index.

Primitives:
    empty(value), elem(token_type)
Combinators:
    tuple2(a, b, combine), tuple_many(parsers), many(p), or_(parsers),
    transform(p, f)
Recursion:
    forward() / Forward.define(p)

Set the ``condlang`` logger to DEBUG to trace named parsers.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

from ..lexer.tokens import Token, TokenType

log = logging.getLogger("condlang")


@dataclass(frozen=True)
class Success:
    """A successful parse: the produced tree and the index after it."""
    tree: Any
    index: int


class ParseFailure:
    """
    The failed-parse outcome. There is exactly one instance, ``FAILURE``.

    It is falsy, so ``if result:`` tells a success from a failure.
    """

    _instance: Optional["ParseFailure"] = None

    def __new__(cls) -> "ParseFailure":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "FAILURE"

    def __reduce__(self):
        return (ParseFailure, ())


FAILURE = ParseFailure()

ParseResult = Union[Success, ParseFailure]
ParserFn = Callable[[Sequence[Token], int], ParseResult]


class Parser:
    """
    A first-class parser.

    Wraps a ``(tokens, index) -> ParseResult`` function. Instances are
    callable with the same signature and hold no mutable state, so one
    parser object can be reused across any number of parses.
    """

    def __init__(self, fn: ParserFn, name: Optional[str] = None):
        self._fn = fn
        self.name = name

    def __call__(self, tokens: Sequence[Token], index: int) -> ParseResult:
        if self.name is None or not log.isEnabledFor(logging.DEBUG):
            return self._fn(tokens, index)

        log.debug("trying %s at %d", self.name, index)
        result = self._fn(tokens, index)
        if result:
            log.debug("%s matched %d..%d", self.name, index, result.index)
        else:
            log.debug("%s failed at %d", self.name, index)
        return result

    def parse_at(self, tokens: Sequence[Token], index: int = 0) -> ParseResult:
        """Run the parser on ``tokens`` starting at ``index``."""
        return self(tokens, index)

    def named(self, name: str) -> "Parser":
        """Return a copy of this parser that carries ``name`` in logs and repr."""
        return Parser(self._fn, name)

    def map(self, f: Callable[[Any], Any]) -> "Parser":
        """Shorthand for ``transform(self, f)``."""
        return transform(self, f)

    def __repr__(self) -> str:
        return f"Parser({self.name or self._fn.__name__})"


def _as_parser(p: Union[Parser, ParserFn]) -> Parser:
    if isinstance(p, Parser):
        return p
    if callable(p):
        return Parser(p)
    raise TypeError(f"expected a parser or a (tokens, index) callable, got {p!r}")


class Forward(Parser):
    """
    A parser whose body is supplied after construction.

    Self-referential rules are declared first and defined later::

        expr = forward("expr")
        expr.define(or_([atom, tuple_many([lparen, many(expr), rparen])]))

    The body is looked up on every call, so the rule can mention itself.
    """

    def __init__(self, name: Optional[str] = None):
        self._body: Optional[Parser] = None
        super().__init__(self._resolve, name)

    def define(self, parser: Union[Parser, ParserFn]) -> None:
        """Set the body. May be called only once."""
        if self._body is not None:
            raise RuntimeError(f"forward parser {self.name or ''} is already defined")
        self._body = _as_parser(parser)

    def _resolve(self, tokens: Sequence[Token], index: int) -> ParseResult:
        if self._body is None:
            raise RuntimeError(f"forward parser {self.name or ''} used before define()")
        return self._body(tokens, index)


def forward(name: Optional[str] = None) -> Forward:
    """Declare a parser to be defined later with ``.define()``."""
    return Forward(name)


# ============================================================================
# Primitives
# ============================================================================

def empty(value: Any) -> Parser:
    """Always succeed without consuming input, producing ``value``."""

    def _empty(tokens: Sequence[Token], index: int) -> ParseResult:
        return Success(value, index)

    return Parser(_empty)


def elem(expected: TokenType) -> Parser:
    """Match one token of type ``expected``; the tree is the token itself."""

    def _elem(tokens: Sequence[Token], index: int) -> ParseResult:
        if 0 <= index < len(tokens) and tokens[index].type is expected:
            return Success(tokens[index], index + 1)
        return FAILURE

    return Parser(_elem, expected.name)


# ============================================================================
# Combinators
# ============================================================================

def _pair(a: Any, b: Any) -> List[Any]:
    return [a, b]


def tuple2(parser_a: Union[Parser, ParserFn], parser_b: Union[Parser, ParserFn],
           combine: Optional[Callable[[Any, Any], Any]] = None) -> Parser:
    """
    Run ``parser_a`` then ``parser_b`` from where it stopped.

    The tree is ``combine(tree_a, tree_b)``, a two-element list by default.
    ``parser_b`` is not run when ``parser_a`` fails.
    """
    first = _as_parser(parser_a)
    second = _as_parser(parser_b)
    combine = combine or _pair

    def _tuple2(tokens: Sequence[Token], index: int) -> ParseResult:
        a = first(tokens, index)
        if not a:
            return FAILURE
        b = second(tokens, a.index)
        if not b:
            return FAILURE
        return Success(combine(a.tree, b.tree), b.index)

    return Parser(_tuple2)


def tuple_many(parsers: Sequence[Union[Parser, ParserFn]]) -> Parser:
    """
    Run ``parsers`` in order, each starting where the previous one ended.

    The tree is the list of their trees. Stops at the first failure.
    """
    steps = [_as_parser(p) for p in parsers]

    def _tuple_many(tokens: Sequence[Token], index: int) -> ParseResult:
        trees = []
        position = index
        for step in steps:
            result = step(tokens, position)
            if not result:
                return FAILURE
            trees.append(result.tree)
            position = result.index
        return Success(trees, position)

    return Parser(_tuple_many)


def many(parser: Union[Parser, ParserFn]) -> Parser:
    """
    Greedy zero-or-more repetition. Never fails.

    Repetition stops at the first failure, or at a success that consumed
    nothing (which would otherwise repeat forever). Neither contributes to
    the tree.
    """
    inner = _as_parser(parser)

    def _many(tokens: Sequence[Token], index: int) -> ParseResult:
        trees = []
        position = index
        while True:
            result = inner(tokens, position)
            if not result or result.index == position:
                break
            trees.append(result.tree)
            position = result.index
        return Success(trees, position)

    return Parser(_many)


def or_(parsers: Sequence[Union[Parser, ParserFn]]) -> Parser:
    """
    Ordered choice: the first alternative that succeeds wins.

    Every alternative starts at the same index. Fails only if all fail.
    """
    alternatives = [_as_parser(p) for p in parsers]

    def _or(tokens: Sequence[Token], index: int) -> ParseResult:
        for alternative in alternatives:
            result = alternative(tokens, index)
            if result:
                return result
        return FAILURE

    return Parser(_or)


def transform(parser: Union[Parser, ParserFn], f: Callable[[Any], Any]) -> Parser:
    """Apply ``f`` to the tree of a successful parse."""
    inner = _as_parser(parser)

    def _transform(tokens: Sequence[Token], index: int) -> ParseResult:
        result = inner(tokens, index)
        if not result:
            return FAILURE
        return Success(f(result.tree), result.index)

    return Parser(_transform)
