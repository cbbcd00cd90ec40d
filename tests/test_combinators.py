"""
Test suite for the condlang combinator engine.

Tests cover:
- Primitives (empty, elem)
- Sequencing, repetition and alternation
- Failure propagation and backtracking
- Forward declarations and debug logging

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from condlang.lexer.tokens import TokenType, keyword, number_token
from condlang.parser.combinators import (
    Parser, Forward, Success, ParseFailure, FAILURE,
    empty, elem, tuple2, tuple_many, many, or_, transform, forward
)


LPAREN = keyword(TokenType.LEFT_PAREN)
RPAREN = keyword(TokenType.RIGHT_PAREN)


def n(value):
    return number_token(value)


class CallRecorder:
    """A parser that records the indices it was called at."""

    def __init__(self, parser):
        self.parser = parser
        self.calls = []

    def __call__(self, tokens, index):
        self.calls.append(index)
        return self.parser(tokens, index)


class TestResults(unittest.TestCase):
    """Test the result types."""

    def test_failure_is_a_falsy_singleton(self):
        """ParseFailure has exactly one instance and it is falsy."""
        self.assertIs(ParseFailure(), FAILURE)
        self.assertFalse(FAILURE)
        self.assertEqual(repr(FAILURE), "FAILURE")

    def test_success_is_truthy_even_with_falsy_tree(self):
        """A success is truthy regardless of its tree."""
        self.assertTrue(Success([], 0))
        self.assertTrue(Success(None, 0))
        self.assertEqual(Success([1], 2), Success([1], 2))


class TestEmpty(unittest.TestCase):
    """Test the empty primitive."""

    def test_returns_value_without_consuming(self):
        """empty succeeds with its value and the unchanged index."""
        parser = empty("The Man")
        tokens = [n(1), n(2), n(5)]
        self.assertEqual(parser(tokens, 0), Success("The Man", 0))
        self.assertEqual(parser(tokens, 2), Success("The Man", 2))

    def test_succeeds_out_of_range(self):
        """empty never looks at the tokens, so any index works."""
        parser = empty("The Man")
        tokens = [n(1), n(2), n(5)]
        self.assertEqual(parser(tokens, 3), Success("The Man", 3))
        self.assertEqual(parser(tokens, 10), Success("The Man", 10))
        self.assertEqual(parser([], 0), Success("The Man", 0))


class TestElem(unittest.TestCase):
    """Test the elem primitive."""

    def test_matches_token_type(self):
        """elem returns the matched token and advances by one."""
        parser = elem(TokenType.LEFT_PAREN)
        self.assertEqual(parser([LPAREN, RPAREN], 0), Success(LPAREN, 1))

    def test_returns_the_token_object(self):
        """The tree is the token itself, not a copy."""
        tokens = [LPAREN]
        result = elem(TokenType.LEFT_PAREN)(tokens, 0)
        self.assertIs(result.tree, tokens[0])

    def test_fails_on_other_type(self):
        """elem fails on a token of another type."""
        parser = elem(TokenType.LEFT_PAREN)
        self.assertIs(parser([LPAREN, RPAREN], 1), FAILURE)

    def test_fails_at_end_of_input(self):
        """Running past the end is a clean failure."""
        parser = elem(TokenType.LEFT_PAREN)
        self.assertIs(parser([LPAREN, RPAREN], 2), FAILURE)
        self.assertIs(parser([LPAREN, RPAREN], 5), FAILURE)
        self.assertIs(parser([], 0), FAILURE)

    def test_fails_on_negative_index(self):
        """A negative index does not wrap around to the end."""
        parser = elem(TokenType.RIGHT_PAREN)
        self.assertIs(parser([LPAREN, RPAREN], -1), FAILURE)

    def test_repeated_calls_agree(self):
        """A failed attempt leaves nothing behind; calls are idempotent."""
        parser = elem(TokenType.RIGHT_PAREN)
        tokens = [LPAREN, RPAREN]
        self.assertIs(parser(tokens, 0), FAILURE)
        self.assertIs(parser(tokens, 0), FAILURE)
        self.assertEqual(parser(tokens, 1), parser(tokens, 1))


class TestTuple2(unittest.TestCase):
    """Test sequencing of two parsers."""

    def setUp(self):
        self.l = elem(TokenType.LEFT_PAREN)
        self.r = elem(TokenType.RIGHT_PAREN)

    def test_runs_in_order(self):
        """tuple2 runs both parsers and combines their trees."""
        lr = tuple2(self.l, self.r, lambda a, b: [a, b])
        tokens = [LPAREN, RPAREN, n(1), n(2), n(3)]
        self.assertEqual(lr(tokens, 0), Success([LPAREN, RPAREN], 2))

    def test_default_combine_is_a_pair(self):
        """Without combine the tree is a two-element list."""
        lr = tuple2(self.l, self.r)
        self.assertEqual(lr([LPAREN, RPAREN], 0), Success([LPAREN, RPAREN], 2))

    def test_custom_combine(self):
        """combine receives both trees."""
        add = tuple2(transform(elem(TokenType.NUMBER), lambda t: t.value),
                     transform(elem(TokenType.NUMBER), lambda t: t.value),
                     lambda a, b: a + b)
        self.assertEqual(add([n(2), n(3)], 0), Success(5, 2))

    def test_fails_when_second_fails(self):
        """tuple2 fails if the second parser fails."""
        lr = tuple2(self.l, self.r)
        self.assertIs(lr([LPAREN, n(1), RPAREN, n(1), n(2), n(3)], 0), FAILURE)

    def test_short_circuits_when_first_fails(self):
        """The second parser is never run when the first fails."""
        second = CallRecorder(self.l)
        parser = tuple2(self.r, second)
        # second alone would succeed at index 0
        self.assertIs(parser([LPAREN, RPAREN], 0), FAILURE)
        self.assertEqual(second.calls, [])

    def test_second_starts_where_first_ended(self):
        """The second parser runs at the first parser's result index."""
        second = CallRecorder(self.r)
        tuple2(self.l, second)([n(0), LPAREN, RPAREN], 1)
        self.assertEqual(second.calls, [2])


class TestTupleMany(unittest.TestCase):
    """Test sequencing of a list of parsers."""

    def setUp(self):
        self.l = elem(TokenType.LEFT_PAREN)
        self.r = elem(TokenType.RIGHT_PAREN)

    def test_runs_all_in_order(self):
        """The tree is the flat list of every sub-tree."""
        lrlr = tuple_many([self.l, self.r, self.l, self.r])
        tokens = [n(1), LPAREN, RPAREN, LPAREN, RPAREN]
        self.assertEqual(lrlr(tokens, 1), Success([LPAREN, RPAREN, LPAREN, RPAREN], 5))

    def test_fails_if_any_element_fails(self):
        """One failing element fails the whole sequence."""
        lrlr = tuple_many([self.l, self.r, self.l, self.r])
        tokens = [LPAREN, RPAREN, RPAREN, LPAREN, n(2), n(3)]
        self.assertIs(lrlr(tokens, 0), FAILURE)

    def test_stops_at_first_failure(self):
        """Parsers after the failing one are not attempted."""
        last = CallRecorder(self.l)
        parser = tuple_many([self.l, self.r, last])
        self.assertIs(parser([LPAREN, LPAREN, LPAREN], 0), FAILURE)
        self.assertEqual(last.calls, [])

    def test_empty_list_succeeds(self):
        """No parsers means nothing to consume."""
        self.assertEqual(tuple_many([])([LPAREN], 0), Success([], 0))

    def test_fails_at_end_of_input(self):
        """Input ending early is a plain failure."""
        parser = tuple_many([self.l, self.r])
        self.assertIs(parser([LPAREN], 0), FAILURE)


class TestMany(unittest.TestCase):
    """Test greedy repetition."""

    def setUp(self):
        self.l = elem(TokenType.LEFT_PAREN)
        self.tokens = [n(1), n(2), LPAREN, LPAREN, LPAREN, n(5), n(3), n(2)]

    def test_collects_a_run(self):
        """many collects every match of a run."""
        self.assertEqual(many(self.l)(self.tokens, 2),
                         Success([LPAREN, LPAREN, LPAREN], 5))

    def test_zero_matches(self):
        """With no matches many succeeds with an empty list."""
        self.assertEqual(many(self.l)(self.tokens, 1), Success([], 1))

    def test_never_fails_at_end_of_input(self):
        """At the end of input many still succeeds, with nothing."""
        self.assertEqual(many(self.l)(self.tokens, 8), Success([], 8))
        self.assertEqual(many(self.l)([], 0), Success([], 0))

    def test_run_length(self):
        """A run of k matches advances the index by exactly k."""
        for k in range(5):
            tokens = [LPAREN] * k + [RPAREN]
            result = many(self.l)(tokens, 0)
            self.assertEqual(len(result.tree), k)
            self.assertEqual(result.index, k)

    def test_failed_iteration_leaves_no_trace(self):
        """A partially matched iteration contributes neither tree nor index."""
        pair = tuple2(self.l, elem(TokenType.RIGHT_PAREN))
        tokens = [LPAREN, RPAREN, LPAREN, n(7)]
        self.assertEqual(many(pair)(tokens, 0), Success([[LPAREN, RPAREN]], 2))

    def test_zero_width_parser_terminates(self):
        """A parser that consumes nothing does not loop forever."""
        self.assertEqual(many(empty(1))([LPAREN], 0), Success([], 0))


class TestOr(unittest.TestCase):
    """Test ordered alternation."""

    def setUp(self):
        self.l = elem(TokenType.LEFT_PAREN)
        self.r = elem(TokenType.RIGHT_PAREN)
        self.tokens = [n(5), n(2), LPAREN, LPAREN, RPAREN, RPAREN, n(6)]

    def test_first_alternative(self):
        """The first alternative matches."""
        self.assertEqual(or_([self.l, self.r])(self.tokens, 2), Success(LPAREN, 3))

    def test_second_alternative(self):
        """Later alternatives are tried from the same index."""
        self.assertEqual(or_([self.l, self.r])(self.tokens, 4), Success(RPAREN, 5))

    def test_all_fail(self):
        """or_ fails when every alternative fails."""
        self.assertIs(or_([self.l, self.r])(self.tokens, 0), FAILURE)

    def test_order_decides(self):
        """A successful earlier alternative wins over a longer later one."""
        two = tuple2(self.l, self.l)
        self.assertEqual(or_([self.l, two])(self.tokens, 2), Success(LPAREN, 3))
        self.assertEqual(or_([two, self.l])(self.tokens, 2), Success([LPAREN, LPAREN], 4))

    def test_stops_after_first_success(self):
        """Alternatives after a success are not run."""
        later = CallRecorder(self.r)
        or_([self.l, later])(self.tokens, 2)
        self.assertEqual(later.calls, [])

    def test_backtracks_to_start(self):
        """A partly matched alternative does not move the next one's start."""
        later = CallRecorder(tuple2(self.l, self.l))
        failing = tuple_many([self.l, self.l, self.l])
        result = or_([failing, later])(self.tokens, 2)
        self.assertEqual(later.calls, [2])
        self.assertEqual(result, Success([LPAREN, LPAREN], 4))

    def test_empty_alternatives_fail(self):
        """No alternatives means no match."""
        self.assertIs(or_([])(self.tokens, 0), FAILURE)


class TestTransform(unittest.TestCase):
    """Test tree transformation."""

    def test_applies_function(self):
        """transform maps the tree of a success."""
        value = transform(elem(TokenType.NUMBER), lambda t: t.value * 2)
        self.assertEqual(value([n(21)], 0), Success(42, 1))

    def test_map_method(self):
        """Parser.map is shorthand for transform."""
        value = elem(TokenType.NUMBER).map(lambda t: t.value)
        self.assertEqual(value([n(3)], 0), Success(3, 1))

    def test_failure_passes_through(self):
        """The function is not called on failure."""
        calls = []
        parser = transform(elem(TokenType.NUMBER), calls.append)
        self.assertIs(parser([LPAREN], 0), FAILURE)
        self.assertEqual(calls, [])


class TestParserObject(unittest.TestCase):
    """Test the Parser wrapper."""

    def test_wraps_plain_functions(self):
        """Combinators accept any (tokens, index) callable."""

        def anything(tokens, index):
            if index < len(tokens):
                return Success(tokens[index], index + 1)
            return FAILURE

        parser = many(anything)
        self.assertEqual(parser([n(1), LPAREN], 0), Success([n(1), LPAREN], 2))

    def test_rejects_non_callables(self):
        """A non-callable is a programming error."""
        with self.assertRaises(TypeError):
            many(42)

    def test_parse_at(self):
        """parse_at is the same as calling the parser."""
        parser = elem(TokenType.LEFT_PAREN)
        self.assertEqual(parser.parse_at([LPAREN], 0), parser([LPAREN], 0))
        self.assertEqual(parser.parse_at([LPAREN]), Success(LPAREN, 1))

    def test_named_returns_a_copy(self):
        """named does not rename the original parser."""
        base = elem(TokenType.LEFT_PAREN)
        renamed = base.named("open")
        self.assertEqual(renamed.name, "open")
        self.assertEqual(base.name, "LEFT_PAREN")
        self.assertEqual(repr(renamed), "Parser(open)")

    def test_debug_logging_for_named_parsers(self):
        """Named parsers log each attempt and its outcome at DEBUG."""
        parser = elem(TokenType.LEFT_PAREN).named("open")
        with self.assertLogs("condlang", level="DEBUG") as captured:
            parser([LPAREN, RPAREN], 0)
            parser([LPAREN, RPAREN], 1)
        messages = "\n".join(captured.output)
        self.assertIn("trying open at 0", messages)
        self.assertIn("open matched 0..1", messages)
        self.assertIn("open failed at 1", messages)


class TestForward(unittest.TestCase):
    """Test forward-declared parsers."""

    def test_recursive_definition(self):
        """A forward parser can refer to itself."""
        nested = forward("nested")
        nested.define(tuple_many([elem(TokenType.LEFT_PAREN), many(nested),
                                  elem(TokenType.RIGHT_PAREN)]))
        tokens = [LPAREN, LPAREN, RPAREN, LPAREN, LPAREN, RPAREN, RPAREN, RPAREN]
        result = nested(tokens, 0)
        self.assertTrue(result)
        self.assertEqual(result.index, len(tokens))

    def test_undefined_raises(self):
        """Using a forward parser before define() is a programming error."""
        with self.assertRaises(RuntimeError):
            forward("later")([LPAREN], 0)

    def test_define_once(self):
        """define() can only be called once."""
        p = Forward()
        p.define(empty(1))
        with self.assertRaises(RuntimeError):
            p.define(empty(2))

    def test_named_forward_still_resolves_lazily(self):
        """Naming a forward parser before it is defined keeps it lazy."""
        p = forward()
        named = p.named("p")
        p.define(empty("ok"))
        self.assertEqual(named([], 0), Success("ok", 0))

    def test_is_a_parser(self):
        self.assertIsInstance(forward(), Parser)


if __name__ == '__main__':
    unittest.main()
