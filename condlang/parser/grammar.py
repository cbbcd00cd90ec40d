"""
Grammar productions for the condition language.

Each production is a parser built only from the combinators; none of them
looks at tokens except through ``elem``. Trees are plain Python values:

    number      NUMBER                          -> 5
    string      STRING                          -> "name"
    value_set   "(" number* ")"                 -> [5, 2, 3]
    new_state   number | "_"                    -> 5 or the wildcard token
    variable    "(" VAR string ")"              -> [VAR, "name"]
    condition   "(" EQUALS variable number ")"  -> [EQUALS, [VAR, "v"], 25]
              | "(" (AND|OR) condition* ")"     -> [AND, cond, cond, ...]

Keyword tokens stay in the tree where consumers need them to tell one
form from another; parentheses are dropped.

Author: xwest
"""

from ..lexer.tokens import TokenType
from .combinators import elem, many, or_, transform, tuple_many, forward


lparen = elem(TokenType.LEFT_PAREN)
rparen = elem(TokenType.RIGHT_PAREN)


def _payload(token):
    return token.value


def _parenthesized(*inner):
    """``"(" inner... ")"``, with the tree being the list of inner trees."""
    return transform(tuple_many([lparen, *inner, rparen]), lambda trees: trees[1:-1])


number = transform(elem(TokenType.NUMBER), _payload).named("number")

string = transform(elem(TokenType.STRING), _payload).named("string")

value_set = transform(_parenthesized(many(number)), lambda trees: trees[0]).named("value_set")

new_state = or_([number, elem(TokenType.WILDCARD)]).named("new_state")

variable = _parenthesized(elem(TokenType.VAR), string).named("variable")


# Recursive through the operands of AND/OR
condition = forward("condition")

equality = _parenthesized(elem(TokenType.EQUALS), variable, number).named("equality")

connective = or_([elem(TokenType.AND), elem(TokenType.OR)])

boolean = transform(
    _parenthesized(connective, many(condition)),
    lambda trees: [trees[0], *trees[1]],
).named("boolean")

condition.define(or_([equality, boolean]))
