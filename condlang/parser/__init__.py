"""
condlang Parser Package

A combinator-based recursive descent parser for the condition language.

- combinators: the grammar-agnostic engine (empty, elem, tuple2,
  tuple_many, many, or_, transform, forward)
- grammar: the productions (number, string, value_set, new_state,
  variable, condition)
- ast_nodes: typed nodes built from production trees
- parser: the whole-input facade that raises ParseError

Author: xwest
"""

from .combinators import (
    Parser as Combinator, Forward, Success, ParseFailure, FAILURE,
    empty, elem, tuple2, tuple_many, many, or_, transform, forward
)
from .grammar import number, string, value_set, new_state, variable, condition
from .ast_nodes import *
from .parser import Parser, parse_condition_source
from .errors import ParseError

__all__ = [
    # Engine
    "Combinator", "Forward", "Success", "ParseFailure", "FAILURE",
    "empty", "elem", "tuple2", "tuple_many", "many", "or_", "transform", "forward",

    # Productions
    "number", "string", "value_set", "new_state", "variable", "condition",

    # Nodes
    "ASTNode", "ASTVisitor", "NodeType", "Connective",
    "NumberLit", "Wildcard", "VariableRef", "ValueSet",
    "EqualityCondition", "BooleanCondition",
    "build_value_set", "build_new_state", "build_variable", "build_condition",

    # Facade
    "Parser", "parse_condition_source", "ParseError",
]
