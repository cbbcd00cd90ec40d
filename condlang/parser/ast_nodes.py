"""
Typed syntax tree for condlang.

The grammar productions return plain lists and scalars. This module turns
those trees into a closed set of node classes, each tagged with a
``NodeType``, so consumers can dispatch on the tag instead of inspecting
list shapes.

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, List, Tuple, Union

from ..lexer.tokens import Token, TokenType


class NodeType(Enum):
    """Enumeration of all node types."""
    NUMBER_LIT = "NumberLit"
    WILDCARD = "Wildcard"
    VARIABLE_REF = "VariableRef"
    VALUE_SET = "ValueSet"
    EQUALITY_CONDITION = "EqualityCondition"
    BOOLEAN_CONDITION = "BooleanCondition"


class Connective(Enum):
    """Boolean connectives of a BooleanCondition."""
    AND = "and"
    OR = "or"


class ASTVisitor:
    """
    Visitor over nodes.

    ``visit`` dispatches to ``visit_<NodeType value>`` (for example
    ``visit_EqualityCondition``) and falls back to ``generic_visit``,
    which visits the children and returns None.
    """

    def visit(self, node: "ASTNode") -> Any:
        method = getattr(self, f"visit_{node.node_type.value}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: "ASTNode") -> Any:
        for child in node.children():
            self.visit(child)
        return None


class ASTNode(ABC):
    """Base class for all nodes."""

    node_type: ClassVar[NodeType]

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List["ASTNode"]:
        """Get all child nodes."""


@dataclass(frozen=True)
class NumberLit(ASTNode):
    value: Union[int, float]
    node_type: ClassVar[NodeType] = NodeType.NUMBER_LIT

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class Wildcard(ASTNode):
    """The ``_`` state target: any state."""
    node_type: ClassVar[NodeType] = NodeType.WILDCARD

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class VariableRef(ASTNode):
    name: str
    node_type: ClassVar[NodeType] = NodeType.VARIABLE_REF

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class ValueSet(ASTNode):
    values: Tuple[NumberLit, ...]
    node_type: ClassVar[NodeType] = NodeType.VALUE_SET

    def children(self) -> List[ASTNode]:
        return list(self.values)


@dataclass(frozen=True)
class EqualityCondition(ASTNode):
    """``(equals (var "name") number)``"""
    variable: VariableRef
    value: NumberLit
    node_type: ClassVar[NodeType] = NodeType.EQUALITY_CONDITION

    def children(self) -> List[ASTNode]:
        return [self.variable, self.value]


@dataclass(frozen=True)
class BooleanCondition(ASTNode):
    """``(and cond...)`` or ``(or cond...)``; operands may be empty."""
    connective: Connective
    operands: Tuple["Condition", ...]
    node_type: ClassVar[NodeType] = NodeType.BOOLEAN_CONDITION

    def children(self) -> List[ASTNode]:
        return list(self.operands)


Condition = Union[EqualityCondition, BooleanCondition]
NewState = Union[NumberLit, Wildcard]


# ============================================================================
# Builders: production tree -> node
# ============================================================================

_CONNECTIVES = {
    TokenType.AND: Connective.AND,
    TokenType.OR: Connective.OR,
}


def _is_token(value: Any, token_type: TokenType) -> bool:
    return isinstance(value, Token) and value.type is token_type


def _number(value: Any) -> NumberLit:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return NumberLit(value)


def build_value_set(tree: Any) -> ValueSet:
    """Build a ValueSet from a ``value_set`` tree."""
    if not isinstance(tree, list):
        raise ValueError(f"malformed value set tree: {tree!r}")
    return ValueSet(tuple(_number(v) for v in tree))


def build_new_state(tree: Any) -> NewState:
    """Build a NumberLit or Wildcard from a ``new_state`` tree."""
    if _is_token(tree, TokenType.WILDCARD):
        return Wildcard()
    return _number(tree)


def build_variable(tree: Any) -> VariableRef:
    """Build a VariableRef from a ``variable`` tree ``[VAR, name]``."""
    if (not isinstance(tree, list) or len(tree) != 2
            or not _is_token(tree[0], TokenType.VAR) or not isinstance(tree[1], str)):
        raise ValueError(f"malformed variable tree: {tree!r}")
    return VariableRef(tree[1])


def build_condition(tree: Any) -> Condition:
    """Build an EqualityCondition or BooleanCondition from a ``condition`` tree."""
    if not isinstance(tree, list) or not tree:
        raise ValueError(f"malformed condition tree: {tree!r}")

    head = tree[0]
    if _is_token(head, TokenType.EQUALS):
        if len(tree) != 3:
            raise ValueError(f"malformed equality tree: {tree!r}")
        return EqualityCondition(build_variable(tree[1]), _number(tree[2]))

    if isinstance(head, Token) and head.type in _CONNECTIVES:
        operands = tuple(build_condition(operand) for operand in tree[1:])
        return BooleanCondition(_CONNECTIVES[head.type], operands)

    raise ValueError(f"malformed condition tree: {tree!r}")
