"""DumbBrain bound (typed) tree.

Operators are resolved to semantic operations, decoupled from their
lexical spelling. Parentheses do not survive binding.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dumbbrain.objects import DumbBrainObject
from dumbbrain.types import DumbBrainType


class BinaryOperation(Enum):
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"

    EQUALITY = "Equality"
    INEQUALITY = "Inequality"
    LESS = "Less"
    LESS_EQUALS = "LessEquals"
    GREATER = "Greater"
    GREATER_EQUALS = "GreaterEquals"

    LOGICAL_AND = "LogicalAnd"
    LOGICAL_OR = "LogicalOr"

    def __str__(self) -> str:
        return self.value


class UnaryOperation(Enum):
    IDENTITY = "Identity"
    NEGATION = "Negation"

    def __str__(self) -> str:
        return self.value


ARITHMETIC_OPERATIONS = frozenset({
    BinaryOperation.ADD,
    BinaryOperation.SUBTRACT,
    BinaryOperation.MULTIPLY,
    BinaryOperation.DIVIDE,
})

EQUALITY_OPERATIONS = frozenset({
    BinaryOperation.EQUALITY,
    BinaryOperation.INEQUALITY,
})

ORDERING_OPERATIONS = frozenset({
    BinaryOperation.LESS,
    BinaryOperation.LESS_EQUALS,
    BinaryOperation.GREATER,
    BinaryOperation.GREATER_EQUALS,
})

COMPARISON_OPERATIONS = EQUALITY_OPERATIONS | ORDERING_OPERATIONS

LOGICAL_OPERATIONS = frozenset({
    BinaryOperation.LOGICAL_AND,
    BinaryOperation.LOGICAL_OR,
})


@dataclass(frozen=True)
class BoundExpression:
    """Base class. ``type`` is the static type of the subtree's value."""
    type: DumbBrainType


@dataclass(frozen=True)
class BoundLiteralExpression(BoundExpression):
    value: Optional[DumbBrainObject] = None


@dataclass(frozen=True)
class BoundBinaryExpression(BoundExpression):
    left: BoundExpression
    right: BoundExpression
    operation: BinaryOperation


@dataclass(frozen=True)
class BoundUnaryExpression(BoundExpression):
    operand: BoundExpression
    operation: UnaryOperation
