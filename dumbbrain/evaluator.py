"""DumbBrain Evaluator — post-order walk of a bound tree.

Arithmetic trusts the binder's static types. Comparison and logical
operators check the runtime types of their operands, because the binder
deferred that check. Both operands of every binary operator are evaluated
first; ``&&`` and ``||`` do not short-circuit.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from dumbbrain.bound_tree import (
    BoundExpression, BoundLiteralExpression, BoundBinaryExpression,
    BoundUnaryExpression, BinaryOperation, UnaryOperation,
    ARITHMETIC_OPERATIONS, COMPARISON_OPERATIONS, EQUALITY_OPERATIONS,
    LOGICAL_OPERATIONS,
)
from dumbbrain.errors import CompileError, type_error, internal_error
from dumbbrain.objects import DumbBrainObject, Number, Boolean
from dumbbrain.types import NUMBER

logger = logging.getLogger(__name__)

# Numbers closer than this compare equal; numbers further apart compare
# unequal. A difference of exactly FLOATING_POINT_DELTA is neither.
FLOATING_POINT_DELTA = 1e-6


def divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is NaN."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator


def _present(value: Optional[DumbBrainObject], operation: object) -> DumbBrainObject:
    if value is None:
        raise CompileError(internal_error(f"operand of {operation} has no value"))
    return value


def _number(value: Optional[DumbBrainObject], operation: object) -> float:
    value = _present(value, operation)
    if not isinstance(value, Number):
        raise CompileError(internal_error(
            f"operand of {operation} is {value.type}, expected Number"
        ))
    return value.value


class Evaluator:
    """Evaluates one bound tree."""

    def __init__(self, bound_tree: BoundExpression):
        self.bound_tree = bound_tree

    def evaluate(self) -> Optional[DumbBrainObject]:
        value = self._evaluate_expression(self.bound_tree)
        logger.debug("evaluated to %s", value)
        return value

    def _evaluate_expression(self, expression: BoundExpression) -> Optional[DumbBrainObject]:
        if isinstance(expression, BoundLiteralExpression):
            return expression.value
        if isinstance(expression, BoundBinaryExpression):
            return self._evaluate_binary_expression(expression)
        if isinstance(expression, BoundUnaryExpression):
            return self._evaluate_unary_expression(expression)
        raise CompileError(internal_error(
            f"cannot evaluate {type(expression).__name__}"
        ))

    def _evaluate_unary_expression(self, expression: BoundUnaryExpression) -> Optional[DumbBrainObject]:
        operand = self._evaluate_expression(expression.operand)
        operation = expression.operation
        if operation is UnaryOperation.IDENTITY:
            return operand
        if expression.type is not NUMBER:
            raise CompileError(type_error(str(operation), [str(expression.type)]))
        return Number(-_number(operand, operation))

    def _evaluate_binary_expression(self, expression: BoundBinaryExpression) -> DumbBrainObject:
        left = self._evaluate_expression(expression.left)
        right = self._evaluate_expression(expression.right)
        operation = expression.operation

        if operation in ARITHMETIC_OPERATIONS:
            return evaluate_arithmetic(
                _number(left, operation), _number(right, operation), operation,
            )
        if operation in COMPARISON_OPERATIONS:
            return evaluate_comparison(
                _present(left, operation), _present(right, operation), operation,
            )
        if operation in LOGICAL_OPERATIONS:
            return evaluate_boolean_operation(
                _present(left, operation), _present(right, operation), operation,
            )
        raise CompileError(internal_error(f"unknown binary operation {operation}"))


def evaluate_arithmetic(a: float, b: float, operation: BinaryOperation) -> Number:
    if operation is BinaryOperation.ADD:
        return Number(a + b)
    if operation is BinaryOperation.SUBTRACT:
        return Number(a - b)
    if operation is BinaryOperation.MULTIPLY:
        return Number(a * b)
    if operation is BinaryOperation.DIVIDE:
        return Number(divide(a, b))
    raise CompileError(internal_error(f"{operation} is not arithmetic"))


def evaluate_comparison(
    left: DumbBrainObject,
    right: DumbBrainObject,
    operation: BinaryOperation,
) -> Boolean:
    if isinstance(left, Number) and isinstance(right, Number):
        n, m = left.value, right.value
        if operation is BinaryOperation.EQUALITY:
            return Boolean(abs(n - m) < FLOATING_POINT_DELTA)
        if operation is BinaryOperation.INEQUALITY:
            return Boolean(abs(n - m) > FLOATING_POINT_DELTA)
        if operation is BinaryOperation.LESS:
            return Boolean(n < m)
        if operation is BinaryOperation.LESS_EQUALS:
            return Boolean(n <= m)
        if operation is BinaryOperation.GREATER:
            return Boolean(n > m)
        if operation is BinaryOperation.GREATER_EQUALS:
            return Boolean(n >= m)

    elif isinstance(left, Boolean) and isinstance(right, Boolean):
        if operation not in EQUALITY_OPERATIONS:
            raise CompileError(type_error(
                str(operation), ["Boolean", "Boolean"],
                message=f"type mismatch: cannot perform comparison {operation} on Boolean and Boolean",
            ))
        if operation is BinaryOperation.EQUALITY:
            return Boolean(left.value == right.value)
        return Boolean(left.value != right.value)

    else:
        raise CompileError(type_error(
            str(operation), [str(left.type), str(right.type)],
            message=f"type mismatch on {operation}: {left.type} vs {right.type}",
        ))

    raise CompileError(internal_error(f"{operation} is not a comparison"))


def evaluate_boolean_operation(
    left: DumbBrainObject,
    right: DumbBrainObject,
    operation: BinaryOperation,
) -> Boolean:
    if not (isinstance(left, Boolean) and isinstance(right, Boolean)):
        raise CompileError(type_error(
            str(operation), [str(left.type), str(right.type)],
            message=f"mismatched types for {operation}: {left.type} and {right.type}",
        ))
    if operation is BinaryOperation.LOGICAL_AND:
        return Boolean(left.value and right.value)
    if operation is BinaryOperation.LOGICAL_OR:
        return Boolean(left.value or right.value)
    raise CompileError(internal_error(f"{operation} is not a logical operation"))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def evaluate(bound_tree: BoundExpression) -> Optional[DumbBrainObject]:
    """Evaluate a bound tree. Raises CompileError on a runtime type mismatch."""
    return Evaluator(bound_tree).evaluate()
