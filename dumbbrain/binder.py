"""DumbBrain Binder — static typing of syntax trees.

Walks an untyped ExpressionSyntax and produces a BoundExpression whose every
node carries its static type and whose operators are resolved to semantic
operations.

Arithmetic and unary operators are type-checked here. Comparison and logical
operators are typed Boolean without looking at their operands; operand
compatibility for them is checked when the tree is evaluated.
"""

from __future__ import annotations

import logging

from dumbbrain.ast_nodes import (
    ExpressionSyntax, LiteralExpression, BinaryExpression,
    UnaryExpression, ParenthesizedExpression,
)
from dumbbrain.bound_tree import (
    BoundExpression, BoundLiteralExpression, BoundBinaryExpression,
    BoundUnaryExpression, BinaryOperation, UnaryOperation,
    ARITHMETIC_OPERATIONS,
)
from dumbbrain.errors import CompileError, type_error, internal_error
from dumbbrain.lexer import Token
from dumbbrain.syntax import SyntaxKind
from dumbbrain.types import DumbBrainType, NUMBER, BOOLEAN

logger = logging.getLogger(__name__)


BINARY_OPERATIONS: dict[SyntaxKind, BinaryOperation] = {
    SyntaxKind.PLUS_TOKEN: BinaryOperation.ADD,
    SyntaxKind.MINUS_TOKEN: BinaryOperation.SUBTRACT,
    SyntaxKind.STAR_TOKEN: BinaryOperation.MULTIPLY,
    SyntaxKind.SLASH_TOKEN: BinaryOperation.DIVIDE,
    SyntaxKind.EQUALS_EQUALS_TOKEN: BinaryOperation.EQUALITY,
    SyntaxKind.BANG_EQUALS_TOKEN: BinaryOperation.INEQUALITY,
    SyntaxKind.LESS_TOKEN: BinaryOperation.LESS,
    SyntaxKind.LESS_EQUALS_TOKEN: BinaryOperation.LESS_EQUALS,
    SyntaxKind.GREATER_TOKEN: BinaryOperation.GREATER,
    SyntaxKind.GREATER_EQUALS_TOKEN: BinaryOperation.GREATER_EQUALS,
    SyntaxKind.AMPERSAND_AMPERSAND_TOKEN: BinaryOperation.LOGICAL_AND,
    SyntaxKind.PIPE_PIPE_TOKEN: BinaryOperation.LOGICAL_OR,
}

UNARY_OPERATIONS: dict[SyntaxKind, UnaryOperation] = {
    SyntaxKind.PLUS_TOKEN: UnaryOperation.IDENTITY,
    SyntaxKind.MINUS_TOKEN: UnaryOperation.NEGATION,
}

LITERAL_TYPES: dict[SyntaxKind, DumbBrainType] = {
    SyntaxKind.NUMBER_TOKEN: NUMBER,
    SyntaxKind.TRUE_KEYWORD: BOOLEAN,
    SyntaxKind.FALSE_KEYWORD: BOOLEAN,
}


def resolve_binary_operation(kind: SyntaxKind) -> BinaryOperation:
    try:
        return BINARY_OPERATIONS[kind]
    except KeyError:
        raise CompileError(internal_error(f"{kind} is not a binary operator")) from None


def resolve_unary_operation(kind: SyntaxKind) -> UnaryOperation:
    try:
        return UNARY_OPERATIONS[kind]
    except KeyError:
        raise CompileError(internal_error(f"{kind} is not a unary operator")) from None


class Binder:
    """Binds untyped expressions to typed ones."""

    def bind_expression(self, expression: ExpressionSyntax) -> BoundExpression:
        if isinstance(expression, LiteralExpression):
            return self._bind_literal_expression(expression.literal_token)
        if isinstance(expression, BinaryExpression):
            return self._bind_binary_expression(expression)
        if isinstance(expression, UnaryExpression):
            return self._bind_unary_expression(expression)
        if isinstance(expression, ParenthesizedExpression):
            return self.bind_expression(expression.expression)
        raise CompileError(internal_error(
            f"cannot bind {type(expression).__name__}"
        ))

    def _bind_literal_expression(self, literal_token: Token) -> BoundExpression:
        literal_type = LITERAL_TYPES.get(literal_token.kind)
        if literal_type is None:
            raise CompileError(internal_error(
                f"{literal_token.kind} is not a literal"
            ))
        return BoundLiteralExpression(literal_type, literal_token.value)

    def _bind_binary_expression(self, expression: BinaryExpression) -> BoundExpression:
        left = self.bind_expression(expression.left)
        right = self.bind_expression(expression.right)
        operator_token = expression.operator_token
        operation = resolve_binary_operation(operator_token.kind)

        if operation in ARITHMETIC_OPERATIONS:
            if left.type is not NUMBER or right.type is not NUMBER:
                raise CompileError(type_error(
                    str(operation),
                    [str(left.type), str(right.type)],
                    operator_token.location,
                ))
            result_type = NUMBER
        else:
            result_type = BOOLEAN

        return BoundBinaryExpression(result_type, left, right, operation)

    def _bind_unary_expression(self, expression: UnaryExpression) -> BoundExpression:
        operand = self.bind_expression(expression.operand)
        operator_token = expression.operator_token
        operation = resolve_unary_operation(operator_token.kind)
        if operand.type is not NUMBER:
            raise CompileError(type_error(
                str(operation),
                [str(operand.type)],
                operator_token.location,
            ))
        return BoundUnaryExpression(NUMBER, operand, operation)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def bind(expression: ExpressionSyntax) -> BoundExpression:
    """Bind an untyped syntax tree. Raises CompileError on a type mismatch."""
    bound = Binder().bind_expression(expression)
    logger.debug("bound expression of type %s", bound.type)
    return bound
