"""Binder tests — static types and operator resolution."""

import json

import pytest

from dumbbrain.ast_nodes import LiteralExpression
from dumbbrain.binder import bind, resolve_binary_operation, resolve_unary_operation
from dumbbrain.bound_tree import (
    BinaryOperation, BoundBinaryExpression, BoundLiteralExpression,
    BoundUnaryExpression, UnaryOperation,
)
from dumbbrain.errors import CompileError, ErrorKind
from dumbbrain.lexer import tokenize
from dumbbrain.objects import Number, Boolean
from dumbbrain.parser import parse_source
from dumbbrain.syntax import SyntaxKind
from dumbbrain.types import DumbBrainType


def bind_source(source: str):
    expression, diagnostics = parse_source(source)
    assert diagnostics == []
    return bind(expression)


class TestLiterals:

    def test_number_literal(self):
        bound = bind_source("3")
        assert isinstance(bound, BoundLiteralExpression)
        assert bound.type is DumbBrainType.NUMBER
        assert bound.value == Number(3.0)

    def test_boolean_literal(self):
        bound = bind_source("false")
        assert bound.type is DumbBrainType.BOOLEAN
        assert bound.value == Boolean(False)

    def test_parentheses_are_erased(self):
        bound = bind_source("((7))")
        assert isinstance(bound, BoundLiteralExpression)
        assert bound.value == Number(7.0)

    def test_non_literal_token_is_internal_error(self):
        token = tokenize("x")[0]
        with pytest.raises(CompileError) as exc_info:
            bind(LiteralExpression(token))
        assert exc_info.value.kind is ErrorKind.INTERNAL_ERROR


class TestOperators:

    def test_arithmetic_is_number(self):
        bound = bind_source("1 + 2 * 3")
        assert isinstance(bound, BoundBinaryExpression)
        assert bound.type is DumbBrainType.NUMBER
        assert bound.operation is BinaryOperation.ADD
        assert bound.right.operation is BinaryOperation.MULTIPLY

    @pytest.mark.parametrize("source,operation", [
        ("1 == 2", BinaryOperation.EQUALITY),
        ("1 != 2", BinaryOperation.INEQUALITY),
        ("1 < 2", BinaryOperation.LESS),
        ("1 <= 2", BinaryOperation.LESS_EQUALS),
        ("1 > 2", BinaryOperation.GREATER),
        ("1 >= 2", BinaryOperation.GREATER_EQUALS),
        ("true && false", BinaryOperation.LOGICAL_AND),
        ("true || false", BinaryOperation.LOGICAL_OR),
    ])
    def test_comparison_and_logical_are_boolean(self, source, operation):
        bound = bind_source(source)
        assert bound.type is DumbBrainType.BOOLEAN
        assert bound.operation is operation

    def test_comparison_operands_are_not_checked(self):
        bound = bind_source("1 < true")
        assert bound.type is DumbBrainType.BOOLEAN

    def test_unary_operations(self):
        plus = bind_source("+1")
        minus = bind_source("-1")
        assert isinstance(plus, BoundUnaryExpression)
        assert plus.operation is UnaryOperation.IDENTITY
        assert minus.operation is UnaryOperation.NEGATION
        assert minus.type is DumbBrainType.NUMBER

    def test_operator_resolution(self):
        assert resolve_binary_operation(SyntaxKind.SLASH_TOKEN) is BinaryOperation.DIVIDE
        assert resolve_unary_operation(SyntaxKind.MINUS_TOKEN) is UnaryOperation.NEGATION

    def test_unknown_operator_is_internal_error(self):
        with pytest.raises(CompileError) as exc_info:
            resolve_binary_operation(SyntaxKind.LEFT_PARENTHESIS_TOKEN)
        assert exc_info.value.kind is ErrorKind.INTERNAL_ERROR
        with pytest.raises(CompileError):
            resolve_unary_operation(SyntaxKind.STAR_TOKEN)


class TestTypeErrors:

    def test_boolean_plus_number(self):
        with pytest.raises(CompileError) as exc_info:
            bind_source("true + 1")
        err = exc_info.value.errors[0]
        assert err.kind is ErrorKind.TYPE_ERROR
        assert err.message == "unexpected types for Add: Boolean, Number"
        assert err.details == {"operation": "Add", "operand_types": ["Boolean", "Number"]}
        assert err.location.line == 1
        assert err.location.column == 6

    def test_comparison_result_in_arithmetic(self):
        with pytest.raises(CompileError) as exc_info:
            bind_source("(1 < 2) * 3")
        assert exc_info.value.errors[0].details["operation"] == "Multiply"

    def test_negating_a_boolean(self):
        with pytest.raises(CompileError) as exc_info:
            bind_source("-true")
        err = exc_info.value.errors[0]
        assert err.details == {"operation": "Negation", "operand_types": ["Boolean"]}

    def test_error_is_valid_json(self):
        with pytest.raises(CompileError) as exc_info:
            bind_source("1 - false")
        parsed = json.loads(exc_info.value.to_json())
        assert parsed[0]["kind"] == "type_error"
        assert parsed[0]["details"]["operand_types"] == ["Number", "Boolean"]
