"""DumbBrain untyped syntax tree.

Every node, like every Token, exposes ``kind``, ``value`` and ``children()``
so that display code can walk tokens and nodes uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

from dumbbrain.lexer import Token
from dumbbrain.objects import DumbBrainObject
from dumbbrain.syntax import SyntaxKind


class SyntaxNode(Protocol):
    """Read-only view shared by tokens and expression nodes."""

    @property
    def kind(self) -> SyntaxKind: ...

    @property
    def value(self) -> Optional[DumbBrainObject]: ...

    def children(self) -> Sequence[SyntaxNode]: ...


@dataclass(frozen=True)
class ExpressionSyntax:
    """Base class for expressions."""

    @property
    def kind(self) -> SyntaxKind:
        raise NotImplementedError

    @property
    def value(self) -> Optional[DumbBrainObject]:
        return None

    def children(self) -> list[Union[ExpressionSyntax, Token]]:
        raise NotImplementedError


@dataclass(frozen=True)
class LiteralExpression(ExpressionSyntax):
    literal_token: Token

    @property
    def kind(self) -> SyntaxKind:
        return SyntaxKind.LITERAL_EXPRESSION

    def children(self) -> list[Union[ExpressionSyntax, Token]]:
        return [self.literal_token]


@dataclass(frozen=True)
class BinaryExpression(ExpressionSyntax):
    left: ExpressionSyntax
    operator_token: Token
    right: ExpressionSyntax

    @property
    def kind(self) -> SyntaxKind:
        return SyntaxKind.BINARY_EXPRESSION

    def children(self) -> list[Union[ExpressionSyntax, Token]]:
        return [self.left, self.operator_token, self.right]


@dataclass(frozen=True)
class UnaryExpression(ExpressionSyntax):
    operator_token: Token
    operand: ExpressionSyntax

    @property
    def kind(self) -> SyntaxKind:
        return SyntaxKind.UNARY_EXPRESSION

    def children(self) -> list[Union[ExpressionSyntax, Token]]:
        return [self.operator_token, self.operand]


@dataclass(frozen=True)
class ParenthesizedExpression(ExpressionSyntax):
    """``( expression )``. The closing token is None when it was missing."""
    left_parenthesis_token: Token
    expression: ExpressionSyntax
    right_parenthesis_token: Optional[Token]

    @property
    def kind(self) -> SyntaxKind:
        return SyntaxKind.PARENTHESIZED_EXPRESSION

    def children(self) -> list[Union[ExpressionSyntax, Token]]:
        children: list[Union[ExpressionSyntax, Token]] = [
            self.left_parenthesis_token, self.expression,
        ]
        if self.right_parenthesis_token is not None:
            children.append(self.right_parenthesis_token)
        return children
