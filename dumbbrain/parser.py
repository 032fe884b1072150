"""DumbBrain Parser — precedence-climbing expression parser.

Parses a token stream into an untyped syntax tree. Whitespace is trivia: the
TokenCursor skips it before every peek or consume, so grammar rules never see
it.

Syntax problems that can be stepped over (a missing closing parenthesis, say)
are recorded as positioned diagnostics and parsing carries on. A token that
cannot start an expression aborts the parse with a CompileError that carries
every diagnostic recorded so far.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Sequence

from dumbbrain.ast_nodes import (
    ExpressionSyntax, LiteralExpression, BinaryExpression,
    UnaryExpression, ParenthesizedExpression,
)
from dumbbrain.errors import CompileError, syntax_error
from dumbbrain.lexer import Token, lex
from dumbbrain.syntax import SyntaxKind, LITERAL_TOKENS

logger = logging.getLogger(__name__)


class TokenCursor:
    """One-token lookahead over a token stream that skips trivia."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Optional[Token] = None
        self.end_line = 1
        self.end_column = 1

    def _fill(self) -> None:
        if self._lookahead is None:
            self._lookahead = next(self._tokens, None)
            if self._lookahead is not None:
                self.end_line = self._lookahead.span.last_line
                self.end_column = self._lookahead.span.last_column

    def skip_trivia(self) -> None:
        self._fill()
        while self._lookahead is not None and self._lookahead.kind.is_trivia():
            self._lookahead = None
            self._fill()

    def peek(self) -> Optional[Token]:
        self.skip_trivia()
        return self._lookahead

    def next(self) -> Optional[Token]:
        token = self.peek()
        self._lookahead = None
        return token


class Parser:
    """Precedence-climbing parser for DumbBrain expressions."""

    def __init__(self, tokens: Iterable[Token]):
        self._cursor = TokenCursor(tokens)
        self._expected_kinds: list[SyntaxKind] = []
        self.diagnostics: list[str] = []

    # -------------------------------------------------------------------
    # Cursor helpers
    # -------------------------------------------------------------------

    def _peek(self) -> Optional[Token]:
        return self._cursor.peek()

    def _bump(self) -> Optional[Token]:
        self._expected_kinds.clear()
        return self._cursor.next()

    def _check(self, kinds: Sequence[SyntaxKind]) -> bool:
        token = self._peek()
        self._expected_kinds.extend(kinds)
        return token is not None and token.kind in kinds

    def _expect(self, kind: SyntaxKind) -> Optional[Token]:
        if self._check((kind,)):
            return self._bump()
        self._error()
        return None

    # -------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------

    def _position(self, token: Optional[Token]) -> str:
        if token is None:
            return f"{self._cursor.end_line}:{self._cursor.end_column}"
        return f"{token.span.first_line}:{token.span.first_column}"

    def _expected_message(self, token: Optional[Token]) -> str:
        kinds = [str(kind) for kind in self._expected_kinds]
        if len(kinds) > 1:
            expected = ", ".join(kinds[:-1]) + " or " + kinds[-1]
        else:
            expected = "".join(kinds)
        return f"at {self._position(token)}: expected {expected}"

    def _record(self, message: str) -> None:
        logger.debug("syntax diagnostic: %s", message)
        self.diagnostics.append(message)

    def _error(self) -> None:
        """Record what was expected, then step over the offending token."""
        token = self._cursor.next()
        self._record(self._expected_message(token))
        self._expected_kinds.clear()

    def _fail(self) -> CompileError:
        self._record(self._expected_message(self._peek()))
        return CompileError([syntax_error(d) for d in self.diagnostics])

    # -------------------------------------------------------------------
    # Expressions (precedence climbing)
    # -------------------------------------------------------------------

    def parse(self) -> ExpressionSyntax:
        return self._parse_expression(0)

    def _parse_expression(self, parent_precedence: int) -> ExpressionSyntax:
        token = self._peek()
        unary_precedence = token.kind.unary_precedence() if token else 0
        if unary_precedence != 0 and unary_precedence >= parent_precedence:
            operator_token = self._bump()
            operand = self._parse_expression(unary_precedence)
            left: ExpressionSyntax = UnaryExpression(operator_token, operand)
        else:
            left = self._parse_primary_expression()

        while True:
            token = self._peek()
            precedence = token.kind.binary_precedence() if token else 0
            if precedence == 0 or precedence <= parent_precedence:
                return left
            operator_token = self._bump()
            right = self._parse_expression(precedence)
            left = BinaryExpression(left, operator_token, right)

    def _parse_primary_expression(self) -> ExpressionSyntax:
        if self._check(LITERAL_TOKENS):
            return LiteralExpression(self._bump())

        if self._check((SyntaxKind.LEFT_PARENTHESIS_TOKEN,)):
            left_parenthesis_token = self._bump()
            expression = self.parse()
            right_parenthesis_token = self._expect(SyntaxKind.RIGHT_PARENTHESIS_TOKEN)
            return ParenthesizedExpression(
                left_parenthesis_token, expression, right_parenthesis_token,
            )

        raise self._fail()

    def expect_end_of_input(self) -> None:
        token = self._peek()
        if token is not None:
            self._record(
                f"at {self._position(token)}: unexpected {token.kind} after end of expression"
            )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse(tokens: Iterable[Token]) -> tuple[ExpressionSyntax, list[str]]:
    """Parse one top-level expression. Returns the tree and its diagnostics."""
    parser = Parser(tokens)
    expression = parser.parse()
    parser.expect_end_of_input()
    return expression, parser.diagnostics


def parse_source(source: str) -> tuple[ExpressionSyntax, list[str]]:
    """Lex and parse DumbBrain source text."""
    return parse(lex(source))
