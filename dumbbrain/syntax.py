"""Syntax kinds and operator binding powers.

``SyntaxKind`` tags both lexical categories (tokens, keywords) and syntax
tree node categories. The node kinds are only used for display.
"""

from __future__ import annotations

from enum import Enum


class SyntaxKind(Enum):
    # Tokens
    NUMBER_TOKEN = "NumberToken"
    WHITESPACE_TOKEN = "WhitespaceToken"
    PLUS_TOKEN = "PlusToken"
    MINUS_TOKEN = "MinusToken"
    STAR_TOKEN = "StarToken"
    SLASH_TOKEN = "SlashToken"
    LEFT_PARENTHESIS_TOKEN = "LeftParenthesisToken"
    RIGHT_PARENTHESIS_TOKEN = "RightParenthesisToken"
    EQUALS_EQUALS_TOKEN = "EqualsEqualsToken"
    BANG_EQUALS_TOKEN = "BangEqualsToken"
    LESS_TOKEN = "LessToken"
    LESS_EQUALS_TOKEN = "LessEqualsToken"
    GREATER_TOKEN = "GreaterToken"
    GREATER_EQUALS_TOKEN = "GreaterEqualsToken"
    AMPERSAND_AMPERSAND_TOKEN = "AmpersandAmpersandToken"
    PIPE_PIPE_TOKEN = "PipePipeToken"
    IDENTIFIER_TOKEN = "IdentifierToken"
    BAD_TOKEN = "BadToken"

    # Keywords
    TRUE_KEYWORD = "TrueKeyword"
    FALSE_KEYWORD = "FalseKeyword"

    # Nodes
    LITERAL_EXPRESSION = "LiteralExpression"
    BINARY_EXPRESSION = "BinaryExpression"
    UNARY_EXPRESSION = "UnaryExpression"
    PARENTHESIZED_EXPRESSION = "ParenthesizedExpression"

    def __str__(self) -> str:
        return self.value

    def unary_precedence(self) -> int:
        """Binding power as a prefix operator, 0 if it is not one."""
        return UNARY_PRECEDENCE.get(self, 0)

    def binary_precedence(self) -> int:
        """Binding power as an infix operator, 0 if it is not one."""
        return BINARY_PRECEDENCE.get(self, 0)

    def is_trivia(self) -> bool:
        return self is SyntaxKind.WHITESPACE_TOKEN


KEYWORDS: dict[str, SyntaxKind] = {
    "true": SyntaxKind.TRUE_KEYWORD,
    "false": SyntaxKind.FALSE_KEYWORD,
}

SINGLE_CHARACTER_TOKENS: dict[str, SyntaxKind] = {
    "+": SyntaxKind.PLUS_TOKEN,
    "-": SyntaxKind.MINUS_TOKEN,
    "*": SyntaxKind.STAR_TOKEN,
    "/": SyntaxKind.SLASH_TOKEN,
    "(": SyntaxKind.LEFT_PARENTHESIS_TOKEN,
    ")": SyntaxKind.RIGHT_PARENTHESIS_TOKEN,
}

# Two-character operators, keyed by their lexeme.
DIGRAPH_TOKENS: dict[str, SyntaxKind] = {
    "==": SyntaxKind.EQUALS_EQUALS_TOKEN,
    "!=": SyntaxKind.BANG_EQUALS_TOKEN,
    "<=": SyntaxKind.LESS_EQUALS_TOKEN,
    ">=": SyntaxKind.GREATER_EQUALS_TOKEN,
    "&&": SyntaxKind.AMPERSAND_AMPERSAND_TOKEN,
    "||": SyntaxKind.PIPE_PIPE_TOKEN,
}

# Characters that stand alone when no digraph follows. A lone '=', '!',
# '&' or '|' is a BadToken.
DIGRAPH_FALLBACK_TOKENS: dict[str, SyntaxKind] = {
    "<": SyntaxKind.LESS_TOKEN,
    ">": SyntaxKind.GREATER_TOKEN,
}

UNARY_PRECEDENCE: dict[SyntaxKind, int] = {
    SyntaxKind.PLUS_TOKEN: 6,
    SyntaxKind.MINUS_TOKEN: 6,
}

# Equality binds looser than && and ||: "a && b == c" parses as "(a && b) == c".
BINARY_PRECEDENCE: dict[SyntaxKind, int] = {
    SyntaxKind.STAR_TOKEN: 5,
    SyntaxKind.SLASH_TOKEN: 5,
    SyntaxKind.PLUS_TOKEN: 4,
    SyntaxKind.MINUS_TOKEN: 4,
    SyntaxKind.LESS_TOKEN: 3,
    SyntaxKind.LESS_EQUALS_TOKEN: 3,
    SyntaxKind.GREATER_TOKEN: 3,
    SyntaxKind.GREATER_EQUALS_TOKEN: 3,
    SyntaxKind.AMPERSAND_AMPERSAND_TOKEN: 2,
    SyntaxKind.PIPE_PIPE_TOKEN: 2,
    SyntaxKind.EQUALS_EQUALS_TOKEN: 1,
    SyntaxKind.BANG_EQUALS_TOKEN: 1,
}

LITERAL_TOKENS: tuple[SyntaxKind, ...] = (
    SyntaxKind.NUMBER_TOKEN,
    SyntaxKind.TRUE_KEYWORD,
    SyntaxKind.FALSE_KEYWORD,
)
