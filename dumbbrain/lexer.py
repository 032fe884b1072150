"""DumbBrain Lexer — tokenizer with line/column tracking.

Produces a lazy stream of tokens covering the whole source text. Nothing is
dropped: whitespace becomes WhitespaceToken and unrecognised characters become
BadToken, so concatenating the text of every token reproduces the source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from dumbbrain.errors import SourceLocation
from dumbbrain.objects import DumbBrainObject, Number, TRUE, FALSE
from dumbbrain.syntax import (
    SyntaxKind, KEYWORDS, SINGLE_CHARACTER_TOKENS,
    DIGRAPH_TOKENS, DIGRAPH_FALLBACK_TOKENS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Span:
    """Half-open line/column extent of a token, all 1-based."""
    first_line: int
    first_column: int
    last_line: int
    last_column: int

    def __str__(self) -> str:
        return f"{self.first_line}:{self.first_column}-{self.last_line}:{self.last_column}"


@dataclass(frozen=True)
class Token:
    kind: SyntaxKind
    position: int
    text: str
    value: Optional[DumbBrainObject]
    span: Span

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.span.first_line, self.span.first_column)

    def children(self) -> list:
        return []

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.text!r}, {self.span})"


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


# str.isspace also accepts the information separators U+001C..U+001F,
# which are not Unicode White_Space.
_NON_WHITESPACE_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def _is_whitespace(ch: str) -> bool:
    return ch.isspace() and ch not in _NON_WHITESPACE_SEPARATORS


_KEYWORD_VALUES: dict[SyntaxKind, DumbBrainObject] = {
    SyntaxKind.TRUE_KEYWORD: TRUE,
    SyntaxKind.FALSE_KEYWORD: FALSE,
}


class Lexer:
    """Iterator over the tokens of one source text.

    A Lexer is consumed once; lex the text again with a new Lexer to restart.
    ``position`` on each token is the UTF-8 byte offset of its first character.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.offset = 0
        self.line = 1
        self.column = 1

    def __iter__(self) -> Lexer:
        return self

    def __next__(self) -> Token:
        if self.pos >= len(self.source):
            raise StopIteration
        return self._next_token()

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        self.offset += len(ch.encode("utf-8"))
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _advance_while(self, predicate: Callable[[str], bool]) -> str:
        consumed = ""
        while self.pos < len(self.source) and predicate(self.source[self.pos]):
            consumed += self._advance()
        return consumed

    def _next_token(self) -> Token:
        start = self.offset
        first_line, first_column = self.line, self.column
        ch = self._advance()
        value: Optional[DumbBrainObject] = None

        if _is_ascii_digit(ch):
            lexeme = ch + self._advance_while(_is_ascii_digit)
            kind = SyntaxKind.NUMBER_TOKEN
            value = Number(float(lexeme))
        elif ch.isalpha():
            lexeme = ch + self._advance_while(str.isalnum)
            kind = KEYWORDS.get(lexeme, SyntaxKind.IDENTIFIER_TOKEN)
            value = _KEYWORD_VALUES.get(kind)
        elif _is_whitespace(ch):
            lexeme = ch + self._advance_while(_is_whitespace)
            kind = SyntaxKind.WHITESPACE_TOKEN
        elif ch in SINGLE_CHARACTER_TOKENS:
            lexeme = ch
            kind = SINGLE_CHARACTER_TOKENS[ch]
        else:
            lexeme = ch
            following = self._peek()
            if following is not None and ch + following in DIGRAPH_TOKENS:
                lexeme += self._advance()
                kind = DIGRAPH_TOKENS[lexeme]
            else:
                kind = DIGRAPH_FALLBACK_TOKENS.get(ch, SyntaxKind.BAD_TOKEN)

        span = Span(first_line, first_column, self.line, self.column)
        return Token(kind, start, lexeme, value, span)


def lex(source: str) -> Iterator[Token]:
    """Lazily tokenize ``source`` from the beginning."""
    return Lexer(source)


def tokenize(source: str) -> list[Token]:
    """Convenience function to tokenize DumbBrain source eagerly."""
    tokens = list(Lexer(source))
    logger.debug("lexed %d tokens from %d characters", len(tokens), len(source))
    return tokens
