"""Structured error objects for the DumbBrain pipeline.

Every error is machine-readable. Syntax diagnostics are positioned, type
errors name the offending operation and the operand types involved.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class ErrorKind(Enum):
    SYNTAX_ERROR = "syntax_error"
    TYPE_ERROR = "type_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int
    file: str = "<stdin>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass
class DumbBrainError:
    kind: ErrorKind
    message: str
    location: Optional[SourceLocation] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.location:
            d["location"] = {
                "file": self.location.file,
                "line": self.location.line,
                "column": self.location.column,
            }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        return f"[{self.kind.value}]{loc}: {self.message}"


def syntax_error(
    message: str,
    location: Optional[SourceLocation] = None,
) -> DumbBrainError:
    return DumbBrainError(
        kind=ErrorKind.SYNTAX_ERROR,
        message=message,
        location=location,
    )


def type_error(
    operation: str,
    operand_types: list[str],
    location: Optional[SourceLocation] = None,
    message: Optional[str] = None,
) -> DumbBrainError:
    """A fatal operand-type mismatch for ``operation``.

    ``operand_types`` is listed left to right; the default message reads
    ``unexpected types for Add: Boolean, Number``.
    """
    if message is None:
        message = f"unexpected types for {operation}: {', '.join(operand_types)}"
    return DumbBrainError(
        kind=ErrorKind.TYPE_ERROR,
        message=message,
        location=location,
        details={
            "operation": operation,
            "operand_types": list(operand_types),
        },
    )


def internal_error(message: str) -> DumbBrainError:
    return DumbBrainError(kind=ErrorKind.INTERNAL_ERROR, message=message)


class CompileError(Exception):
    """Exception wrapping one or more DumbBrainErrors."""

    def __init__(self, errors: list[DumbBrainError] | DumbBrainError):
        if isinstance(errors, DumbBrainError):
            errors = [errors]
        self.errors = errors
        super().__init__(self._format())

    @property
    def kind(self) -> ErrorKind:
        return self.errors[0].kind

    def _format(self) -> str:
        return "\n".join(str(e) for e in self.errors)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps([e.to_dict() for e in self.errors], indent=indent)


@contextmanager
def nesting_limit() -> Iterator[None]:
    """Turn interpreter stack exhaustion on deeply nested input into a CompileError."""
    try:
        yield
    except RecursionError:
        raise CompileError(internal_error("expression nested too deeply")) from None
