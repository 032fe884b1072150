"""DumbBrain runtime values.

A runtime value is either a ``Number`` (IEEE-754 double) or a ``Boolean``.
Equality and ordering are only defined between values of the same variant:
``Number(1.0) == Boolean(True)`` is false, ``Number(1.0) < Boolean(True)``
raises ``TypeError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from dumbbrain.types import DumbBrainType, NUMBER, BOOLEAN


@dataclass(frozen=True, order=True)
class DumbBrainObject:
    """Base runtime value."""

    @property
    def type(self) -> DumbBrainType:
        raise NotImplementedError

    def is_number(self) -> bool:
        return isinstance(self, Number)

    def is_boolean(self) -> bool:
        return isinstance(self, Boolean)

    def to_dict(self) -> dict[str, Any]:
        value = getattr(self, "value", None)
        # JSON has no literal for infinities or NaN
        if isinstance(value, float) and not math.isfinite(value):
            value = str(self)
        return {"type": str(self.type), "value": value}


@dataclass(frozen=True, order=True)
class Number(DumbBrainObject):
    value: float = 0.0

    @property
    def type(self) -> DumbBrainType:
        return NUMBER

    def __str__(self) -> str:
        n = self.value
        if math.isnan(n):
            return "NaN"
        if math.isinf(n):
            return "inf" if n > 0 else "-inf"
        if n.is_integer():
            return f"{n:.0f}"
        return repr(n)


@dataclass(frozen=True, order=True)
class Boolean(DumbBrainObject):
    value: bool = False

    @property
    def type(self) -> DumbBrainType:
        return BOOLEAN

    def __str__(self) -> str:
        return "true" if self.value else "false"


TRUE = Boolean(True)
FALSE = Boolean(False)
