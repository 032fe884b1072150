"""DumbBrain static types.

The lattice is closed: an expression is statically either a Number or a
Boolean, nothing else.
"""

from __future__ import annotations

from enum import Enum


class DumbBrainType(Enum):
    NUMBER = "Number"
    BOOLEAN = "Boolean"

    def __str__(self) -> str:
        return self.value


NUMBER = DumbBrainType.NUMBER
BOOLEAN = DumbBrainType.BOOLEAN
