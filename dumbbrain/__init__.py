"""DumbBrain — a minimal typed expression language.

Source text flows through four stages: lexer, parser, binder, evaluator.
"""

__version__ = "0.1.0"

from dumbbrain.errors import CompileError, DumbBrainError, ErrorKind
from dumbbrain.objects import DumbBrainObject, Number, Boolean
from dumbbrain.types import DumbBrainType
from dumbbrain.pipeline import evaluate, run
