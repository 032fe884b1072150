"""Front-to-back pipeline: lex, parse, bind, evaluate.

Syntax diagnostics stop the pipeline before binding. Type errors abort it
with a CompileError; there is never a partial result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from dumbbrain.ast_nodes import ExpressionSyntax
from dumbbrain.binder import bind
from dumbbrain.bound_tree import BoundExpression
from dumbbrain.errors import CompileError, nesting_limit, syntax_error
from dumbbrain.evaluator import evaluate as evaluate_bound
from dumbbrain.lexer import Token, tokenize
from dumbbrain.objects import DumbBrainObject
from dumbbrain.parser import parse

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Every intermediate artefact of one pipeline run."""
    source: str
    tokens: list[Token] = field(default_factory=list)
    syntax: Optional[ExpressionSyntax] = None
    diagnostics: list[str] = field(default_factory=list)
    bound: Optional[BoundExpression] = None
    value: Optional[DumbBrainObject] = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def run(source: str) -> PipelineResult:
    """Run the pipeline, keeping the intermediate results.

    Stops after parsing when there are diagnostics. Raises CompileError on
    any fatal error, including input nested too deeply for the interpreter
    stack.
    """
    result = PipelineResult(source=source)
    result.tokens = tokenize(source)
    with nesting_limit():
        result.syntax, result.diagnostics = parse(result.tokens)
        if result.diagnostics:
            logger.debug("parse produced %d diagnostics", len(result.diagnostics))
            return result
        result.bound = bind(result.syntax)
        result.value = evaluate_bound(result.bound)
    return result


def evaluate(source: str) -> Optional[DumbBrainObject]:
    """Evaluate DumbBrain source text to a runtime value.

    Raises CompileError carrying one syntax error per diagnostic, or the
    type error that aborted binding or evaluation.
    """
    result = run(source)
    if result.diagnostics:
        raise CompileError([syntax_error(d) for d in result.diagnostics])
    return result.value
