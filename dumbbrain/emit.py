"""DumbBrain Emit — bound tree to LLVM IR via llvmlite.

The whole expression becomes one function, ``dumbbrain_main``, taking no
arguments and returning a ``double`` for Number expressions or an ``i8``
(0 or 1) for Boolean ones. Lowering keeps the evaluator's semantics: the
1e-6 equality tolerance, IEEE division, and non-short-circuit ``&&``/``||``.

Because every operand type is known statically, the operand-type errors the
evaluator reports at run time are reported here at emit time.
"""

from __future__ import annotations

import ctypes
import logging
from typing import Any, Optional

from dumbbrain.bound_tree import (
    BoundExpression, BoundLiteralExpression, BoundBinaryExpression,
    BoundUnaryExpression, BinaryOperation, UnaryOperation,
    ARITHMETIC_OPERATIONS, COMPARISON_OPERATIONS, EQUALITY_OPERATIONS,
    LOGICAL_OPERATIONS,
)
from dumbbrain.errors import CompileError, type_error, internal_error
from dumbbrain.evaluator import FLOATING_POINT_DELTA
from dumbbrain.objects import DumbBrainObject, Number, Boolean
from dumbbrain.types import DumbBrainType, NUMBER, BOOLEAN

try:
    from llvmlite import ir as llvm_ir
    from llvmlite import binding as llvm_binding
    HAS_LLVMLITE = True
except ImportError:
    HAS_LLVMLITE = False

logger = logging.getLogger(__name__)

ENTRY_POINT = "dumbbrain_main"

_ORDERING_PREDICATES: dict[BinaryOperation, str] = {
    BinaryOperation.LESS: "<",
    BinaryOperation.LESS_EQUALS: "<=",
    BinaryOperation.GREATER: ">",
    BinaryOperation.GREATER_EQUALS: ">=",
}


def _require_llvmlite() -> None:
    if not HAS_LLVMLITE:
        raise RuntimeError("llvmlite is required to emit LLVM IR. Install with: pip install llvmlite")


class LLVMEmitter:
    """Emits an LLVM module for one bound expression."""

    def __init__(self):
        _require_llvmlite()
        self.module: Optional[Any] = None
        self._builder: Optional[Any] = None
        self._fabs: Optional[Any] = None

    def emit_module(self, bound_tree: BoundExpression, name: str = "dumbbrain") -> str:
        """Emit LLVM IR for the expression. Returns the LLVM IR string."""
        self.module = llvm_ir.Module(name=name)
        self.module.triple = llvm_binding.get_default_triple()
        self._fabs = self.module.declare_intrinsic("llvm.fabs", [llvm_ir.DoubleType()])

        if bound_tree.type is NUMBER:
            ret_type = llvm_ir.DoubleType()
        else:
            ret_type = llvm_ir.IntType(8)
        fn_type = llvm_ir.FunctionType(ret_type, [])
        func = llvm_ir.Function(self.module, fn_type, name=ENTRY_POINT)

        block = func.append_basic_block(name="entry")
        self._builder = llvm_ir.IRBuilder(block)

        result = self._emit_expression(bound_tree)
        if bound_tree.type is BOOLEAN:
            result = self._builder.zext(result, ret_type, name="result")
        self._builder.ret(result)

        return str(self.module)

    def _emit_expression(self, expression: BoundExpression) -> Any:
        if isinstance(expression, BoundLiteralExpression):
            return self._emit_literal(expression)
        if isinstance(expression, BoundUnaryExpression):
            return self._emit_unary(expression)
        if isinstance(expression, BoundBinaryExpression):
            return self._emit_binary(expression)
        raise CompileError(internal_error(
            f"cannot emit {type(expression).__name__}"
        ))

    def _emit_literal(self, expression: BoundLiteralExpression) -> Any:
        value = expression.value
        if value is None:
            raise CompileError(internal_error("cannot emit a literal without a value"))
        if expression.type is NUMBER:
            return llvm_ir.Constant(llvm_ir.DoubleType(), float(value.value))
        return llvm_ir.Constant(llvm_ir.IntType(1), 1 if value.value else 0)

    def _emit_unary(self, expression: BoundUnaryExpression) -> Any:
        operand = self._emit_expression(expression.operand)
        if expression.operation is UnaryOperation.IDENTITY:
            return operand
        if expression.type is not NUMBER:
            raise CompileError(type_error(str(expression.operation), [str(expression.type)]))
        negative_zero = llvm_ir.Constant(llvm_ir.DoubleType(), -0.0)
        return self._builder.fsub(negative_zero, operand, name="neg")

    def _emit_binary(self, expression: BoundBinaryExpression) -> Any:
        left = self._emit_expression(expression.left)
        right = self._emit_expression(expression.right)
        operation = expression.operation
        left_type = expression.left.type
        right_type = expression.right.type

        if operation in ARITHMETIC_OPERATIONS:
            return self._emit_arithmetic(operation, left, right)
        if operation in COMPARISON_OPERATIONS:
            return self._emit_comparison(operation, left, left_type, right, right_type)
        if operation in LOGICAL_OPERATIONS:
            if left_type is not BOOLEAN or right_type is not BOOLEAN:
                raise CompileError(type_error(
                    str(operation), [str(left_type), str(right_type)],
                    message=f"mismatched types for {operation}: {left_type} and {right_type}",
                ))
            if operation is BinaryOperation.LOGICAL_AND:
                return self._builder.and_(left, right, name="and")
            return self._builder.or_(left, right, name="or")
        raise CompileError(internal_error(f"unknown binary operation {operation}"))

    def _emit_arithmetic(self, operation: BinaryOperation, left: Any, right: Any) -> Any:
        if operation is BinaryOperation.ADD:
            return self._builder.fadd(left, right, name="add")
        if operation is BinaryOperation.SUBTRACT:
            return self._builder.fsub(left, right, name="sub")
        if operation is BinaryOperation.MULTIPLY:
            return self._builder.fmul(left, right, name="mul")
        return self._builder.fdiv(left, right, name="div")

    def _emit_comparison(
        self,
        operation: BinaryOperation,
        left: Any,
        left_type: DumbBrainType,
        right: Any,
        right_type: DumbBrainType,
    ) -> Any:
        if left_type is NUMBER and right_type is NUMBER:
            if operation in EQUALITY_OPERATIONS:
                difference = self._builder.fsub(left, right, name="diff")
                distance = self._builder.call(self._fabs, [difference], name="dist")
                delta = llvm_ir.Constant(llvm_ir.DoubleType(), FLOATING_POINT_DELTA)
                predicate = "<" if operation is BinaryOperation.EQUALITY else ">"
                return self._builder.fcmp_ordered(predicate, distance, delta, name="cmp")
            return self._builder.fcmp_ordered(
                _ORDERING_PREDICATES[operation], left, right, name="cmp",
            )

        if left_type is BOOLEAN and right_type is BOOLEAN:
            if operation not in EQUALITY_OPERATIONS:
                raise CompileError(type_error(
                    str(operation), ["Boolean", "Boolean"],
                    message=f"type mismatch: cannot perform comparison {operation} on Boolean and Boolean",
                ))
            predicate = "==" if operation is BinaryOperation.EQUALITY else "!="
            return self._builder.icmp_unsigned(predicate, left, right, name="cmp")

        raise CompileError(type_error(
            str(operation), [str(left_type), str(right_type)],
            message=f"type mismatch on {operation}: {left_type} vs {right_type}",
        ))


# ---------------------------------------------------------------------------
# Native compilation
# ---------------------------------------------------------------------------

def _initialize_llvm() -> None:
    """Initialize LLVM target machinery."""
    _require_llvmlite()
    llvm_binding.initialize_native_target()
    llvm_binding.initialize_native_asmprinter()


def compile_to_assembly(llvm_ir_str: str) -> str:
    """Compile LLVM IR string to native assembly."""
    _initialize_llvm()
    mod = llvm_binding.parse_assembly(llvm_ir_str)
    mod.verify()

    target = llvm_binding.Target.from_default_triple()
    target_machine = target.create_target_machine()
    return target_machine.emit_assembly(mod)


def compile_and_run(bound_tree: BoundExpression) -> DumbBrainObject:
    """JIT-compile the expression and call it, returning its value."""
    llvm_ir_str = emit(bound_tree)

    _initialize_llvm()
    mod = llvm_binding.parse_assembly(llvm_ir_str)
    mod.verify()

    target = llvm_binding.Target.from_default_triple()
    target_machine = target.create_target_machine()
    engine = llvm_binding.create_mcjit_compiler(llvm_binding.parse_assembly(""), target_machine)
    engine.add_module(mod)
    engine.finalize_object()
    engine.run_static_constructors()

    address = engine.get_function_address(ENTRY_POINT)
    if bound_tree.type is NUMBER:
        number_fn = ctypes.CFUNCTYPE(ctypes.c_double)(address)
        return Number(number_fn())
    boolean_fn = ctypes.CFUNCTYPE(ctypes.c_uint8)(address)
    return Boolean(bool(boolean_fn()))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def emit(bound_tree: BoundExpression) -> str:
    """Emit LLVM IR for a bound tree. Returns the LLVM IR string."""
    emitter = LLVMEmitter()
    llvm_ir_str = emitter.emit_module(bound_tree)
    logger.debug("emitted %d lines of LLVM IR", llvm_ir_str.count("\n"))
    return llvm_ir_str
