"""Push instruction representation and per-instruction semantics.

Every instruction is performed against a :class:`PushState`. Operands are
inspected before anything is popped, so when an instruction raises
:class:`InstructionFailure` the state it carries is exactly the state the
instruction was given. For binary instructions `x` is the top of the stack
and `y` the item beneath it.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Tuple, Union

from .enums import (
    BINARY_BOOL_OPS,
    BINARY_INT_OPS,
    INT_COMPARE_OPS,
    INT_PREDICATE_OPS,
    UNARY_INT_OPS,
    BoolInstruction,
    ExecInstruction,
    FloatInstruction,
    IntInstruction,
    StackType,
)
from .errors import InputTypeMismatch, InstructionFailure, Overflow, StackFault, UnknownInput
from .state import PushState
from .values import INT_MIN, checked, trunc_div, trunc_rem


@dataclass(frozen=True)
class PushLiteral:
    """Pushes a constant onto the stack of its kind."""

    stack_type: StackType
    value: Any

    def __post_init__(self):
        if self.stack_type == StackType.INTEGER:
            if not isinstance(self.value, numbers.Integral):
                raise TypeError(f"Integer literal needs an integral value, got {self.value!r}")
            object.__setattr__(self, "value", checked(int(self.value)))
        elif self.stack_type == StackType.BOOLEAN:
            object.__setattr__(self, "value", bool(self.value))
        elif self.stack_type == StackType.FLOAT:
            object.__setattr__(self, "value", float(self.value))

    @classmethod
    def from_int(cls, value: int) -> "PushLiteral":
        return cls(StackType.INTEGER, value)

    @classmethod
    def from_bool(cls, value: bool) -> "PushLiteral":
        return cls(StackType.BOOLEAN, value)

    @classmethod
    def from_float(cls, value: float) -> "PushLiteral":
        return cls(StackType.FLOAT, value)


@dataclass(frozen=True)
class PushInput:
    """Pushes the value bound to `name` onto the stack of `stack_type`."""

    name: str
    stack_type: StackType = StackType.INTEGER


@dataclass(frozen=True)
class Block:
    """A nested sequence of program items; unpacks onto the exec stack."""

    program: Tuple[Any, ...]

    def __len__(self) -> int:
        return len(self.program)


Instruction = Union[
    IntInstruction, BoolInstruction, FloatInstruction, ExecInstruction, PushLiteral, PushInput
]
ProgramItem = Union[Instruction, Block]

INSTRUCTION_TYPES = (
    IntInstruction,
    BoolInstruction,
    FloatInstruction,
    ExecInstruction,
    PushLiteral,
    PushInput,
)


def is_instruction(item: Any) -> bool:
    return isinstance(item, INSTRUCTION_TYPES)


def _fail(state: PushState, op: Any) -> InstructionFailure:
    return InstructionFailure(state, Overflow(op))


def _binary_int(op: IntInstruction, x: int, y: int) -> int:
    if op == IntInstruction.ADD:
        return checked(x + y)
    if op == IntInstruction.SUBTRACT:
        return checked(x - y)
    if op == IntInstruction.MULTIPLY:
        return checked(x * y)
    if op == IntInstruction.PROTECTED_DIVIDE:
        if y == 0:
            return 1
        return checked(trunc_div(x, y))
    if op == IntInstruction.MOD:
        if y == 0:
            return 0
        if x == INT_MIN and y == -1:
            raise OverflowError(x)
        return trunc_rem(x, y)
    raise ValueError(f"{op!r} is not a binary integer instruction")


def _unary_int(op: IntInstruction, x: int) -> int:
    if op == IntInstruction.SQUARE:
        return checked(x * x)
    if op == IntInstruction.INC:
        return checked(x + 1)
    if op == IntInstruction.DEC:
        return checked(x - 1)
    if op == IntInstruction.NEGATE:
        return checked(-x)
    if op == IntInstruction.ABS:
        return checked(abs(x))
    raise ValueError(f"{op!r} is not a unary integer instruction")


def _perform_int(op: IntInstruction, state: PushState) -> PushState:
    ints = state.int_stack
    if op in BINARY_INT_OPS:
        x, y = ints.peek(2)
        try:
            result = _binary_int(op, x, y)
        except OverflowError:
            raise _fail(state, op) from None
        ints.pop_n(2)
        ints.push(result)
    elif op in UNARY_INT_OPS:
        x = ints.top()
        try:
            result = _unary_int(op, x)
        except OverflowError:
            raise _fail(state, op) from None
        ints.pop()
        ints.push(result)
    elif op == IntInstruction.DUP:
        ints.push(ints.top())
    elif op == IntInstruction.SWAP:
        x, y = ints.pop_n(2)
        ints.push(x)
        ints.push(y)
    elif op == IntInstruction.POP:
        ints.pop()
    elif op in INT_PREDICATE_OPS:
        x = ints.pop()
        if op == IntInstruction.IS_ZERO:
            state.bool_stack.push(x == 0)
        elif op == IntInstruction.IS_POSITIVE:
            state.bool_stack.push(x > 0)
        else:
            state.bool_stack.push(x < 0)
    elif op in INT_COMPARE_OPS:
        x, y = ints.pop_n(2)
        if op == IntInstruction.EQUAL:
            state.bool_stack.push(x == y)
        elif op == IntInstruction.LESS_THAN:
            state.bool_stack.push(x < y)
        else:
            state.bool_stack.push(x > y)
    return state


def _perform_bool(op: BoolInstruction, state: PushState) -> PushState:
    bools = state.bool_stack
    if op in BINARY_BOOL_OPS:
        x, y = bools.pop_n(2)
        if op == BoolInstruction.AND:
            bools.push(x and y)
        elif op == BoolInstruction.OR:
            bools.push(x or y)
        else:
            bools.push(x != y)
    elif op == BoolInstruction.NOT:
        bools.push(not bools.pop())
    elif op == BoolInstruction.FROM_INT:
        bools.push(state.int_stack.pop() != 0)
    return state


def _perform_float(op: FloatInstruction, state: PushState) -> PushState:
    floats = state.float_stack
    x, y = floats.peek(2)
    if op == FloatInstruction.ADD:
        result = x + y
    elif op == FloatInstruction.SUBTRACT:
        result = x - y
    elif op == FloatInstruction.MULTIPLY:
        result = x * y
    else:
        result = 1.0 if y == 0 else x / y
    if not math.isfinite(result):
        raise _fail(state, op)
    floats.pop_n(2)
    floats.push(result)
    return state


def _perform_exec(op: ExecInstruction, state: PushState) -> PushState:
    code = state.exec_stack
    if op == ExecInstruction.DUP:
        code.push(code.top())
    elif op == ExecInstruction.POP:
        code.pop()
    elif op == ExecInstruction.IF:
        condition = state.bool_stack.top()
        first, second = code.peek(2)
        state.bool_stack.pop()
        code.pop_n(2)
        code.push(first if condition else second)
    return state


def perform(instruction: Any, state: PushState) -> PushState:
    """
    Perform a single program item against `state`.

    Returns the updated state on success. On failure raises
    InstructionFailure holding the untouched state and the error.
    """
    try:
        if isinstance(instruction, IntInstruction):
            return _perform_int(instruction, state)
        if isinstance(instruction, BoolInstruction):
            return _perform_bool(instruction, state)
        if isinstance(instruction, FloatInstruction):
            return _perform_float(instruction, state)
        if isinstance(instruction, ExecInstruction):
            return _perform_exec(instruction, state)
        if isinstance(instruction, PushLiteral):
            state.stack(instruction.stack_type).push(instruction.value)
            return state
        if isinstance(instruction, PushInput):
            if instruction.name not in state.inputs:
                raise InstructionFailure(state, UnknownInput(instruction.name))
            bound_type = state.input_types[instruction.name]
            if bound_type != instruction.stack_type:
                raise InstructionFailure(
                    state, InputTypeMismatch(instruction.name, bound_type, instruction.stack_type)
                )
            state.stack(instruction.stack_type).push(state.inputs[instruction.name])
            return state
        if isinstance(instruction, Block):
            state.exec_stack.push_all(instruction.program)
            return state
    except StackFault as fault:
        raise InstructionFailure(state, fault.error) from None
    raise TypeError(f"Cannot perform {instruction!r}")


def describe_instruction(item: Any) -> str:
    """Return a short readable label for a program item."""
    if isinstance(item, IntInstruction):
        return f"int_{item.name.lower()}"
    if isinstance(item, BoolInstruction):
        return f"bool_{item.name.lower()}"
    if isinstance(item, FloatInstruction):
        return f"float_{item.name.lower()}"
    if isinstance(item, ExecInstruction):
        return f"exec_{item.name.lower()}"
    if isinstance(item, PushLiteral):
        if item.stack_type == StackType.BOOLEAN:
            return "true" if item.value else "false"
        return repr(item.value)
    if isinstance(item, PushInput):
        return f"in:{item.name}"
    if isinstance(item, Block):
        return "(" + " ".join(describe_instruction(i) for i in item.program) + ")"
    return str(item)


__all__ = [
    "PushLiteral",
    "PushInput",
    "Block",
    "Instruction",
    "ProgramItem",
    "INSTRUCTION_TYPES",
    "is_instruction",
    "perform",
    "describe_instruction",
]
