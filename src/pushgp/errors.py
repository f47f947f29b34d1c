"""Error taxonomy for program execution and genome handling.

Instruction errors are plain values so they compare by content. A failing
instruction raises :class:`InstructionFailure`, which carries the error
together with the machine state as it stood before the instruction touched
it. Recoverable failures let the interpreter carry on with that state;
fatal ones end the program's evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from .enums import BoolInstruction, ExecInstruction, FloatInstruction, IntInstruction, StackType

if TYPE_CHECKING:
    from .state import PushState


OpCode = Union[IntInstruction, BoolInstruction, FloatInstruction, ExecInstruction]


class PushError(Exception):
    """Base class for errors raised by this package."""


class StateBuildError(PushError):
    """The state builder was given an unusable configuration."""


class GenomeError(PushError):
    """A genome could not be converted into a program."""


@dataclass(frozen=True)
class StackUnderflow:
    """An instruction needed more operands than the stack holds."""

    stack_type: StackType
    needed: int

    def is_recoverable(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"{self.stack_type.name} stack needs {self.needed} item(s)"


@dataclass(frozen=True)
class StackOverflow:
    """A push would exceed the state's combined stack capacity."""

    stack_type: StackType
    max_stack_size: int

    def is_recoverable(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"push to {self.stack_type.name} exceeds max stack size {self.max_stack_size}"


@dataclass(frozen=True)
class Overflow:
    """Arithmetic result outside the representable range."""

    op: OpCode

    def is_recoverable(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"overflow in {self.op.name}"


@dataclass(frozen=True)
class UnknownInput:
    """The program refers to an input that was never bound."""

    name: str

    def is_recoverable(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"unknown input '{self.name}'"


@dataclass(frozen=True)
class InputTypeMismatch:
    """The program reads an input onto a stack of the wrong kind."""

    name: str
    bound_type: StackType
    requested_type: StackType

    def is_recoverable(self) -> bool:
        return False

    def __str__(self) -> str:
        return (
            f"input '{self.name}' is {self.bound_type.name}, "
            f"not {self.requested_type.name}"
        )


@dataclass(frozen=True)
class StepLimitExceeded:
    """The program ran more instructions than the state allows."""

    max_steps: int

    def is_recoverable(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"instruction step limit {self.max_steps} exceeded"


InstructionError = Union[
    StackUnderflow, StackOverflow, Overflow, UnknownInput, InputTypeMismatch, StepLimitExceeded
]


class StackFault(PushError):
    """Raised by stack operations; instructions rewrap it with their state."""

    def __init__(self, error: Any):
        super().__init__(str(error))
        self.error = error


class InstructionFailure(PushError):
    """An instruction failed; `state` is the state before the attempt."""

    def __init__(self, state: "PushState", error: Any):
        super().__init__(str(error))
        self.state = state
        self.error = error

    def is_recoverable(self) -> bool:
        return self.error.is_recoverable()

    def is_fatal(self) -> bool:
        return not self.is_recoverable()


__all__ = [
    "PushError",
    "StateBuildError",
    "GenomeError",
    "StackUnderflow",
    "StackOverflow",
    "Overflow",
    "UnknownInput",
    "InputTypeMismatch",
    "StepLimitExceeded",
    "InstructionError",
    "StackFault",
    "InstructionFailure",
]
