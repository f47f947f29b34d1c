"""Enumerations and instruction groupings for the Push VM."""

from enum import Enum, IntEnum
from typing import Dict, List, Set


class StackType(IntEnum):
    """Value kinds, one stack each."""

    INTEGER = 0
    BOOLEAN = 1
    FLOAT = 2
    EXEC = 3


class IntInstruction(IntEnum):
    """Integer instructions as integer codes."""

    # Arithmetic
    ADD = 0
    SUBTRACT = 1
    MULTIPLY = 2
    PROTECTED_DIVIDE = 3
    MOD = 4
    SQUARE = 5
    INC = 6
    DEC = 7
    NEGATE = 8
    ABS = 9

    # Stack manipulation
    DUP = 20
    SWAP = 21
    POP = 22

    # Predicates (target = boolean)
    IS_ZERO = 30
    IS_POSITIVE = 31
    IS_NEGATIVE = 32
    EQUAL = 33
    LESS_THAN = 34
    GREATER_THAN = 35


class BoolInstruction(IntEnum):
    """Boolean instructions as integer codes."""

    AND = 100
    OR = 101
    NOT = 102
    XOR = 103
    FROM_INT = 104


class FloatInstruction(IntEnum):
    """Float instructions as integer codes."""

    ADD = 200
    SUBTRACT = 201
    MULTIPLY = 202
    PROTECTED_DIVIDE = 203


class ExecInstruction(IntEnum):
    """Exec (control) instructions as integer codes."""

    NOOP = 300
    DUP = 301
    POP = 302
    IF = 303


class RunModel(Enum):
    """How a generation builds its children."""

    SERIAL = "serial"
    PARALLEL = "parallel"


BINARY_INT_OPS: Set[IntInstruction] = {
    IntInstruction.ADD,
    IntInstruction.SUBTRACT,
    IntInstruction.MULTIPLY,
    IntInstruction.PROTECTED_DIVIDE,
    IntInstruction.MOD,
}

UNARY_INT_OPS: Set[IntInstruction] = {
    IntInstruction.SQUARE,
    IntInstruction.INC,
    IntInstruction.DEC,
    IntInstruction.NEGATE,
    IntInstruction.ABS,
}

INT_PREDICATE_OPS: Set[IntInstruction] = {
    IntInstruction.IS_ZERO,
    IntInstruction.IS_POSITIVE,
    IntInstruction.IS_NEGATIVE,
}

INT_COMPARE_OPS: Set[IntInstruction] = {
    IntInstruction.EQUAL,
    IntInstruction.LESS_THAN,
    IntInstruction.GREATER_THAN,
}

BINARY_BOOL_OPS: Set[BoolInstruction] = {
    BoolInstruction.AND,
    BoolInstruction.OR,
    BoolInstruction.XOR,
}

INT_OPS: List[IntInstruction] = list(IntInstruction)
BOOL_OPS: List[BoolInstruction] = list(BoolInstruction)
FLOAT_OPS: List[FloatInstruction] = list(FloatInstruction)
EXEC_OPS: List[ExecInstruction] = list(ExecInstruction)

# Number of code blocks each exec instruction takes from the genome.
BLOCK_ARITY: Dict[ExecInstruction, int] = {
    ExecInstruction.NOOP: 0,
    ExecInstruction.DUP: 1,
    ExecInstruction.POP: 1,
    ExecInstruction.IF: 2,
}


__all__ = [
    "StackType",
    "IntInstruction",
    "BoolInstruction",
    "FloatInstruction",
    "ExecInstruction",
    "RunModel",
    "BINARY_INT_OPS",
    "UNARY_INT_OPS",
    "INT_PREDICATE_OPS",
    "INT_COMPARE_OPS",
    "BINARY_BOOL_OPS",
    "INT_OPS",
    "BOOL_OPS",
    "FLOAT_OPS",
    "EXEC_OPS",
    "BLOCK_ARITY",
]
