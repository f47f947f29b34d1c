#!/usr/bin/env python3
"""
Demonstrate hand-built programs, recoverable overflow, and Plushy blocks.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from pushgp import (
    CLOSE,
    Block,
    INT_MAX,
    ExecInstruction,
    InstructionFailure,
    IntInstruction,
    Plushy,
    PushExecutor,
    PushInput,
    PushLiteral,
    PushState,
)


def show(label: str, state: PushState) -> None:
    print(f"{label}: int={state.int_stack.items()} bool={state.bool_stack.items()}")


def arithmetic_demo() -> None:
    program = [
        PushInput("x"),
        PushLiteral.from_int(3),
        IntInstruction.MULTIPLY,
        PushInput("y"),
        IntInstruction.ADD,
    ]
    executor = PushExecutor(max_stack_size=20)
    for x, y in [(1, 2), (-4, 10), (7, 0)]:
        state = executor.execute(program, {"x": x, "y": y})
        show(f"3*{x}+{y}", state)


def overflow_demo() -> None:
    # INC on INT_MAX is skipped; the DEC after it still runs.
    program = [PushLiteral.from_int(INT_MAX), IntInstruction.INC, IntInstruction.DEC]
    executor = PushExecutor(max_stack_size=20)
    state = executor.execute(program)
    show("INT_MAX inc dec", state)
    for failure in executor.recovered:
        print(f"  recovered: {failure.error}")


def capacity_demo() -> None:
    # The block unpacks three items into a state that holds at most two.
    executor = PushExecutor(max_stack_size=2)
    block = Block((PushLiteral.from_int(1), IntInstruction.DUP, IntInstruction.DUP))
    try:
        executor.execute([block])
    except InstructionFailure as failure:
        print(f"fatal: {failure.error} (recoverable={failure.is_recoverable()})")

    # An exec DUP duplicating itself never empties the exec stack.
    executor = PushExecutor(max_steps=50)
    try:
        executor.execute([ExecInstruction.DUP, ExecInstruction.DUP])
    except InstructionFailure as failure:
        print(f"fatal: {failure.error}")


def plushy_demo() -> None:
    genome = Plushy(
        (
            PushInput("x"),
            IntInstruction.IS_NEGATIVE,
            ExecInstruction.IF,
            PushInput("x"),
            IntInstruction.NEGATE,
            CLOSE,
            PushInput("x"),
            CLOSE,
        )
    )
    print("Program:")
    for line in genome.to_human_readable():
        print(" ", line)
    executor = PushExecutor()
    for x in [-5, 0, 9]:
        state = executor.execute(genome.to_program(), {"x": x})
        print(f"  |{x}| -> {executor.output(state)}")


def main() -> None:
    arithmetic_demo()
    overflow_demo()
    capacity_demo()
    plushy_demo()


if __name__ == "__main__":
    main()
