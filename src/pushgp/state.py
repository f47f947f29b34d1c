"""Typed stacks and the machine state that owns them."""

from __future__ import annotations

import numbers
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from .enums import StackType
from .errors import StackFault, StackOverflow, StackUnderflow, StateBuildError
from .values import in_int_range

DEFAULT_MAX_STACK_SIZE = 100
DEFAULT_INSTRUCTION_STEP_LIMIT = 1000


def input_stack_type(value: Any) -> StackType:
    """
    Stack a bound input value belongs on.
    Numpy scalars are classified like the Python numbers they stand for.
    """
    if isinstance(value, (bool, np.bool_)):
        return StackType.BOOLEAN
    if isinstance(value, numbers.Integral):
        return StackType.INTEGER
    if isinstance(value, numbers.Real):
        return StackType.FLOAT
    raise StateBuildError(f"Unsupported input value {value!r} of type {type(value).__name__}")


class PushStack:
    """
    Last-in-first-out stack for one value kind.
    Capacity is shared with every other stack of the owning state.
    """

    def __init__(self, stack_type: StackType, owner: "PushState"):
        self.stack_type = stack_type
        self._owner = owner
        self._items: List[Any] = []

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def push(self, value: Any) -> None:
        """Push `value`, refusing when the state is already at capacity."""
        if self._owner.total_size() >= self._owner.max_stack_size:
            raise StackFault(StackOverflow(self.stack_type, self._owner.max_stack_size))
        self._items.append(value)

    def push_all(self, values: Iterable[Any]) -> None:
        """Push values so that the first one ends up on top."""
        values = list(values)
        if self._owner.total_size() + len(values) > self._owner.max_stack_size:
            raise StackFault(StackOverflow(self.stack_type, self._owner.max_stack_size))
        self._items.extend(reversed(values))

    def top(self) -> Any:
        if not self._items:
            raise StackFault(StackUnderflow(self.stack_type, 1))
        return self._items[-1]

    def peek(self, count: int) -> List[Any]:
        """Return the top `count` items, top first, without removing them."""
        if count > len(self._items):
            raise StackFault(StackUnderflow(self.stack_type, count))
        if count == 0:
            return []
        return self._items[: -count - 1 : -1]

    def pop(self) -> Any:
        if not self._items:
            raise StackFault(StackUnderflow(self.stack_type, 1))
        return self._items.pop()

    def pop_n(self, count: int) -> List[Any]:
        """Pop `count` items, top first; nothing is removed on underflow."""
        values = self.peek(count)
        del self._items[len(self._items) - count :]
        return values

    def items(self) -> List[Any]:
        """Items from bottom to top."""
        return list(self._items)

    def copy_into(self, owner: "PushState") -> "PushStack":
        clone = PushStack(self.stack_type, owner)
        clone._items = list(self._items)
        return clone

    def __repr__(self) -> str:
        return f"PushStack({self.stack_type.name}, {self._items!r})"


class PushState:
    """
    The whole mutable context of one program evaluation: one bounded stack
    per value kind plus the named inputs bound before execution starts.
    """

    def __init__(
        self,
        max_stack_size: int = DEFAULT_MAX_STACK_SIZE,
        inputs: Optional[Dict[str, Any]] = None,
        instruction_step_limit: int = DEFAULT_INSTRUCTION_STEP_LIMIT,
        input_types: Optional[Dict[str, StackType]] = None,
    ):
        self.max_stack_size = max_stack_size
        self.instruction_step_limit = instruction_step_limit
        self.inputs: Dict[str, Any] = dict(inputs or {})
        self.input_types: Dict[str, StackType] = {
            name: input_stack_type(value) for name, value in self.inputs.items()
        }
        self.input_types.update(input_types or {})
        self.stacks: Dict[StackType, PushStack] = {
            stack_type: PushStack(stack_type, self) for stack_type in StackType
        }

    @staticmethod
    def builder() -> "PushStateBuilder":
        return PushStateBuilder()

    def stack(self, stack_type: StackType) -> PushStack:
        return self.stacks[stack_type]

    @property
    def int_stack(self) -> PushStack:
        return self.stacks[StackType.INTEGER]

    @property
    def bool_stack(self) -> PushStack:
        return self.stacks[StackType.BOOLEAN]

    @property
    def float_stack(self) -> PushStack:
        return self.stacks[StackType.FLOAT]

    @property
    def exec_stack(self) -> PushStack:
        return self.stacks[StackType.EXEC]

    def total_size(self) -> int:
        return sum(len(stack) for stack in self.stacks.values())

    def copy(self) -> "PushState":
        """Create an independent copy of every stack and binding."""
        clone = PushState(
            self.max_stack_size,
            self.inputs,
            instruction_step_limit=self.instruction_step_limit,
            input_types=self.input_types,
        )
        clone.stacks = {
            stack_type: stack.copy_into(clone) for stack_type, stack in self.stacks.items()
        }
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PushState):
            return NotImplemented
        return (
            self.max_stack_size == other.max_stack_size
            and self.inputs == other.inputs
            and all(
                self.stacks[t].items() == other.stacks[t].items() for t in StackType
            )
        )

    def __repr__(self) -> str:
        stacks = ", ".join(
            f"{t.name.lower()}={self.stacks[t].items()!r}" for t in StackType
        )
        return f"PushState({stacks})"


class PushStateBuilder:
    """Step-by-step construction of a :class:`PushState`."""

    def __init__(self):
        self._max_stack_size = DEFAULT_MAX_STACK_SIZE
        self._step_limit = DEFAULT_INSTRUCTION_STEP_LIMIT
        self._program: List[Any] = []
        self._inputs: Dict[str, Any] = {}
        self._input_types: Dict[str, StackType] = {}

    def with_max_stack_size(self, max_stack_size: int) -> "PushStateBuilder":
        if max_stack_size < 0:
            raise StateBuildError("max_stack_size must be non-negative")
        if len(self._program) > max_stack_size:
            raise StateBuildError(
                f"program of length {len(self._program)} exceeds max stack size {max_stack_size}"
            )
        self._max_stack_size = max_stack_size
        return self

    def with_program(self, program: Iterable[Any]) -> "PushStateBuilder":
        """Seed the exec stack; the first instruction runs first."""
        program = list(program)
        if len(program) > self._max_stack_size:
            raise StateBuildError(
                f"program of length {len(program)} exceeds max stack size {self._max_stack_size}"
            )
        self._program = program
        return self

    def with_instruction_step_limit(self, limit: int) -> "PushStateBuilder":
        if limit < 0:
            raise StateBuildError("instruction step limit must be non-negative")
        self._step_limit = limit
        return self

    def _bind(self, name: str, value: Any, stack_type: StackType) -> "PushStateBuilder":
        if name in self._inputs:
            raise StateBuildError(f"input '{name}' is already bound")
        self._inputs[name] = value
        self._input_types[name] = stack_type
        return self

    def with_int_input(self, name: str, value: int) -> "PushStateBuilder":
        value = int(value)
        if not in_int_range(value):
            raise StateBuildError(f"input '{name}' is outside the integer range: {value}")
        return self._bind(name, value, StackType.INTEGER)

    def with_bool_input(self, name: str, value: bool) -> "PushStateBuilder":
        return self._bind(name, bool(value), StackType.BOOLEAN)

    def with_float_input(self, name: str, value: float) -> "PushStateBuilder":
        return self._bind(name, float(value), StackType.FLOAT)

    def with_input(self, name: str, value: Any) -> "PushStateBuilder":
        """Bind `value` to the stack its type belongs on."""
        stack_type = input_stack_type(value)
        if stack_type == StackType.BOOLEAN:
            return self.with_bool_input(name, value)
        if stack_type == StackType.INTEGER:
            return self.with_int_input(name, value)
        return self.with_float_input(name, value)

    def build(self) -> PushState:
        state = PushState(
            self._max_stack_size,
            self._inputs,
            instruction_step_limit=self._step_limit,
            input_types=self._input_types,
        )
        state.exec_stack.push_all(self._program)
        return state


__all__ = [
    "DEFAULT_MAX_STACK_SIZE",
    "DEFAULT_INSTRUCTION_STEP_LIMIT",
    "input_stack_type",
    "PushStack",
    "PushState",
    "PushStateBuilder",
]
