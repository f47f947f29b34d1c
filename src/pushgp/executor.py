"""Execution engine for Push programs."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .enums import StackType
from .errors import InstructionFailure, StackFault, StepLimitExceeded
from .instruction import perform
from .state import DEFAULT_MAX_STACK_SIZE, PushState

logger = logging.getLogger(__name__)


class PushExecutor:
    """Drives programs from the exec stack until it is empty."""

    def __init__(self, max_stack_size: int = DEFAULT_MAX_STACK_SIZE, max_steps: Optional[int] = None):
        self.max_stack_size = max_stack_size
        self.max_steps = max_steps
        self.reset()

    def reset(self):
        """Reset per-run bookkeeping."""
        self.steps = 0
        self.recovered: List[InstructionFailure] = []

    def step(self, state: PushState) -> PushState:
        """
        Pop and perform the next exec item.

        Recoverable failures are recorded and their state is returned so the
        caller carries on; fatal failures propagate.
        """
        try:
            instruction = state.exec_stack.pop()
        except StackFault as fault:
            raise InstructionFailure(state, fault.error) from None
        self.steps += 1
        try:
            return perform(instruction, state)
        except InstructionFailure as failure:
            if failure.is_fatal():
                raise
            logger.debug("Recovered from %s", failure.error)
            self.recovered.append(failure)
            return failure.state

    def run(self, state: PushState) -> PushState:
        """
        Run until the exec stack is empty.

        Raises InstructionFailure when an instruction fails fatally or the
        step limit is exceeded; the failure carries the state at that point.
        """
        self.reset()
        limit = self.max_steps if self.max_steps is not None else state.instruction_step_limit
        while not state.exec_stack.is_empty():
            if self.steps >= limit:
                raise InstructionFailure(state, StepLimitExceeded(limit))
            state = self.step(state)
        return state

    def execute(
        self,
        program: Iterable[Any],
        inputs: Optional[Dict[str, Any]] = None,
    ) -> PushState:
        """
        Build a state for `program` and run it.

        Args:
            program: Program items, first item runs first
            inputs: Optional input bindings as {"x": 5, "flag": True, ...}
        Returns:
            The final machine state
        """
        builder = (
            PushState.builder()
            .with_max_stack_size(self.max_stack_size)
            .with_program(program)
        )
        if self.max_steps is not None:
            builder.with_instruction_step_limit(self.max_steps)
        for name, value in (inputs or {}).items():
            builder.with_input(name, value)
        return self.run(builder.build())

    @staticmethod
    def output(state: PushState, stack_type: StackType = StackType.INTEGER) -> Optional[Any]:
        """Return the top of `stack_type`, or None when that stack is empty."""
        stack = state.stack(stack_type)
        if stack.is_empty():
            return None
        return stack.top()


__all__ = ["PushExecutor"]
