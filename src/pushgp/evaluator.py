"""Scoring Push programs against test cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .enums import StackType
from .errors import InstructionFailure, StateBuildError
from .executor import PushExecutor
from .genome import Plushy
from .results import CaseResults
from .state import DEFAULT_INSTRUCTION_STEP_LIMIT, DEFAULT_MAX_STACK_SIZE

logger = logging.getLogger(__name__)

DEFAULT_PENALTY = 1_000_000


@dataclass(frozen=True)
class Case:
    """Input bindings and the value expected on top of the output stack."""

    inputs: Dict[str, Any]
    expected: Any


class ProgramEvaluator:
    """
    Runs a program on every case and returns one error per case:
    the absolute difference from the expected output, or a penalty when the
    output stack is empty or the program fails fatally.
    """

    def __init__(
        self,
        cases: Sequence[Case],
        *,
        output_stack: StackType = StackType.INTEGER,
        max_stack_size: int = DEFAULT_MAX_STACK_SIZE,
        max_steps: int = DEFAULT_INSTRUCTION_STEP_LIMIT,
        penalty: int = DEFAULT_PENALTY,
        callback: Optional[Callable[[int, Optional[Any], int], None]] = None,
    ):
        """
        Args:
            cases: Test cases in a fixed order
            output_stack: Stack whose top is read as the program's answer
            max_stack_size: Combined stack capacity per run
            max_steps: Instruction step limit per run
            penalty: Error assigned when no answer is produced
            callback: Optional callback(case_idx, output, error) for real-time feedback
        """
        self.cases = list(cases)
        self.output_stack = output_stack
        self.max_stack_size = max_stack_size
        self.max_steps = max_steps
        self.penalty = penalty
        self.callback = callback

    def _error(self, output: Optional[Any], expected: Any) -> int:
        if output is None:
            return self.penalty
        return min(self.penalty, int(round(abs(expected - output))))

    def run_case(self, program: Sequence[Any], case: Case) -> Optional[Any]:
        """Program output for one case, or None if nothing usable came out."""
        executor = PushExecutor(self.max_stack_size, max_steps=self.max_steps)
        try:
            state = executor.execute(program, case.inputs)
        except InstructionFailure as failure:
            logger.debug("Program failed fatally: %s", failure.error)
            return None
        except StateBuildError as exc:
            logger.debug("Program rejected: %s", exc)
            return None
        return executor.output(state, self.output_stack)

    def errors(self, program: Sequence[Any]) -> List[int]:
        errors: List[int] = []
        for idx, case in enumerate(self.cases):
            output = self.run_case(program, case)
            error = self._error(output, case.expected)
            errors.append(error)
            if self.callback:
                self.callback(idx, output, error)
        return errors

    def evaluate(self, program: Sequence[Any]) -> CaseResults:
        return CaseResults.from_errors(self.errors(program))

    def __call__(self, genome: Plushy) -> CaseResults:
        """Score a Plushy genome; usable directly as a population scorer."""
        return self.evaluate(genome.to_program())


__all__ = ["Case", "ProgramEvaluator", "DEFAULT_PENALTY"]
