"""Run configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .enums import RunModel
from .state import DEFAULT_INSTRUCTION_STEP_LIMIT, DEFAULT_MAX_STACK_SIZE


@dataclass
class RunConfig:
    """Parameters of one evolutionary run."""

    population_size: int = 200
    num_generations: int = 100
    run_model: RunModel = RunModel.PARALLEL
    max_workers: Optional[int] = None
    seed: Optional[int] = None

    # Bitstring problems
    bit_length: int = 128
    mutation_rate: Optional[float] = None  # None: one over length
    tournament_size: int = 2

    # Program problems
    max_stack_size: int = DEFAULT_MAX_STACK_SIZE
    max_initial_instructions: int = 40
    max_instruction_steps: int = DEFAULT_INSTRUCTION_STEP_LIMIT

    def __post_init__(self):
        if isinstance(self.run_model, str):
            self.run_model = RunModel(self.run_model.strip().lower())

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "RunConfig":
        """Build from a plain dict; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        config = cls(**dict(mapping))
        config.validate()
        return config

    def validate(self) -> "RunConfig":
        for name in (
            "population_size",
            "num_generations",
            "bit_length",
            "tournament_size",
            "max_stack_size",
            "max_initial_instructions",
            "max_instruction_steps",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.mutation_rate is not None and not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        return self

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["run_model"] = self.run_model.value
        return data


__all__ = ["RunConfig"]
