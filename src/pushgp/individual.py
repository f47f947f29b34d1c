"""Individuals: a genome paired with its result vector."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from functools import singledispatch
from typing import Any, Callable, Generic, TypeVar

import numpy as np

from .bitstring import to_string
from .results import CaseResults

G = TypeVar("G")


@singledispatch
def genome_view(genome: Any) -> Any:
    """
    Cheap read-only view of a genome for scoring functions.
    Immutable genomes are their own view.
    """
    return genome


@genome_view.register(np.ndarray)
def _(genome: np.ndarray) -> np.ndarray:
    view = genome.view()
    view.flags.writeable = False
    return view


def clone_genome(genome: Any) -> Any:
    """Independent copy a variation operator may consume."""
    if isinstance(genome, np.ndarray):
        return genome.copy()
    return copy.copy(genome)


def _as_results(raw: Any) -> CaseResults:
    if isinstance(raw, CaseResults):
        return raw
    return CaseResults.from_scores(raw)


@dataclass(frozen=True, eq=False)
class Individual(Generic[G]):
    """
    Immutable pairing of a genome and its result vector.
    Array genomes are frozen on construction.
    """

    genome: G
    results: CaseResults

    def __post_init__(self):
        if isinstance(self.genome, np.ndarray):
            self.genome.flags.writeable = False
        object.__setattr__(self, "results", _as_results(self.results))

    @classmethod
    def generate(
        cls,
        make_genome: Callable[[np.random.Generator], G],
        run_tests: Callable[[Any], Any],
        rng: np.random.Generator,
    ) -> "Individual[G]":
        """Draw a fresh genome and score it straight away."""
        genome = make_genome(rng)
        return cls.scored(genome, run_tests)

    @classmethod
    def scored(cls, genome: G, run_tests: Callable[[Any], Any]) -> "Individual[G]":
        return cls(genome, _as_results(run_tests(genome_view(genome))))

    @property
    def total(self) -> int:
        return self.results.total

    def __str__(self) -> str:
        if isinstance(self.genome, np.ndarray) and self.genome.dtype == bool:
            shown = to_string(self.genome)
        else:
            shown = str(self.genome)
        return f"[{shown}]\n{list(self.results)}\n({self.total})"


__all__ = ["Individual", "genome_view", "clone_genome"]
