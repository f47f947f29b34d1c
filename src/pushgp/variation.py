"""Recombination and mutation operators for linear genomes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

import numpy as np

from . import bitstring
from .genome import GeneGenerator, Plushy
from .operator import Operator


class Recombinator(ABC):
    @abstractmethod
    def recombine(self, first: Any, second: Any, rng: np.random.Generator) -> Any:
        """Build one child genome from two equal-length parents."""


class UniformXo(Recombinator):
    def recombine(self, first: Any, second: Any, rng: np.random.Generator) -> Any:
        return bitstring.uniform_xo(first, second, rng)

    def __repr__(self) -> str:
        return "UniformXo()"


class TwoPointXo(Recombinator):
    def recombine(self, first: Any, second: Any, rng: np.random.Generator) -> Any:
        return bitstring.two_point_xo(first, second, rng)

    def __repr__(self) -> str:
        return "TwoPointXo()"


class Recombine(Operator):
    """Operator adapter: (genome, genome) -> child genome."""

    def __init__(self, recombinator: Recombinator):
        self.recombinator = recombinator

    def apply(self, value: Tuple[Any, Any], rng: np.random.Generator) -> Any:
        first, second = value
        return self.recombinator.recombine(first, second, rng)

    def __repr__(self) -> str:
        return f"Recombine({self.recombinator!r})"


class Mutator(ABC):
    @abstractmethod
    def mutate(self, genome: Any, rng: np.random.Generator) -> Any:
        """Return a mutated copy of `genome`."""


class WithRate(Mutator):
    """Flip each bit with probability `mutation_rate`."""

    def __init__(self, mutation_rate: float):
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {mutation_rate}")
        self.mutation_rate = mutation_rate

    def mutate(self, genome: Any, rng: np.random.Generator) -> Any:
        return bitstring.mutate_with_rate(genome, self.mutation_rate, rng)

    def __repr__(self) -> str:
        return f"WithRate({self.mutation_rate})"


class WithOneOverLength(Mutator):
    def mutate(self, genome: Any, rng: np.random.Generator) -> Any:
        return bitstring.mutate_one_over_length(genome, rng)

    def __repr__(self) -> str:
        return "WithOneOverLength()"


class GeneReplacement(Mutator):
    """
    Replace each Plushy gene with a freshly drawn one with probability
    `mutation_rate` (default one over the genome length).
    """

    def __init__(self, gene_generator: GeneGenerator, mutation_rate: Optional[float] = None):
        if mutation_rate is not None and not 0.0 <= mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {mutation_rate}")
        self.gene_generator = gene_generator
        self.mutation_rate = mutation_rate

    def mutate(self, genome: Plushy, rng: np.random.Generator) -> Plushy:
        if len(genome) == 0:
            return genome
        rate = self.mutation_rate if self.mutation_rate is not None else 1.0 / len(genome)
        replace = rng.random(len(genome)) < rate
        return genome.with_genes(
            self.gene_generator.generate(rng) if swap else gene
            for gene, swap in zip(genome, replace)
        )


class Mutate(Operator):
    """Operator adapter: genome -> mutated genome."""

    def __init__(self, mutator: Mutator):
        self.mutator = mutator

    def apply(self, value: Any, rng: np.random.Generator) -> Any:
        return self.mutator.mutate(value, rng)

    def __repr__(self) -> str:
        return f"Mutate({self.mutator!r})"


__all__ = [
    "Recombinator",
    "UniformXo",
    "TwoPointXo",
    "Recombine",
    "Mutator",
    "WithRate",
    "WithOneOverLength",
    "GeneReplacement",
    "Mutate",
]
