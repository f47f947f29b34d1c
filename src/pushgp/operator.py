"""Composable operators.

An operator maps an input and a random generator to an output. Operators
chain into pipelines that are built once and applied per child::

    Select(selector).apply_twice().then_map(GenomeExtractor()).then(
        Recombine(TwoPointXo())
    ).then(Mutate(WithOneOverLength()))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Tuple

import numpy as np

from .individual import Individual, clone_genome


class Operator(ABC):
    """Base class for pipeline stages."""

    @abstractmethod
    def apply(self, value: Any, rng: np.random.Generator) -> Any:
        """Produce this stage's output for `value`."""

    def __call__(self, value: Any, rng: np.random.Generator) -> Any:
        return self.apply(value, rng)

    def then(self, other: "Operator") -> "Then":
        """Feed this operator's output into `other`."""
        return Then(self, other)

    def then_map(self, other: "Operator") -> "ThenMap":
        """Apply `other` to each element of this operator's tuple output."""
        return ThenMap(self, other)

    def apply_twice(self) -> "ApplyTwice":
        """Apply this operator twice to the same input, yielding a pair."""
        return ApplyTwice(self)


class Then(Operator):
    def __init__(self, first: Operator, second: Operator):
        self.first = first
        self.second = second

    def apply(self, value: Any, rng: np.random.Generator) -> Any:
        return self.second.apply(self.first.apply(value, rng), rng)

    def __repr__(self) -> str:
        return f"{self.first!r}.then({self.second!r})"


class ThenMap(Operator):
    def __init__(self, first: Operator, second: Operator):
        self.first = first
        self.second = second

    def apply(self, value: Any, rng: np.random.Generator) -> Tuple[Any, ...]:
        return tuple(self.second.apply(item, rng) for item in self.first.apply(value, rng))

    def __repr__(self) -> str:
        return f"{self.first!r}.then_map({self.second!r})"


class ApplyTwice(Operator):
    def __init__(self, operator: Operator):
        self.operator = operator

    def apply(self, value: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        return self.operator.apply(value, rng), self.operator.apply(value, rng)

    def __repr__(self) -> str:
        return f"{self.operator!r}.apply_twice()"


class Identity(Operator):
    """Ignores its input and returns a fixed value."""

    def __init__(self, value: Any):
        self.value = value

    def apply(self, value: Any, rng: np.random.Generator) -> Any:
        return self.value


class FnOperator(Operator):
    """Wraps a plain `(value, rng) -> output` function."""

    def __init__(self, function: Callable[[Any, np.random.Generator], Any]):
        self.function = function

    def apply(self, value: Any, rng: np.random.Generator) -> Any:
        return self.function(value, rng)


class GenomeExtractor(Operator):
    """Individual -> independent copy of its genome."""

    def apply(self, value: Individual, rng: np.random.Generator) -> Any:
        return clone_genome(value.genome)

    def __repr__(self) -> str:
        return "GenomeExtractor()"


class GenomeScorer(Operator):
    """Runs a genome-producing pipeline and scores the result."""

    def __init__(self, genome_maker: Operator, scorer: Callable[[Any], Any]):
        self.genome_maker = genome_maker
        self.scorer = scorer

    def apply(self, value: Any, rng: np.random.Generator) -> Individual:
        genome = self.genome_maker.apply(value, rng)
        return Individual.scored(genome, self.scorer)


__all__ = [
    "Operator",
    "Then",
    "ThenMap",
    "ApplyTwice",
    "Identity",
    "FnOperator",
    "GenomeExtractor",
    "GenomeScorer",
]
