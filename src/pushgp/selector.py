"""Selection strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .individual import Individual
from .operator import Operator
from .population import Population


def _require_individuals(population: Population) -> None:
    if population.is_empty():
        raise ValueError("Cannot select from an empty population")


class Selector(ABC):
    """Picks one individual; never alters the population."""

    @abstractmethod
    def select(self, population: Population, rng: np.random.Generator) -> Individual:
        """Return one individual from a non-empty population."""


class Select(Operator):
    """Operator adapter: population -> selected individual."""

    def __init__(self, selector: Selector):
        self.selector = selector

    def apply(self, value: Population, rng: np.random.Generator) -> Individual:
        return self.selector.select(value, rng)

    def __repr__(self) -> str:
        return f"Select({self.selector!r})"


class Best(Selector):
    def select(self, population: Population, rng: np.random.Generator) -> Individual:
        _require_individuals(population)
        return population.best()

    def __repr__(self) -> str:
        return "Best()"


class RandomSelector(Selector):
    def select(self, population: Population, rng: np.random.Generator) -> Individual:
        _require_individuals(population)
        return population[int(rng.integers(len(population)))]

    def __repr__(self) -> str:
        return "RandomSelector()"


class Tournament(Selector):
    """Best of `size` distinct individuals drawn at random."""

    def __init__(self, size: int = 3):
        if size < 1:
            raise ValueError(f"Tournament size must be positive, got {size}")
        self.size = size

    def select(self, population: Population, rng: np.random.Generator) -> Individual:
        _require_individuals(population)
        picks = rng.choice(len(population), size=min(self.size, len(population)), replace=False)
        contestants = [population[int(i)] for i in picks]
        return max(contestants, key=lambda ind: ind.results.rank_key)

    def __repr__(self) -> str:
        return f"Tournament({self.size})"


class Lexicase(Selector):
    """
    Filters candidates case by case in a random order, keeping those with
    the best result on each case; ties left at the end are broken at random.
    """

    def select(self, population: Population, rng: np.random.Generator) -> Individual:
        _require_individuals(population)
        candidates = list(population)
        num_cases = len(candidates[0].results)
        for case in rng.permutation(num_cases):
            if len(candidates) == 1:
                break
            sign = -1 if candidates[0].results.lower_is_better else 1
            best = max(sign * ind.results[int(case)] for ind in candidates)
            candidates = [ind for ind in candidates if sign * ind.results[int(case)] == best]
        return candidates[int(rng.integers(len(candidates)))]

    def __repr__(self) -> str:
        return "Lexicase()"


__all__ = ["Selector", "Select", "Best", "RandomSelector", "Tournament", "Lexicase"]
