"""Child makers: one selection-to-scoring pipeline per child."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import numpy as np

from .individual import Individual
from .operator import GenomeExtractor, GenomeScorer, Operator
from .population import Population
from .selector import Select, Selector
from .variation import (
    Mutate,
    Mutator,
    Recombinator,
    Recombine,
    TwoPointXo,
    UniformXo,
    WithOneOverLength,
    WithRate,
)


class ChildMaker(ABC):
    """
    Describes how one child is made. The pipeline it returns is a plain
    value, built once per selector and applied to the population per child.
    """

    @abstractmethod
    def pipeline(self, selector: Selector) -> Operator:
        """Population -> scored child."""

    def make_child(
        self, rng: np.random.Generator, population: Population, selector: Selector
    ) -> Individual:
        """Build and score one child from `population`."""
        return self.pipeline(selector).apply(population, rng)


class XoMutate(ChildMaker):
    """Select two parents, recombine their genomes, mutate, rescore."""

    def __init__(self, recombinator: Recombinator, mutator: Mutator, scorer: Callable[[Any], Any]):
        self.recombinator = recombinator
        self.mutator = mutator
        self.scorer = scorer

    def pipeline(self, selector: Selector) -> Operator:
        make_genome = (
            Select(selector)
            .apply_twice()
            .then_map(GenomeExtractor())
            .then(Recombine(self.recombinator))
            .then(Mutate(self.mutator))
        )
        return GenomeScorer(make_genome, self.scorer)


class TwoPointXoMutate(XoMutate):
    def __init__(self, scorer: Callable[[Any], Any], mutator: Optional[Mutator] = None):
        super().__init__(TwoPointXo(), mutator or WithOneOverLength(), scorer)


class UniformXoMutate(XoMutate):
    def __init__(self, scorer: Callable[[Any], Any], mutation_rate: Optional[float] = None):
        mutator = WithOneOverLength() if mutation_rate is None else WithRate(mutation_rate)
        super().__init__(UniformXo(), mutator, scorer)


__all__ = ["ChildMaker", "XoMutate", "TwoPointXoMutate", "UniformXoMutate"]
