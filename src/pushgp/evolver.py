"""Generation driver and evolution loop."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import numpy as np

from .child_maker import ChildMaker
from .config import RunConfig
from .enums import RunModel
from .individual import Individual
from .operator import Operator
from .population import Population, SeedLike, as_seed_sequence, parallel_map
from .selector import Selector

logger = logging.getLogger(__name__)


class Generation:
    """
    A population plus the selector and child maker that produce its
    successor. Each step replaces the population with a brand-new one.
    """

    def __init__(
        self,
        population: Population,
        selector: Selector,
        child_maker: ChildMaker,
        *,
        max_workers: Optional[int] = None,
    ):
        self.population = population
        self.selector = selector
        self.child_maker = child_maker
        self.max_workers = max_workers
        self.generation = 0
        self.pipeline: Operator = child_maker.pipeline(selector)

    def make_child(self, rng: np.random.Generator) -> Individual:
        return self.pipeline.apply(self.population, rng)

    def serial_next(self, rng: np.random.Generator) -> Population:
        """Build every child of the next generation from one generator."""
        size = self.population.size()
        children = [self.make_child(rng) for _ in range(size)]
        return self._advance(Population(children))

    def par_next(self, seed: SeedLike = None) -> Population:
        """Build every child on the thread pool, one independent stream per child."""
        size = self.population.size()
        children = parallel_map(
            lambda rng, _: self.make_child(rng),
            size,
            seed=seed,
            max_workers=self.max_workers,
        )
        return self._advance(Population(children))

    def _advance(self, population: Population) -> Population:
        self.population = population
        self.generation += 1
        return population

    def best(self) -> Individual:
        return self.population.best()


class Evolver:
    """Runs a configured number of generations."""

    def __init__(
        self,
        config: RunConfig,
        make_genome: Callable[[np.random.Generator], Any],
        scorer: Callable[[Any], Any],
        selector: Selector,
        child_maker: ChildMaker,
    ):
        self.config = config.validate()
        self.make_genome = make_genome
        self.scorer = scorer
        self.selector = selector
        self.child_maker = child_maker
        self.current: Optional[Generation] = None

    def initialize(self, seed: SeedLike = None) -> Generation:
        population = Population.generate(
            self.config.population_size,
            self.make_genome,
            self.scorer,
            seed=seed,
            max_workers=self.config.max_workers,
        )
        self.current = Generation(
            population,
            self.selector,
            self.child_maker,
            max_workers=self.config.max_workers,
        )
        return self.current

    def evolve(
        self,
        progress_callback: Optional[Callable[[int, Individual], None]] = None,
        stop_when: Optional[Callable[[Individual], bool]] = None,
    ) -> Generation:
        """
        Main evolution loop.

        Args:
            progress_callback: Optional callback(generation, best_individual)
            stop_when: Optional predicate on the best individual ending the run early
        Returns:
            The final generation
        """
        root = as_seed_sequence(self.config.seed)
        init_seed, serial_seed, *step_seeds = root.spawn(self.config.num_generations + 2)
        generation = self.initialize(init_seed)
        serial_rng = np.random.default_rng(serial_seed)

        for gen in range(self.config.num_generations):
            best = generation.best()
            logger.info(
                "Gen %03d: best total=%d, size=%d",
                gen,
                best.total,
                generation.population.size(),
            )
            if progress_callback:
                progress_callback(gen, best)
            if stop_when is not None and stop_when(best):
                logger.info("Stopping early at generation %d", gen)
                return generation

            if self.config.run_model == RunModel.SERIAL:
                generation.serial_next(serial_rng)
            else:
                generation.par_next(step_seeds[gen])

        best = generation.best()
        logger.info("Final best total=%d", best.total)
        if progress_callback:
            progress_callback(self.config.num_generations, best)
        return generation


__all__ = ["Generation", "Evolver"]
