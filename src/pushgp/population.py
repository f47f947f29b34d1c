"""Populations and their parallel construction."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .individual import Individual

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.SeedSequence]


def as_seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


def parallel_map(
    task: Callable[[np.random.Generator, int], Any],
    count: int,
    seed: SeedLike = None,
    max_workers: Optional[int] = None,
) -> List[Any]:
    """
    Run `task(rng, index)` for every index in `range(count)` on a thread
    pool. Each task gets its own generator built from a spawned child seed;
    no generator is shared between tasks.
    """
    if count == 0:
        return []
    children = as_seed_sequence(seed).spawn(count)

    def run(index: int) -> Any:
        return task(np.random.default_rng(children[index]), index)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(run, range(count)))


class Population:
    """Ordered, immutable collection of individuals scored the same way."""

    def __init__(self, individuals: Iterable[Individual] = ()):
        self._individuals: Tuple[Individual, ...] = tuple(individuals)

    @classmethod
    def generate(
        cls,
        pop_size: int,
        make_genome: Callable[[np.random.Generator], Any],
        run_tests: Callable[[Any], Any],
        *,
        seed: SeedLike = None,
        max_workers: Optional[int] = None,
    ) -> "Population":
        """
        Build `pop_size` individuals in parallel.

        Args:
            pop_size: Number of individuals; 0 gives an empty population
            make_genome: `rng -> genome`, pure given its generator
            run_tests: `genome view -> results`, pure and thread-safe
            seed: Root seed; each individual draws from its own child stream
            max_workers: Thread pool size (default: executor's choice)
        """
        if pop_size < 0:
            raise ValueError(f"pop_size must be non-negative, got {pop_size}")
        individuals = parallel_map(
            lambda rng, _: Individual.generate(make_genome, run_tests, rng),
            pop_size,
            seed=seed,
            max_workers=max_workers,
        )
        logger.debug("Generated population of %d individuals", len(individuals))
        return cls(individuals)

    @property
    def individuals(self) -> Tuple[Individual, ...]:
        return self._individuals

    def size(self) -> int:
        return len(self._individuals)

    def is_empty(self) -> bool:
        return not self._individuals

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self._individuals)

    def __getitem__(self, index: int) -> Individual:
        return self._individuals[index]

    def best(self) -> Individual:
        """
        Individual with the best result vector.
        Raises ValueError on an empty population; check `is_empty` first.
        """
        if not self._individuals:
            raise ValueError("best() called on an empty population")
        return max(self._individuals, key=lambda ind: ind.results.rank_key)

    def sorted(self) -> List[Individual]:
        """Individuals from best to worst."""
        return sorted(self._individuals, key=lambda ind: ind.results.rank_key, reverse=True)

    def totals(self) -> Sequence[int]:
        return [ind.total for ind in self._individuals]

    def __repr__(self) -> str:
        return f"Population(size={len(self._individuals)})"


__all__ = ["Population", "parallel_map", "as_seed_sequence", "SeedLike"]
