"""Example workflows preserved for quick experimentation."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from . import bitstring
from .child_maker import TwoPointXoMutate, XoMutate
from .config import RunConfig
from .enums import BOOL_OPS, EXEC_OPS, INT_OPS
from .evaluator import Case, ProgramEvaluator
from .evolver import Evolver
from .genome import GeneGenerator, int_inputs
from .selector import Lexicase, Tournament
from .variation import GeneReplacement, TwoPointXo, WithRate


def median_cases(num_cases: int, rng: np.random.Generator) -> List[Case]:
    """Triples drawn from [-100, 100] paired with their median."""
    cases = []
    for _ in range(num_cases):
        a, b, c = (int(v) for v in rng.integers(-100, 100, size=3, endpoint=True))
        cases.append(Case({"a": a, "b": b, "c": c}, sorted((a, b, c))[1]))
    return cases


def example_hiff(config: Optional[RunConfig] = None):
    """Example: evolve bitstrings against hierarchical-if-and-only-if."""
    config = config or RunConfig(population_size=200, num_generations=100, bit_length=128)
    print("=== HIFF ===\n")

    def progress_callback(gen, best):
        if gen % 10 == 0:
            print(f"Generation {gen:03d}: best total={best.total}")

    mutator = WithRate(config.mutation_rate) if config.mutation_rate is not None else None
    evolver = Evolver(
        config,
        lambda rng: bitstring.make_random(config.bit_length, rng),
        bitstring.hiff,
        Tournament(config.tournament_size),
        TwoPointXoMutate(bitstring.hiff, mutator),
    )
    maximum = int(bitstring.hiff(np.zeros(config.bit_length, dtype=bool)).sum())
    generation = evolver.evolve(progress_callback, stop_when=lambda best: best.total == maximum)

    best = generation.best()
    print("\n=== Best Individual ===")
    print(best)
    return best


def example_median(config: Optional[RunConfig] = None):
    """Example: evolve a program computing the median of three integers."""
    config = config or RunConfig(
        population_size=200,
        num_generations=50,
        max_initial_instructions=40,
        max_stack_size=200,
    )
    print("=== Median of Three ===\n")

    cases = median_cases(50, np.random.default_rng(config.seed))
    evaluator = ProgramEvaluator(
        cases,
        max_stack_size=config.max_stack_size,
        max_steps=config.max_instruction_steps,
    )
    genes = GeneGenerator(
        INT_OPS + BOOL_OPS + EXEC_OPS,
        inputs=int_inputs("a", "b", "c"),
    )

    def progress_callback(gen, best):
        if gen % 5 == 0:
            print(f"Generation {gen:03d}: total error={best.total}")

    evolver = Evolver(
        config,
        genes.genome_factory(config.max_initial_instructions),
        evaluator,
        Lexicase(),
        XoMutate(TwoPointXo(), GeneReplacement(genes), evaluator),
    )
    generation = evolver.evolve(progress_callback, stop_when=lambda best: best.total == 0)

    best = generation.best()
    print("\n=== Best Program ===")
    print(f"Total error: {best.total}")
    print(f"Signature: {best.genome.signature()[:16]}...")
    for line in best.genome.to_human_readable():
        print(f"  {line}")
    return best


__all__ = ["median_cases", "example_hiff", "example_median"]
