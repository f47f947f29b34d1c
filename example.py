"""Example workflow: evolve a HIFF bitstring or a median-of-three program."""

import logging
import sys

from pushgp import RunConfig, RunModel, example_hiff, example_median


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    mode = sys.argv[1].lower() if len(sys.argv) > 1 else "hiff"
    run_model = RunModel(sys.argv[2].lower()) if len(sys.argv) > 2 else RunModel.PARALLEL

    if mode == "median":
        config = RunConfig(
            population_size=200,
            num_generations=50,
            run_model=run_model,
            seed=42,
            max_initial_instructions=40,
            max_stack_size=200,
        )
        example_median(config)
    elif mode == "both":
        example_hiff(RunConfig(run_model=run_model, seed=42))
        example_median(RunConfig(run_model=run_model, seed=42, max_stack_size=200))
    else:
        config = RunConfig(
            population_size=200,
            num_generations=100,
            run_model=run_model,
            seed=42,
            bit_length=128,
        )
        example_hiff(config)


if __name__ == "__main__":
    main()
