import numpy as np
import pytest

from pushgp import (
    Case,
    ExecInstruction,
    Evolver,
    GeneGenerator,
    GeneReplacement,
    Generation,
    IntInstruction,
    Lexicase,
    Plushy,
    Population,
    ProgramEvaluator,
    PushInput,
    PushLiteral,
    RunConfig,
    RunModel,
    Tournament,
    TwoPointXo,
    TwoPointXoMutate,
    XoMutate,
    bitstring,
    example_hiff,
    int_inputs,
)
from pushgp.demos import median_cases
from pushgp.evaluator import DEFAULT_PENALTY


def count_ones_evolver(**overrides):
    settings = dict(population_size=20, num_generations=5, bit_length=16, seed=3)
    settings.update(overrides)
    config = RunConfig(**settings)
    return Evolver(
        config,
        lambda rng: bitstring.make_random(config.bit_length, rng),
        bitstring.count_ones,
        Tournament(config.tournament_size),
        TwoPointXoMutate(bitstring.count_ones),
    )


def test_config_from_mapping():
    config = RunConfig.from_mapping({"population_size": 10, "run_model": "Serial"})
    assert config.population_size == 10
    assert config.run_model is RunModel.SERIAL
    assert config.as_dict()["run_model"] == "serial"


@pytest.mark.parametrize(
    "mapping",
    [
        {"population_siz": 10},
        {"population_size": 0},
        {"max_workers": 0},
        {"mutation_rate": 2.0},
        {"run_model": "distributed"},
    ],
)
def test_config_rejects_bad_values(mapping):
    with pytest.raises(ValueError):
        RunConfig.from_mapping(mapping)


def test_evolve_reports_every_generation():
    seen = []
    generation = count_ones_evolver().evolve(lambda gen, best: seen.append((gen, best.total)))
    assert [gen for gen, _ in seen] == list(range(6))
    assert generation.generation == 5
    assert generation.population.size() == 20


def test_stop_when_ends_the_run():
    seen = []
    generation = count_ones_evolver().evolve(
        lambda gen, best: seen.append(gen), stop_when=lambda best: True
    )
    assert seen == [0]
    assert generation.generation == 0


@pytest.mark.parametrize("run_model", [RunModel.SERIAL, RunModel.PARALLEL])
def test_evolution_is_reproducible(run_model):
    first = count_ones_evolver(run_model=run_model).evolve()
    second = count_ones_evolver(run_model=run_model).evolve()
    assert first.population.totals() == second.population.totals()


def test_selection_pressure_improves_best():
    evolver = count_ones_evolver(population_size=40, num_generations=15, bit_length=32)
    totals = []
    evolver.evolve(lambda gen, best: totals.append(best.total))
    assert totals[-1] > 16


def test_generation_serial_and_parallel_steps():
    population = Population.generate(
        8,
        lambda rng: bitstring.make_random(8, rng),
        bitstring.count_ones,
        seed=0,
    )
    generation = Generation(population, Tournament(2), TwoPointXoMutate(bitstring.count_ones))
    serial = generation.serial_next(np.random.default_rng(1))
    assert serial.size() == 8
    parallel = generation.par_next(seed=2)
    assert parallel.size() == 8
    assert generation.population is parallel
    assert generation.generation == 2


def test_evaluator_scores_programs():
    cases = [Case({"x": 3}, 3), Case({"x": -4}, 4)]
    evaluator = ProgramEvaluator(cases)
    absolute = Plushy((PushInput("x"), IntInstruction.ABS))
    assert evaluator(absolute).results == (0, 0)
    assert evaluator(absolute).lower_is_better

    identity = Plushy((PushInput("x"),))
    assert evaluator(identity).results == (0, 8)


def test_evaluator_penalizes_missing_output():
    cases = [Case({"x": 1}, 1)]
    evaluator = ProgramEvaluator(cases, max_stack_size=3)
    assert evaluator(Plushy()).results == (DEFAULT_PENALTY,)
    assert evaluator(Plushy((PushInput("missing"),))).results == (DEFAULT_PENALTY,)
    too_long = Plushy((PushLiteral.from_int(1),) * 4)
    assert evaluator(too_long).results == (DEFAULT_PENALTY,)


def test_evaluator_callback_sees_each_case():
    seen = []
    evaluator = ProgramEvaluator(
        [Case({"x": 2}, 5), Case({"x": 5}, 5)],
        callback=lambda idx, output, error: seen.append((idx, output, error)),
    )
    evaluator(Plushy((PushInput("x"),)))
    assert seen == [(0, 2, 3), (1, 5, 0)]


def test_evaluator_step_limit_counts_as_failure():
    evaluator = ProgramEvaluator([Case({}, 0)], max_steps=20)
    runaway = [PushLiteral.from_int(0), ExecInstruction.DUP, ExecInstruction.DUP]
    assert evaluator.evaluate(runaway).results == (DEFAULT_PENALTY,)


def test_median_cases():
    cases = median_cases(20, np.random.default_rng(0))
    assert len(cases) == 20
    for case in cases:
        values = sorted(case.inputs.values())
        assert case.expected == values[1]
        assert all(-100 <= v <= 100 for v in values)


def test_short_program_run():
    cases = median_cases(10, np.random.default_rng(1))
    evaluator = ProgramEvaluator(cases, max_stack_size=50, max_steps=200)
    genes = GeneGenerator(list(IntInstruction) + list(ExecInstruction), inputs=int_inputs("a", "b", "c"))
    config = RunConfig(population_size=12, num_generations=3, seed=5, max_initial_instructions=10)
    evolver = Evolver(
        config,
        genes.genome_factory(config.max_initial_instructions),
        evaluator,
        Lexicase(),
        XoMutate(TwoPointXo(), GeneReplacement(genes), evaluator),
    )
    best = evolver.evolve().best()
    assert isinstance(best.genome, Plushy)
    assert len(best.results) == 10
    assert best.total >= 0


def test_example_hiff_small(capsys):
    best = example_hiff(RunConfig(population_size=10, num_generations=2, bit_length=8, seed=0))
    assert len(best.results) == 15
    assert "Best Individual" in capsys.readouterr().out


class CountingChildMaker(TwoPointXoMutate):
    def __init__(self, scorer):
        super().__init__(scorer)
        self.pipelines_built = 0

    def pipeline(self, selector):
        self.pipelines_built += 1
        return super().pipeline(selector)


def test_generation_builds_pipeline_once():
    population = Population.generate(
        6,
        lambda rng: bitstring.make_random(8, rng),
        bitstring.count_ones,
        seed=4,
    )
    child_maker = CountingChildMaker(bitstring.count_ones)
    generation = Generation(population, Tournament(2), child_maker)
    pipeline = generation.pipeline
    generation.serial_next(np.random.default_rng(0))
    generation.par_next(seed=1)
    assert child_maker.pipelines_built == 1
    assert generation.pipeline is pipeline
    assert generation.population.size() == 6
