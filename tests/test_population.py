import numpy as np
import pytest

from pushgp import CaseResults, Individual, Population, aggregate, bitstring, genome_view, parallel_map


def count_population(size, seed, length=8):
    return Population.generate(
        size,
        lambda rng: bitstring.make_random(length, rng),
        bitstring.count_ones,
        seed=seed,
        max_workers=4,
    )


def test_score_vectors_rank_higher_totals_first():
    assert CaseResults.from_scores([3, 4]) > CaseResults.from_scores([1, 1])
    assert CaseResults.from_scores([0]) < CaseResults.from_scores([1])
    assert aggregate([1, 2, 3]) == 6


def test_error_vectors_rank_lower_totals_first():
    better = CaseResults.from_errors([1, 2])
    worse = CaseResults.from_errors([5, 5])
    assert better > worse
    assert worse < better
    assert better.total == 3


def test_equal_totals_are_incomparable():
    a = CaseResults.from_scores([1, 0])
    b = CaseResults.from_scores([0, 1])
    assert not a < b
    assert not b < a
    assert a <= b and b <= a


def test_mixed_directions_cannot_be_compared():
    with pytest.raises(TypeError):
        CaseResults.from_scores([1]) < CaseResults.from_errors([1])


def test_individual_freezes_array_genome():
    genome = bitstring.make_random(8, np.random.default_rng(0))
    individual = Individual.scored(genome, bitstring.count_ones)
    assert individual.total == int(genome.sum())
    with pytest.raises(ValueError):
        individual.genome[0] = not individual.genome[0]


def test_individual_wraps_raw_results():
    individual = Individual(np.ones(3, dtype=bool), [1, 1, 1])
    assert isinstance(individual.results, CaseResults)
    assert individual.total == 3
    assert str(individual) == "[111]\n[1, 1, 1]\n(3)"


def test_genome_view_is_read_only():
    genome = np.zeros(4, dtype=bool)
    view = genome_view(genome)
    with pytest.raises(ValueError):
        view[0] = True
    genome[0] = True
    assert view[0]
    assert genome_view("abc") == "abc"


def test_generate_population():
    population = count_population(10, seed=1)
    assert population.size() == 10
    for individual in population:
        assert len(individual.genome) == 8
        assert len(individual.results) == 8
        assert 0 <= individual.total <= 8


def test_generation_is_reproducible_across_threads():
    first = count_population(25, seed=11)
    second = count_population(25, seed=11)
    assert first.totals() == second.totals()
    for a, b in zip(first, second):
        assert np.array_equal(a.genome, b.genome)


def test_empty_population():
    population = count_population(0, seed=0)
    assert population.is_empty()
    with pytest.raises(ValueError):
        population.best()


def test_best_and_sorted():
    population = Population(
        Individual(np.array(list(text)) == "1", bitstring.count_ones(np.array(list(text)) == "1"))
        for text in ("0010", "1110", "0000")
    )
    assert population.best().total == 3
    assert [ind.total for ind in population.sorted()] == [3, 1, 0]


def test_best_on_error_vectors_prefers_lowest():
    population = Population(
        [
            Individual(np.zeros(1, dtype=bool), CaseResults.from_errors([4])),
            Individual(np.zeros(1, dtype=bool), CaseResults.from_errors([1])),
        ]
    )
    assert population.best().total == 1


def test_parallel_map_gives_each_task_its_own_stream():
    draws = parallel_map(lambda rng, idx: (idx, float(rng.random())), 8, seed=3, max_workers=3)
    assert [idx for idx, _ in draws] == list(range(8))
    assert len({value for _, value in draws}) == 8
    assert draws == parallel_map(lambda rng, idx: (idx, float(rng.random())), 8, seed=3)
