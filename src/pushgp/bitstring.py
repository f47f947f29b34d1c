"""Boolean-array genomes: generation, scoring functions, linear operators."""

from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np

Bitstring = np.ndarray


def make_random(length: int, rng: np.random.Generator) -> Bitstring:
    """Fair coin per position."""
    return rng.random(length) < 0.5


def to_string(bits: Sequence[bool]) -> str:
    return "".join("1" if bit else "0" for bit in bits)


def count_ones(bits: Sequence[bool]) -> np.ndarray:
    """One result per bit: 1 if set, 0 otherwise."""
    return np.asarray(bits, dtype=bool).astype(np.int64)


def all_same(bits: Sequence[bool]) -> bool:
    bits = np.asarray(bits, dtype=bool)
    return bool(bits.all() or not bits.any())


def hiff(bits: Sequence[bool]) -> np.ndarray:
    """
    Hierarchical-if-and-only-if scores.

    The sequence is split recursively into halves; one score is written per
    node of that tree in post-order (left, right, self), giving 2n - 1
    scores. Leaves score their length. An inner node scores its length when
    both halves are uniform and agree with each other, else 0.
    """
    bits = np.asarray(bits, dtype=bool)
    if len(bits) == 0:
        raise ValueError("hiff needs at least one bit")
    scores = np.zeros(2 * len(bits) - 1, dtype=np.int64)
    _do_hiff(bits, scores, 0)
    return scores


def _do_hiff(bits: np.ndarray, scores: np.ndarray, index: int) -> Tuple[bool, int]:
    # Returns (uniform, next write index).
    length = len(bits)
    if length < 2:
        scores[index] = length
        return True, index + 1
    half = length // 2
    left_same, index = _do_hiff(bits[:half], scores, index)
    right_same, index = _do_hiff(bits[half:], scores, index)
    if left_same and right_same and bits[0] == bits[half]:
        scores[index] = length
        return True, index + 1
    scores[index] = 0
    return False, index + 1


def _check_lengths(first: Any, second: Any) -> int:
    if len(first) != len(second):
        raise ValueError(
            f"Parents must have the same length, got {len(first)} and {len(second)}"
        )
    return len(first)


def _rebuild(parent: Any, items: Sequence[Any]) -> Any:
    if isinstance(parent, np.ndarray):
        return np.asarray(items, dtype=parent.dtype)
    if hasattr(parent, "with_genes"):
        return parent.with_genes(items)
    return type(parent)(items)


def uniform_xo(first: Any, second: Any, rng: np.random.Generator) -> Any:
    """Each position comes from either parent with equal probability."""
    length = _check_lengths(first, second)
    take_first = rng.random(length) < 0.5
    if isinstance(first, np.ndarray):
        return np.where(take_first, first, second)
    return _rebuild(first, [a if pick else b for a, b, pick in zip(first, second, take_first)])


def two_point_xo(first: Any, second: Any, rng: np.random.Generator) -> Any:
    """Copy of `first` with `[lo, hi)` overwritten from `second`."""
    length = _check_lengths(first, second)
    if length == 0:
        return _rebuild(first, [])
    lo, hi = sorted(int(p) for p in rng.integers(0, length, size=2))
    if isinstance(first, np.ndarray):
        child = first.copy()
        child[lo:hi] = second[lo:hi]
        return child
    items = list(first)
    items[lo:hi] = list(second)[lo:hi]
    return _rebuild(first, items)


def mutate_with_rate(bits: Bitstring, mutation_rate: float, rng: np.random.Generator) -> Bitstring:
    """Flip each bit independently with probability `mutation_rate`."""
    if not 0.0 <= mutation_rate <= 1.0:
        raise ValueError(f"mutation_rate must be in [0, 1], got {mutation_rate}")
    bits = np.asarray(bits, dtype=bool)
    flips = rng.random(len(bits)) < mutation_rate
    return np.logical_xor(bits, flips)


def mutate_one_over_length(bits: Bitstring, rng: np.random.Generator) -> Bitstring:
    """Expected single flip per genome."""
    if len(bits) == 0:
        return np.asarray(bits, dtype=bool).copy()
    return mutate_with_rate(bits, 1.0 / len(bits), rng)


__all__ = [
    "Bitstring",
    "make_random",
    "to_string",
    "count_ones",
    "all_same",
    "hiff",
    "uniform_xo",
    "two_point_xo",
    "mutate_with_rate",
    "mutate_one_over_length",
]
