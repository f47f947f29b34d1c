"""Per-case result vectors and their ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


def aggregate(results: Iterable[int]) -> int:
    """Plain sum of the per-case results."""
    return sum(int(r) for r in results)


@dataclass(frozen=True)
class CaseResults:
    """
    One integer per test case or criterion, plus the summed total.

    Vectors built with `from_scores` rank higher totals as better; vectors
    built with `from_errors` rank lower totals as better. Comparisons look
    at the total only; two vectors with equal totals are neither less nor
    greater than each other.
    """

    results: Tuple[int, ...]
    lower_is_better: bool = False

    def __post_init__(self):
        object.__setattr__(self, "results", tuple(int(r) for r in self.results))

    @classmethod
    def from_scores(cls, scores: Iterable[int]) -> "CaseResults":
        return cls(tuple(scores), lower_is_better=False)

    @classmethod
    def from_errors(cls, errors: Iterable[int]) -> "CaseResults":
        return cls(tuple(errors), lower_is_better=True)

    @property
    def total(self) -> int:
        return aggregate(self.results)

    @property
    def rank_key(self) -> int:
        """Larger is better, whatever the direction of the raw total."""
        return -self.total if self.lower_is_better else self.total

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def __getitem__(self, index: int) -> int:
        return self.results[index]

    def _check(self, other: object) -> "CaseResults":
        if not isinstance(other, CaseResults):
            return NotImplemented
        if other.lower_is_better != self.lower_is_better:
            raise TypeError("Cannot compare score vectors with error vectors.")
        return other

    def __lt__(self, other: "CaseResults") -> bool:
        other = self._check(other)
        if other is NotImplemented:
            return NotImplemented
        return self.rank_key < other.rank_key

    def __le__(self, other: "CaseResults") -> bool:
        other = self._check(other)
        if other is NotImplemented:
            return NotImplemented
        return self.rank_key <= other.rank_key

    def __gt__(self, other: "CaseResults") -> bool:
        other = self._check(other)
        if other is NotImplemented:
            return NotImplemented
        return self.rank_key > other.rank_key

    def __ge__(self, other: "CaseResults") -> bool:
        other = self._check(other)
        if other is NotImplemented:
            return NotImplemented
        return self.rank_key >= other.rank_key

    def __str__(self) -> str:
        return f"{list(self.results)} (total {self.total})"


__all__ = ["aggregate", "CaseResults"]
