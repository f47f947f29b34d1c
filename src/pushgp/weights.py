"""Gene weight profiles used when sampling random genes."""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, Optional, Set


class GeneWeights:
    """Optional weights for individual genes and named groups of genes."""

    def __init__(self, default_weight: float = 1.0):
        self.default_weight = default_weight
        self._gene_weights: Dict[Hashable, float] = {}
        self._groups: Dict[str, Set[Hashable]] = {}
        self._group_weights: Dict[str, float] = {}

    @staticmethod
    def _normalize_group(name: str) -> str:
        clean = name.strip()
        if not clean:
            raise ValueError("Group name must be a non-empty string.")
        return clean

    @staticmethod
    def _check_weight(weight: float) -> float:
        weight = float(weight)
        if weight < 0:
            raise ValueError(f"Weights must be non-negative, got {weight}.")
        return weight

    def set_gene_weight(self, gene: Hashable, weight: Optional[float]) -> None:
        """Assign or clear a gene-specific weight."""
        if weight is None:
            self._gene_weights.pop(gene, None)
            return
        self._gene_weights[gene] = self._check_weight(weight)

    def set_group(
        self,
        name: str,
        genes: Iterable[Hashable],
        *,
        weight: Optional[float] = None,
    ) -> None:
        """Define or replace a group of genes, optionally setting its weight."""
        key = self._normalize_group(name)
        self._groups[key] = set(genes)
        if weight is not None:
            self._group_weights[key] = self._check_weight(weight)

    def group_members(self, name: str) -> Set[Hashable]:
        key = self._normalize_group(name)
        return set(self._groups.get(key, set()))

    def set_group_weight(self, name: str, weight: Optional[float]) -> None:
        """Assign or clear a group weight."""
        key = self._normalize_group(name)
        if weight is None:
            self._group_weights.pop(key, None)
            return
        self._group_weights[key] = self._check_weight(weight)

    def resolve_weight(self, gene: Hashable) -> float:
        """
        Resolve a gene's weight: its own weight, else the mean of the weights
        of the groups it belongs to, else the default.
        """
        if gene in self._gene_weights:
            return self._gene_weights[gene]

        group_weights = [
            self._group_weights[name]
            for name, members in self._groups.items()
            if gene in members and name in self._group_weights
        ]
        if group_weights:
            return sum(group_weights) / len(group_weights)
        return self.default_weight


__all__ = ["GeneWeights"]
