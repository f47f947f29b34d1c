"""Plushy genomes and random gene generation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

import numpy as np

from .enums import BLOCK_ARITY, ExecInstruction, FloatInstruction, StackType
from .errors import GenomeError
from .instruction import Block, PushInput, PushLiteral, describe_instruction, is_instruction
from .values import ValueEnumerations
from .weights import GeneWeights


class Marker(Enum):
    """Non-instruction genes."""

    CLOSE = "close"


CLOSE = Marker.CLOSE


def _parse(genes: Sequence[Any], pos: int, depth: int) -> Tuple[List[Any], int]:
    items: List[Any] = []
    while pos < len(genes):
        gene = genes[pos]
        pos += 1
        if gene is CLOSE:
            if depth > 0:
                return items, pos
            continue
        if not is_instruction(gene):
            raise GenomeError(f"Gene {pos - 1} is not an instruction: {gene!r}")
        items.append(gene)
        arity = BLOCK_ARITY[gene] if isinstance(gene, ExecInstruction) else 0
        for _ in range(arity):
            block, pos = _parse(genes, pos, depth + 1)
            items.append(Block(tuple(block)))
    return items, pos


@dataclass(frozen=True)
class Plushy:
    """
    Linear genome of instructions and CLOSE markers.
    Converts deterministically into a nested Push program.
    """

    genes: Tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "genes", tuple(self.genes))

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self):
        return iter(self.genes)

    def __getitem__(self, index):
        return self.genes[index]

    def with_genes(self, genes: Sequence[Any]) -> "Plushy":
        return Plushy(tuple(genes))

    def to_program(self) -> Tuple[Any, ...]:
        """
        Build the program. Each exec instruction opens one block per block
        argument; CLOSE ends the innermost open block, stray CLOSEs are
        dropped and blocks still open at the end are closed implicitly.
        """
        items, _ = _parse(self.genes, 0, 0)
        return tuple(items)

    def signature(self) -> str:
        """Stable hash of the gene sequence."""
        parts = [describe_instruction(g) if g is not CLOSE else "close" for g in self.genes]
        return hashlib.md5("|".join(parts).encode()).hexdigest()

    def to_human_readable(self) -> List[str]:
        """Program items one per line, indented by nesting depth."""
        lines: List[str] = []

        def walk(items, depth):
            for item in items:
                if isinstance(item, Block):
                    lines.append("  " * depth + "(")
                    walk(item.program, depth + 1)
                    lines.append("  " * depth + ")")
                else:
                    lines.append("  " * depth + describe_instruction(item))

        walk(self.to_program(), 0)
        return lines

    def __str__(self) -> str:
        return " ".join(describe_instruction(g) if g is not CLOSE else "close" for g in self.genes)


class GeneGenerator:
    """
    Draws random genes: CLOSE markers, literals, inputs, and instructions
    (the latter two weighted through an optional GeneWeights profile).
    Float literals come from `float_constants` or `float_range` and are
    only drawn when the gene set touches the float stack.
    """

    def __init__(
        self,
        instructions: Sequence[Any],
        *,
        inputs: Sequence[PushInput] = (),
        int_range: Tuple[int, int] = ValueEnumerations.INT_LITERAL_RANGE,
        float_range: Tuple[float, float] = ValueEnumerations.FLOAT_LITERAL_RANGE,
        float_constants: Sequence[float] = ValueEnumerations.FLOAT_CONSTANTS,
        literal_probability: float = 0.1,
        close_probability: float = 0.1,
        weights: Optional[GeneWeights] = None,
    ):
        self.choices: List[Any] = list(instructions) + list(inputs)
        if not self.choices:
            raise ValueError("GeneGenerator needs at least one instruction or input.")
        if literal_probability + close_probability > 1.0:
            raise ValueError("literal_probability + close_probability must not exceed 1.")
        self.int_range = int_range
        self.float_range = float_range
        self.float_constants = list(float_constants)
        self.uses_floats = any(
            isinstance(g, FloatInstruction)
            or (isinstance(g, PushInput) and g.stack_type == StackType.FLOAT)
            for g in self.choices
        )
        self.literal_probability = literal_probability
        self.close_probability = close_probability
        self.weights = weights or GeneWeights()
        raw = np.array([self.weights.resolve_weight(g) for g in self.choices], dtype=float)
        if raw.sum() <= 0:
            raise ValueError("At least one gene must have a positive weight.")
        self._probabilities = raw / raw.sum()

    def _literal(self, rng: np.random.Generator) -> PushLiteral:
        if self.uses_floats and rng.random() < 0.5:
            if self.float_constants and rng.random() < 0.5:
                return PushLiteral.from_float(
                    self.float_constants[rng.integers(len(self.float_constants))]
                )
            low, high = self.float_range
            return PushLiteral.from_float(rng.uniform(low, high))
        low, high = self.int_range
        return PushLiteral.from_int(int(rng.integers(low, high, endpoint=True)))

    def generate(self, rng: np.random.Generator) -> Any:
        """Draw one gene."""
        r = rng.random()
        if r < self.close_probability:
            return CLOSE
        if r < self.close_probability + self.literal_probability:
            return self._literal(rng)
        return self.choices[rng.choice(len(self.choices), p=self._probabilities)]

    def make_random(self, length: int, rng: np.random.Generator) -> Plushy:
        return Plushy(tuple(self.generate(rng) for _ in range(length)))

    def genome_factory(self, length: int) -> Callable[[np.random.Generator], Plushy]:
        """Return a `rng -> Plushy` factory for population generation."""
        return lambda rng: self.make_random(length, rng)


def int_inputs(*names: str) -> List[PushInput]:
    return [PushInput(name, StackType.INTEGER) for name in names]


__all__ = ["Marker", "CLOSE", "Plushy", "GeneGenerator", "int_inputs"]
