"""Genetic programming over a multi-stack Push virtual machine."""

from .enums import (
    StackType,
    IntInstruction,
    BoolInstruction,
    FloatInstruction,
    ExecInstruction,
    RunModel,
    BINARY_INT_OPS,
    UNARY_INT_OPS,
    INT_OPS,
    BOOL_OPS,
    FLOAT_OPS,
    EXEC_OPS,
    BLOCK_ARITY,
)
from .values import INT_MIN, INT_MAX, ValueEnumerations
from .errors import (
    PushError,
    StateBuildError,
    GenomeError,
    StackUnderflow,
    StackOverflow,
    Overflow,
    UnknownInput,
    InputTypeMismatch,
    StepLimitExceeded,
    InstructionFailure,
)
from .state import PushStack, PushState, PushStateBuilder
from .instruction import PushLiteral, PushInput, Block, perform, describe_instruction
from .executor import PushExecutor
from .weights import GeneWeights
from .genome import CLOSE, Plushy, GeneGenerator, int_inputs
from .results import CaseResults, aggregate
from .individual import Individual, genome_view, clone_genome
from .population import Population, parallel_map
from .operator import (
    Operator,
    Then,
    ThenMap,
    ApplyTwice,
    Identity,
    FnOperator,
    GenomeExtractor,
    GenomeScorer,
)
from .selector import Selector, Select, Best, RandomSelector, Tournament, Lexicase
from .variation import (
    Recombinator,
    UniformXo,
    TwoPointXo,
    Recombine,
    Mutator,
    WithRate,
    WithOneOverLength,
    GeneReplacement,
    Mutate,
)
from .child_maker import ChildMaker, XoMutate, TwoPointXoMutate, UniformXoMutate
from .config import RunConfig
from .evaluator import Case, ProgramEvaluator
from .evolver import Generation, Evolver
from .demos import example_hiff, example_median

__all__ = [
    "StackType",
    "IntInstruction",
    "BoolInstruction",
    "FloatInstruction",
    "ExecInstruction",
    "RunModel",
    "BINARY_INT_OPS",
    "UNARY_INT_OPS",
    "INT_OPS",
    "BOOL_OPS",
    "FLOAT_OPS",
    "EXEC_OPS",
    "BLOCK_ARITY",
    "INT_MIN",
    "INT_MAX",
    "ValueEnumerations",
    "PushError",
    "StateBuildError",
    "GenomeError",
    "StackUnderflow",
    "StackOverflow",
    "Overflow",
    "UnknownInput",
    "InputTypeMismatch",
    "StepLimitExceeded",
    "InstructionFailure",
    "PushStack",
    "PushState",
    "PushStateBuilder",
    "PushLiteral",
    "PushInput",
    "Block",
    "perform",
    "describe_instruction",
    "PushExecutor",
    "GeneWeights",
    "CLOSE",
    "Plushy",
    "GeneGenerator",
    "int_inputs",
    "CaseResults",
    "aggregate",
    "Individual",
    "genome_view",
    "clone_genome",
    "Population",
    "parallel_map",
    "Operator",
    "Then",
    "ThenMap",
    "ApplyTwice",
    "Identity",
    "FnOperator",
    "GenomeExtractor",
    "GenomeScorer",
    "Selector",
    "Select",
    "Best",
    "RandomSelector",
    "Tournament",
    "Lexicase",
    "Recombinator",
    "UniformXo",
    "TwoPointXo",
    "Recombine",
    "Mutator",
    "WithRate",
    "WithOneOverLength",
    "GeneReplacement",
    "Mutate",
    "ChildMaker",
    "XoMutate",
    "TwoPointXoMutate",
    "UniformXoMutate",
    "RunConfig",
    "Case",
    "ProgramEvaluator",
    "Generation",
    "Evolver",
    "example_hiff",
    "example_median",
]
