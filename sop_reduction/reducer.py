"""
Single-output logic reduction to a near-minimal sum-of-products.

The reduction runs in two phases:
1. Expansion of every unresolved true minterm into a maximal implicant
2. One greedy pass dropping implicants made redundant by the others

Example, with variables A (MSB), B and C:

             A  B  C | F
             0  0  0 | 0
             0  0  1 | 0
             0  1  0 | 0
             0  1  1 | 1
             1  0  0 | 1
             1  0  1 | 1
             1  1  0 | 0
             1  1  1 | 1

reduces to ``AB' + BC``, held as two implicants:

    Implicant(value=0b100, dont_cares=0b001)   # A must be 1, B must be 0
    Implicant(value=0b011, dont_cares=0b100)   # B and C must be 1
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Union

from .errors import (
    InvalidArgumentError,
    ReductionMemoryError,
    check_num_vars,
)
from .export import render_equation
from .quine_mccluskey import (
    FilterStats,
    Implicant,
    expand_implicants,
    filter_prime_implicants,
)
from .truth_tables import TriLogic, parse_truth_table

log = logging.getLogger(__name__)

_VALID_VALUES = frozenset(TriLogic)


@dataclass(frozen=True)
class SumOfProducts:
    """Result of logic reduction."""

    n_vars: int
    implicants: tuple[Implicant, ...]
    equation: str = ""  # Rendered with default variable names
    stats: FilterStats = field(default_factory=FilterStats, compare=False)

    def __len__(self) -> int:
        return len(self.implicants)

    def __call__(self, input_bits: int) -> TriLogic:
        return evaluate(self, input_bits)

    def __str__(self) -> str:
        return self.equation or render_equation(self)


@dataclass
class TermCounters:
    """
    Running totals of filter decisions across several reductions.

    Owned by the caller and passed to ``reduce_logic``; nothing is shared
    between calls that do not pass the same instance.
    """

    kept: int = 0
    removed: int = 0

    def add(self, stats: FilterStats):
        self.kept += stats.kept
        self.removed += stats.removed

    def reset(self):
        self.kept = 0
        self.removed = 0


def _validate_truth_table(truth_table, n_vars: int) -> Sequence[int]:
    if truth_table is None:
        raise InvalidArgumentError("Truth table is required")

    if isinstance(truth_table, str):
        truth_table = parse_truth_table(truth_table)

    size = 1 << n_vars
    if len(truth_table) != size:
        raise InvalidArgumentError(
            f"Truth table has {len(truth_table)} entries, "
            f"expected {size} for {n_vars} variables"
        )

    for i, value in enumerate(truth_table):
        if value not in _VALID_VALUES:
            raise InvalidArgumentError(
                f"Truth table entry {i} is {value!r}, expected 0, 1 or 2"
            )

    return truth_table


def reduce_logic(
    truth_table: Union[Sequence[int], str],
    n_vars: int,
    counters: Optional[TermCounters] = None
) -> SumOfProducts:
    """
    Reduce a truth table to a near-minimal sum-of-products.

    Args:
        truth_table: 2 ** n_vars outputs (TriLogic or 0/1/2), or a table
            string accepted by ``parse_truth_table``
        n_vars: Number of input variables
        counters: Optional accumulator for filter decisions

    Returns:
        SumOfProducts holding the implicants and their default equation

    Raises:
        TooFewVariablesError, TooManyVariablesError: n_vars out of range
        InvalidArgumentError: missing or malformed truth table
        ReductionMemoryError: memory ran out during the reduction
    """
    check_num_vars(n_vars)
    truth_table = _validate_truth_table(truth_table, n_vars)

    try:
        expanded = expand_implicants(truth_table, n_vars)
        kept, stats = filter_prime_implicants(expanded, n_vars)
        sop = SumOfProducts(n_vars=n_vars, implicants=tuple(kept), stats=stats)
        sop = replace(sop, equation=render_equation(sop))
    except MemoryError as e:
        raise ReductionMemoryError(
            f"Out of memory reducing {n_vars}-variable truth table"
        ) from e

    if counters is not None:
        counters.add(stats)

    log.debug("reduced %d variables to %d terms: %s", n_vars, len(sop), sop.equation)
    return sop


def evaluate(sop: SumOfProducts, input_bits: int) -> TriLogic:
    """
    Evaluate a sum-of-products on one input assignment.

    Bits of ``input_bits`` above the variable count are ignored. Returns
    TRUE on the first implicant covering the input, FALSE if none does.
    """
    masked = input_bits & ((1 << sop.n_vars) - 1)
    for impl in sop.implicants:
        if impl.covers(masked):
            return TriLogic.TRUE
    return TriLogic.FALSE
