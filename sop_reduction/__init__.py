"""Truth-table reduction to sum-of-products equations (Quine-McCluskey style)."""

from .errors import (
    MAX_VARIABLES,
    ReductionError,
    TooFewVariablesError,
    TooManyVariablesError,
    InvalidArgumentError,
    ReductionMemoryError,
)
from .truth_tables import TriLogic, parse_truth_table, truth_table_from_minterms
from .quine_mccluskey import (
    Implicant,
    FilterStats,
    iter_assignments,
    expand_implicants,
    filter_prime_implicants,
)
from .reducer import SumOfProducts, TermCounters, reduce_logic, evaluate
from .export import render_equation, to_verilog, to_c_code, to_equations
from .verify import verify_sop, check_coverage, find_counterexample

__all__ = [
    "MAX_VARIABLES",
    "ReductionError",
    "TooFewVariablesError",
    "TooManyVariablesError",
    "InvalidArgumentError",
    "ReductionMemoryError",
    "TriLogic",
    "parse_truth_table",
    "truth_table_from_minterms",
    "Implicant",
    "FilterStats",
    "iter_assignments",
    "expand_implicants",
    "filter_prime_implicants",
    "SumOfProducts",
    "TermCounters",
    "reduce_logic",
    "evaluate",
    "render_equation",
    "to_verilog",
    "to_c_code",
    "to_equations",
    "verify_sop",
    "check_coverage",
    "find_counterexample",
]
__version__ = "0.1.0"
