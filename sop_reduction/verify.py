"""
Verification of reduced sum-of-products against their truth tables.

Ensures a reduction reproduces every row of the table that is not a
don't-care, either by exhaustive evaluation or with a SAT solver.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from pysat.formula import CNF
from pysat.solvers import Solver

from .export import default_var_names
from .reducer import SumOfProducts, evaluate
from .truth_tables import TriLogic, bits_to_minterm, minterm_to_bits


@dataclass
class VerificationReport:
    """Outcome of checking every row of a truth table."""

    right: int = 0
    wrong: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.wrong == 0


def verify_sop(truth_table: Sequence[int], sop: SumOfProducts) -> VerificationReport:
    """
    Evaluate a sum-of-products on every input of its truth table.

    Don't-care rows are counted as right whatever the result.

    Args:
        truth_table: The table that was reduced
        sop: The reduction result

    Returns:
        VerificationReport with right/wrong counts and error messages
    """
    report = VerificationReport()

    for minterm, expected in enumerate(truth_table):
        if expected == TriLogic.DONT_CARE:
            report.right += 1
            continue

        actual = evaluate(sop, minterm)
        if actual == expected:
            report.right += 1
        else:
            report.wrong += 1
            report.errors.append(
                f"Minterm {minterm}: expected {TriLogic(expected).name}, "
                f"got {actual.name}"
            )

    return report


def check_coverage(truth_table: Sequence[int], sop: SumOfProducts) -> list[str]:
    """
    Check the implicants' coverage against the table.

    Every TRUE minterm must be covered by some implicant and no implicant
    may cover a FALSE minterm.

    Returns:
        List of violation messages, empty when the cover is valid
    """
    problems = []
    covered = set()

    for impl in sop.implicants:
        for m in impl.minterms():
            covered.add(m)
            if truth_table[m] == TriLogic.FALSE:
                problems.append(f"{impl!r} covers FALSE minterm {m}")

    for m, value in enumerate(truth_table):
        if value == TriLogic.TRUE and m not in covered:
            problems.append(f"TRUE minterm {m} is not covered")

    return problems


def _minterm_literals(minterm: int, n_vars: int) -> list[int]:
    """SAT literals fixing the input variables to a minterm."""
    return [
        i + 1 if bit else -(i + 1)
        for i, bit in enumerate(minterm_to_bits(minterm, n_vars))
    ]


def find_counterexample(
    truth_table: Sequence[int],
    sop: SumOfProducts
) -> Optional[int]:
    """
    Search for an input where the sum-of-products disagrees with the table.

    Encodes the circuit as SAT:
    - x[i]: input variable i (variable 0 = MSB of the minterm)
    - t[j]: product term j, t[j] <-> AND of its literals
    - out: OR of all product terms
    - each TRUE row forces out = 0 there, each FALSE row forces out = 1,
      each don't-care row is excluded

    Any model is therefore a mismatching input.

    Returns:
        A mismatching minterm, or None if the reduction is correct
    """
    n_vars = sop.n_vars
    cnf = CNF()

    # Variable mapping: x[i] = i + 1, t[j] = n_vars + j + 1, out last
    term_vars = [n_vars + j + 1 for j in range(len(sop.implicants))]
    out = n_vars + len(sop.implicants) + 1

    for t, impl in zip(term_vars, sop.implicants):
        lits = []
        for i in range(n_vars):
            bit = 1 << (n_vars - 1 - i)
            if not impl.dont_cares & bit:
                lits.append(i + 1 if impl.value & bit else -(i + 1))
        for lit in lits:
            cnf.append([-t, lit])
        cnf.append([t] + [-lit for lit in lits])

    cnf.append([-out] + term_vars)
    for t in term_vars:
        cnf.append([out, -t])

    for minterm, value in enumerate(truth_table):
        differs = [-lit for lit in _minterm_literals(minterm, n_vars)]
        if value == TriLogic.TRUE:
            cnf.append(differs + [-out])
        elif value == TriLogic.FALSE:
            cnf.append(differs + [out])
        else:
            cnf.append(differs)

    with Solver(bootstrap_with=cnf) as solver:
        if not solver.solve():
            return None
        model = set(solver.get_model())

    return bits_to_minterm([1 if (i + 1) in model else 0 for i in range(n_vars)])


def print_truth_table_comparison(
    truth_table: Sequence[int],
    sop: SumOfProducts,
    var_names: Sequence[str] = None
) -> bool:
    """Print truth table comparing expected vs actual outputs."""
    n_vars = sop.n_vars
    if var_names is None:
        var_names = default_var_names(n_vars)

    inputs = "".join(var_names[:n_vars])
    width = max(len(inputs), n_vars)

    print("Truth Table Verification")
    print("=" * 50)
    print(f"{'Row':>5} | {inputs:>{width}} | Expected | Actual | Match")
    print("-" * 50)

    all_match = True

    for minterm, expected in enumerate(truth_table):
        bits = "".join(str(b) for b in minterm_to_bits(minterm, n_vars))
        actual = evaluate(sop, minterm)

        if expected == TriLogic.DONT_CARE:
            exp = "-"
            match_str = "."
        else:
            exp = str(int(expected))
            match_str = "." if actual == expected else "X"
            if actual != expected:
                all_match = False

        print(f"{minterm:>5} | {bits:>{width}} | {exp:>8} | {int(actual):>6} | {match_str}")

    print("-" * 50)
    print(f"All correct: {all_match}")
    return all_match
