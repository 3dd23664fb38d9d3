"""
Truth tables for single-output Boolean functions.

Inputs: n bits, variable 0 is the MSB of the minterm index.
For 3 variables (A, B, C):

             A  B  C | Output
             0  0  0 | table[0]
             0  0  1 | table[1]
             ...
             1  1  1 | table[7]

Each entry is FALSE (0), TRUE (1) or DONT_CARE (2).
In string form: 1 = ON, 0 = OFF, - = don't care
"""

from enum import IntEnum
from typing import Iterable, Sequence

from .errors import InvalidArgumentError, ReductionMemoryError, check_num_vars


class TriLogic(IntEnum):
    """Output value of one truth-table row."""

    FALSE = 0
    TRUE = 1
    DONT_CARE = 2


# Characters accepted for each value when parsing a table string
_CHAR_VALUES = {
    '0': TriLogic.FALSE,
    '1': TriLogic.TRUE,
    '-': TriLogic.DONT_CARE,
    'x': TriLogic.DONT_CARE,
    'X': TriLogic.DONT_CARE,
    '?': TriLogic.DONT_CARE,
}

_VALUE_CHARS = {TriLogic.FALSE: '0', TriLogic.TRUE: '1', TriLogic.DONT_CARE: '-'}


def parse_truth_table(text: str) -> list[TriLogic]:
    """
    Parse a table string such as ``"0001110 1"`` or ``"1011011111------"``.

    Whitespace, commas and underscores are ignored so long tables can be
    grouped for readability.
    """
    table = []
    for ch in text:
        if ch.isspace() or ch in ',_':
            continue
        if ch not in _CHAR_VALUES:
            raise InvalidArgumentError(f"Invalid truth table character: {ch!r}")
        table.append(_CHAR_VALUES[ch])

    if not table:
        raise InvalidArgumentError("Truth table is empty")
    return table


def num_vars_for(table: Sequence[int]) -> int:
    """Infer the variable count from a table whose length is a power of two."""
    size = len(table)
    if size < 2 or size & (size - 1):
        raise InvalidArgumentError(
            f"Truth table length {size} is not a power of two >= 2"
        )
    return size.bit_length() - 1


def truth_table_from_minterms(
    on_set: Iterable[int],
    dc_set: Iterable[int] = None,
    n_vars: int = 4
) -> list[TriLogic]:
    """
    Build a truth table from ON-set and don't-care minterms.

    Args:
        on_set: Minterms where the function is 1
        dc_set: Minterms whose output is unconstrained
        n_vars: Number of input variables

    Returns:
        List of 2 ** n_vars TriLogic values, FALSE everywhere else
    """
    check_num_vars(n_vars)
    size = 1 << n_vars

    on_set = set(on_set)
    dc_set = set(dc_set or ())
    overlap = on_set & dc_set
    if overlap:
        raise InvalidArgumentError(
            f"Minterms {sorted(overlap)} are in both the ON-set and don't-care set"
        )

    try:
        table = [TriLogic.FALSE] * size
    except (MemoryError, OverflowError) as e:
        raise ReductionMemoryError(
            f"Cannot allocate a truth table for {n_vars} variables"
        ) from e

    for value, minterms in ((TriLogic.TRUE, on_set), (TriLogic.DONT_CARE, dc_set)):
        for m in sorted(minterms):
            if not 0 <= m < size:
                raise InvalidArgumentError(
                    f"Minterm {m} out of range for {n_vars} variables"
                )
            table[m] = value

    return table


def minterm_to_bits(minterm: int, n_vars: int) -> tuple[int, ...]:
    """Convert a minterm index to its bits, variable 0 (MSB) first."""
    return tuple((minterm >> (n_vars - 1 - i)) & 1 for i in range(n_vars))


def bits_to_minterm(bits: Sequence[int]) -> int:
    """Convert bits (variable 0 first) to a minterm index."""
    minterm = 0
    for bit in bits:
        minterm = (minterm << 1) | (bit & 1)
    return minterm


def format_truth_table(table: Sequence[int]) -> str:
    """Render a table in the compact string form accepted by parse_truth_table."""
    return "".join(_VALUE_CHARS[TriLogic(v)] for v in table)


def print_truth_table(table: Sequence[int], var_names: Sequence[str] = None):
    """Print the complete truth table."""
    n_vars = num_vars_for(table)
    if var_names is None:
        var_names = [chr(ord('A') + i) for i in range(n_vars)]

    width = max(5, len(str(len(table) - 1)))
    header = " ".join(f"{name:>2}" for name in var_names)
    print(f"{'Row':>{width}} | {header} | F")
    print("-" * (width + len(header) + 7))

    for i, value in enumerate(table):
        bits = " ".join(f"{b:>2}" for b in minterm_to_bits(i, n_vars))
        print(f"{i:>{width}} | {bits} | {_VALUE_CHARS[TriLogic(value)]}")
