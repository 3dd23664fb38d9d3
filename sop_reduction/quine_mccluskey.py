"""
Quine-McCluskey style implicant expansion and greedy prime filtering.

Implicants are held as a (value, dont_cares) pair of integers:
- dont_cares: which bit positions are free (1 = don't care)
- value: the required bit values for positions that are not free

For 3 variables (A, B, C):
- Bit 2 = A (MSB)
- Bit 1 = B
- Bit 0 = C (LSB)
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from .truth_tables import TriLogic

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Implicant:
    """
    A product term (cube) of the Boolean input space.

    An implicant covers minterm ``m`` exactly when
    ``(m | dont_cares) == (value | dont_cares)``.
    """

    value: int       # Required values for bits that are not free
    dont_cares: int  # Which bits are free (1 = don't care)

    def num_literals(self, n_vars: int) -> int:
        """Count the fixed variables (literals) of this implicant."""
        full_mask = (1 << n_vars) - 1
        return bin(full_mask & ~self.dont_cares).count('1')

    def covers(self, minterm: int) -> bool:
        """Check if this implicant covers a given minterm."""
        return (minterm | self.dont_cares) == (self.value | self.dont_cares)

    def minterms(self) -> Iterator[int]:
        """Iterate every minterm covered by this implicant."""
        return iter_assignments(self.value, self.dont_cares)

    def to_expr_str(self, n_vars: int, var_names: Sequence[str] = None) -> str:
        """Convert to a Boolean expression string (product term)."""
        if var_names is None:
            var_names = [chr(ord('A') + i) for i in range(n_vars)]

        literals = []
        for i in range(n_vars):
            bit = 1 << (n_vars - 1 - i)
            if not self.dont_cares & bit:
                if self.value & bit:
                    literals.append(var_names[i])
                else:
                    literals.append(f"{var_names[i]}'")

        return "".join(literals) if literals else "1"

    def __repr__(self):
        return f"Implicant(value={self.value:#b}, dont_cares={self.dont_cares:#b})"


def iter_assignments(value: int, dont_cares: int) -> Iterator[int]:
    """
    Walk every concrete minterm consistent with a cube.

    Starts at the representative with all free bits cleared and advances
    like a binary counter restricted to the free bits, lowest bit first.
    The walk ends once the carry runs past the highest free bit.

    Args:
        value: Cube value (bits under dont_cares are ignored)
        dont_cares: Mask of free bits to enumerate

    Yields:
        Minterm indices, 2 ** popcount(free bits) of them
    """
    free_bits = []
    remaining = dont_cares
    while remaining:
        low = remaining & -remaining
        free_bits.append(low)
        remaining ^= low

    current = value & ~dont_cares
    while True:
        yield current
        for bit in free_bits:
            if current & bit:
                current &= ~bit  # carry into the next free bit
            else:
                current |= bit
                break
        else:
            return


def expand_implicants(truth_table: Sequence[int], n_vars: int) -> list[Implicant]:
    """
    Expand every unresolved true minterm into a maximal implicant.

    Minterms are visited in ascending order. Each one seeds a cube that
    tries to free variables from bit 0 upwards; a bit is freed only when
    no minterm of the widened cube is FALSE. Minterms covered by a finished
    cube are marked resolved and never seed another cube.

    Args:
        truth_table: 2 ** n_vars tri-state outputs, indexed by minterm
        n_vars: Number of input variables

    Returns:
        Implicants in discovery order
    """
    size = 1 << n_vars
    resolved = bytearray(size)
    implicants = []

    for minterm in range(size):
        if truth_table[minterm] != TriLogic.TRUE or resolved[minterm]:
            continue

        value = minterm
        dont_cares = 0

        for bit_index in range(n_vars):
            test_bit = 1 << bit_index
            value = (value ^ test_bit) & ~dont_cares

            blocked = any(
                truth_table[m] == TriLogic.FALSE
                for m in iter_assignments(value, dont_cares)
            )

            if blocked:
                value ^= test_bit
            else:
                dont_cares |= test_bit

        value &= ~dont_cares

        for m in iter_assignments(value, dont_cares):
            resolved[m] = 1

        implicants.append(Implicant(value=value, dont_cares=dont_cares))

    log.debug("expanded %d implicants from %d minterms", len(implicants), size)
    return implicants


@dataclass(frozen=True)
class FilterStats:
    """Tally of the decisions made by one filter pass."""

    kept: int = 0
    removed: int = 0


def filter_prime_implicants(
    implicants: Sequence[Implicant],
    n_vars: int
) -> tuple[list[Implicant], FilterStats]:
    """
    Drop implicants whose minterms are all covered by other implicants.

    A single greedy pass in the given order. An implicant that is the only
    cover of some minterm is kept. Otherwise it is dropped and its minterms'
    reference counts are decremented at once, so implicants later in the
    pass see the drop. The result depends on the input order and is not
    guaranteed to be a minimum cover.

    Returns:
        Tuple of (kept implicants in their original order, stats)
    """
    ref_counts = [0] * (1 << n_vars)

    for impl in implicants:
        for m in impl.minterms():
            ref_counts[m] += 1

    kept = []
    removed = 0

    for impl in implicants:
        if any(ref_counts[m] == 1 for m in impl.minterms()):
            kept.append(impl)
            continue

        removed += 1
        for m in impl.minterms():
            ref_counts[m] -= 1

    stats = FilterStats(kept=len(kept), removed=removed)
    log.debug("filter kept %d implicants, removed %d", stats.kept, stats.removed)
    return kept, stats


def print_implicants(
    implicants: Sequence[Implicant],
    n_vars: int,
    var_names: Sequence[str] = None
):
    """Debug helper to print implicants."""
    print(f"Implicants ({len(implicants)}):")
    for impl in implicants:
        print(f"  {impl.to_expr_str(n_vars, var_names):12} ({impl.num_literals(n_vars)} lit)")
