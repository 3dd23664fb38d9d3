"""Exceptions raised by logic reduction."""

import sys

# A cube must fit one native machine word
MAX_VARIABLES = sys.maxsize.bit_length() + 1


class ReductionError(ValueError):
    """Base class for every error reported by the reducer."""


class TooFewVariablesError(ReductionError):
    """The variable count is below one."""


class TooManyVariablesError(ReductionError):
    """The variable count does not fit a native machine word."""


class InvalidArgumentError(ReductionError):
    """A truth table, name list or other argument is missing or malformed."""


class ReductionMemoryError(ReductionError, MemoryError):
    """Memory ran out while expanding, filtering or rendering."""


def check_num_vars(n_vars: int) -> int:
    """Validate a variable count, returning it unchanged."""
    if isinstance(n_vars, bool) or not isinstance(n_vars, int):
        raise InvalidArgumentError(f"Variable count must be an int, got {n_vars!r}")
    if n_vars < 1:
        raise TooFewVariablesError(f"Need at least 1 variable, got {n_vars}")
    if n_vars > MAX_VARIABLES:
        raise TooManyVariablesError(
            f"At most {MAX_VARIABLES} variables are supported, got {n_vars}"
        )
    return n_vars
