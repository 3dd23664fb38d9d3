"""
Export reduced sum-of-products to equations, Verilog and C.
"""

from typing import TYPE_CHECKING, Sequence

from .errors import InvalidArgumentError, ReductionMemoryError
from .quine_mccluskey import Implicant

if TYPE_CHECKING:
    from .reducer import SumOfProducts


def default_var_names(n_vars: int) -> list[str]:
    """Single-letter names starting at 'A' for variable 0 (the MSB)."""
    return [chr(ord('A') + i) for i in range(n_vars)]


def _resolve_names(n_vars: int, var_names: Sequence[str] = None) -> Sequence[str]:
    if var_names is None:
        return default_var_names(n_vars)
    if len(var_names) < n_vars:
        raise InvalidArgumentError(
            f"Need {n_vars} variable names, got {len(var_names)}"
        )
    return var_names


def _is_tautology(sop: "SumOfProducts") -> bool:
    full_mask = (1 << sop.n_vars) - 1
    return (
        len(sop.implicants) == 1
        and sop.implicants[0].dont_cares & full_mask == full_mask
    )


def _literals(impl: Implicant, n_vars: int) -> list[tuple[int, bool]]:
    """List (variable index, polarity) for each fixed variable, MSB first."""
    literals = []
    for i in range(n_vars):
        bit = 1 << (n_vars - 1 - i)
        if not impl.dont_cares & bit:
            literals.append((i, bool(impl.value & bit)))
    return literals


def render_equation(sop: "SumOfProducts", var_names: Sequence[str] = None) -> str:
    """
    Render a sum-of-products as a Boolean equation string.

    Complemented variables carry a trailing ``'``, literals of one product
    are concatenated and products are joined with `` + ``. The constant
    functions render as ``"0"`` and ``"1"``.

    Args:
        sop: The reduced sum-of-products
        var_names: Name for each variable, variable 0 first

    Returns:
        Equation such as ``"AB' + BC"``
    """
    if not sop.implicants:
        return "0"
    if _is_tautology(sop):
        return "1"

    names = _resolve_names(sop.n_vars, var_names)

    try:
        terms = []
        for impl in sop.implicants:
            terms.append("".join(
                names[i] if positive else f"{names[i]}'"
                for i, positive in _literals(impl, sop.n_vars)
            ))
        return " + ".join(terms)
    except MemoryError as e:
        raise ReductionMemoryError("Out of memory rendering equation") from e


def impl_to_verilog(impl: Implicant, n_vars: int, var_names: Sequence[str]) -> str:
    """Convert an implicant to a Verilog expression."""
    terms = [
        var_names[i] if positive else f"~{var_names[i]}"
        for i, positive in _literals(impl, n_vars)
    ]

    if not terms:
        return "1'b1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_verilog(
    sop: "SumOfProducts",
    var_names: Sequence[str] = None,
    module_name: str = "sop"
) -> str:
    """
    Export a sum-of-products as a combinational Verilog module.

    Args:
        sop: The reduced sum-of-products
        var_names: Name for each variable, variable 0 first
        module_name: Name for the Verilog module

    Returns:
        Verilog source code as string
    """
    names = _resolve_names(sop.n_vars, var_names)
    msb = sop.n_vars - 1

    lines = []
    lines.append(f"// {render_equation(sop, names)}")
    lines.append(f"// {len(sop.implicants)} product terms")
    lines.append("")
    lines.append(f"module {module_name} (")
    lines.append(f"    input  wire [{msb}:0] in,")
    lines.append("    output wire       out")
    lines.append(");")
    lines.append("")
    lines.append("    // Input aliases")
    for i in range(sop.n_vars):
        lines.append(f"    wire {names[i]} = in[{msb - i}];")
    lines.append("")

    terms = [impl_to_verilog(impl, sop.n_vars, names) for impl in sop.implicants]
    expr = " | ".join(terms) if terms else "1'b0"
    lines.append(f"    assign out = {expr};")
    lines.append("")
    lines.append("endmodule")

    return "\n".join(lines)


def impl_to_c(impl: Implicant, n_vars: int, var_names: Sequence[str]) -> str:
    """Convert an implicant to a C expression."""
    terms = [
        var_names[i] if positive else f"n{var_names[i]}"
        for i, positive in _literals(impl, n_vars)
    ]

    if not terms:
        return "1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_c_code(
    sop: "SumOfProducts",
    var_names: Sequence[str] = None,
    func_name: str = "sop_eval"
) -> str:
    """
    Export a sum-of-products as a C function of the packed input bits.

    Args:
        sop: The reduced sum-of-products
        var_names: Name for each variable, variable 0 first
        func_name: Name for the C function

    Returns:
        C source code as string
    """
    names = _resolve_names(sop.n_vars, var_names)

    lines = []
    lines.append("/*")
    lines.append(f" * {render_equation(sop, names)}")
    lines.append(" */")
    lines.append("")
    lines.append("#include <stdint.h>")
    lines.append("")
    lines.append(f"uint8_t {func_name}(uint64_t in) {{")
    lines.append("    // Extract individual bits")
    for i in range(sop.n_vars):
        shift = sop.n_vars - 1 - i
        lines.append(f"    uint8_t {names[i]} = (in >> {shift}) & 1;")
    complements = ", ".join(f"n{name} = !{name}" for name in names[:sop.n_vars])
    lines.append(f"    uint8_t {complements};")
    lines.append("")

    terms = [impl_to_c(impl, sop.n_vars, names) for impl in sop.implicants]
    expr = " | ".join(terms) if terms else "0"
    lines.append(f"    return {expr};")
    lines.append("}")

    return "\n".join(lines)


def to_equations(
    sop: "SumOfProducts",
    var_names: Sequence[str] = None,
    output_name: str = "F"
) -> str:
    """
    Export a sum-of-products as a human-readable equation listing.

    Returns:
        The equation followed by one line per product term
    """
    names = _resolve_names(sop.n_vars, var_names)

    lines = []
    lines.append(f"{output_name} = {render_equation(sop, names)}")
    lines.append("")
    lines.append(f"Product terms: {len(sop.implicants)}")
    for impl in sop.implicants:
        lines.append(
            f"  {impl.to_expr_str(sop.n_vars, names):12} "
            f"({impl.num_literals(sop.n_vars)} lit)"
        )
    if sop.stats.removed:
        lines.append(f"Redundant terms removed: {sop.stats.removed}")

    return "\n".join(lines)
