"""Command-line interface for sum-of-products logic reduction."""

import argparse
import logging
import sys

from .errors import ReductionError
from .export import render_equation, to_c_code, to_equations, to_verilog
from .quine_mccluskey import print_implicants
from .reducer import reduce_logic
from .truth_tables import (
    num_vars_for,
    parse_truth_table,
    print_truth_table,
    truth_table_from_minterms,
)
from .verify import find_counterexample, print_truth_table_comparison, verify_sop


def _int_list(text: str) -> list[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}")


def _build_table(args, parser):
    if args.table is not None:
        if args.minterms is not None:
            parser.error("give either TABLE or --minterms, not both")
        table = parse_truth_table(args.table)
        return table, num_vars_for(table)

    if args.minterms is None:
        parser.error("a truth table or --minterms is required")
    if args.vars is None:
        parser.error("--minterms needs --vars")

    table = truth_table_from_minterms(args.minterms, args.dont_cares, args.vars)
    return table, args.vars


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Reduce a truth table to a sum-of-products equation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sop-reduce 00011101                    Reduce a 3-variable table
  sop-reduce 1111100111------            Use '-' for don't-care rows
  sop-reduce --minterms 3,4,5,7 --vars 3 Give the ON-set instead
  sop-reduce 00011101 --names X,Y,Z      Name the variables (MSB first)
  sop-reduce 00011101 --format verilog   Output as Verilog module
  sop-reduce 00011101 --verify           Check the result row by row
        """,
    )

    parser.add_argument(
        "table",
        nargs="?",
        help="Truth table as a string of 0, 1 and - (row 0 first)",
    )
    parser.add_argument(
        "--minterms", "-m",
        type=_int_list,
        help="Comma-separated ON-set minterms",
    )
    parser.add_argument(
        "--dont-cares", "-d",
        type=_int_list,
        default=None,
        help="Comma-separated don't-care minterms (with --minterms)",
    )
    parser.add_argument(
        "--vars", "-n",
        type=int,
        help="Number of input variables (with --minterms)",
    )
    parser.add_argument(
        "--names",
        type=lambda s: [name.strip() for name in s.split(",")],
        help="Comma-separated variable names, variable 0 (MSB) first",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "equation", "verilog", "c"],
        default="equation",
        help="Output format (default: equation)",
    )
    parser.add_argument(
        "--truth-table",
        action="store_true",
        help="Print the truth table before reducing",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify the result against the truth table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        table, n_vars = _build_table(args, parser)

        if args.truth_table:
            print_truth_table(table, args.names)
            print()

        sop = reduce_logic(table, n_vars)

        if args.format == "verilog":
            print(to_verilog(sop, args.names))
        elif args.format == "c":
            print(to_c_code(sop, args.names))
        elif args.format == "text":
            print(to_equations(sop, args.names))
        else:
            print(render_equation(sop, args.names))

        if args.verbose:
            print_implicants(sop.implicants, n_vars, args.names)

        if args.verify:
            report = verify_sop(table, sop)
            counterexample = find_counterexample(table, sop)
            if args.verbose:
                print()
                print_truth_table_comparison(table, sop, args.names)
            if not report.ok or counterexample is not None:
                for err in report.errors:
                    print(f"  {err}", file=sys.stderr)
                print("Verification FAILED", file=sys.stderr)
                return 1
            print(f"Verification PASSED: {report.right} rows correct")

        return 0

    except ReductionError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
