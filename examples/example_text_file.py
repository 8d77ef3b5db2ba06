"""
Example: Compiling and solving an LP from a text file

Usage:
    python example_text_file.py [path_to_lp_file]
"""

import sys
from pathlib import Path

import lpsyntax


def main():
    if len(sys.argv) > 1:
        lp_file = Path(sys.argv[1])
    else:
        lp_file = Path(__file__).parent / "production.lp"

    if not lp_file.exists():
        print(f"Error: LP file not found: {lp_file}")
        print()
        print("Usage:")
        print(f"  python {sys.argv[0]} <path_to_lp_file>")
        return 1

    print(f"LP file: {lp_file.absolute()}")
    print()

    problem = lpsyntax.load_problem(lp_file)
    model = lpsyntax.compile_problem(problem)
    print(f"Model compiled: {model.m} rows, {model.n} columns")

    param = lpsyntax.Parameters()
    param.time_limit = 10.0
    result = lpsyntax.solve(model, param)

    print()
    print(result)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except lpsyntax.LPSyntaxError as e:
        print(f"Error: {e}")
        sys.exit(1)
