"""
Example: Compiling an LP written with Python expressions

Problem:
    maximize    4*x + 7*y
    subject to   x +   y <= 10
                3*x + 8*y <= 60
                 x >= 0, 0 <= y <= 9
"""

import lpsyntax
from lpsyntax import between, compile_model, variables


def main():
    print()
    print("=" * 70)
    print("lpsyntax Example: LP from Python expressions")
    print("=" * 70)
    print()

    x, y = variables('x y')

    # Step 1: Compile
    model = compile_model(
        'maximize', 4*x + 7*y,
        constraints=[
            x + y <= 10,
            3*x + 8*y <= 60,
        ],
        bounds=[
            x >= 0,
            between(0, y, 9),
        ],
    )
    print(f"Model compiled: {model.m} rows, {model.n} columns, {model.nnz} non-zeros")
    print()
    print("Rows:")
    for row in model.rows:
        print(f"  {row.name:<6} {row.kind.name:<7} lower={row.lower} upper={row.upper}")
    print("Columns:")
    for column in model.columns:
        print(f"  {column.name:<6} {column.kind.name:<7} lower={column.lower} upper={column.upper}")
    print("Entries:")
    for entry in model.entries:
        print(f"  A[{entry.row},{entry.column}] = {entry.coefficient}")
    print()

    # Step 2: Solve
    result = lpsyntax.solve(model)

    print("=" * 70)
    print("Solution Summary")
    print("=" * 70)
    print(result)
    print()


if __name__ == "__main__":
    main()
