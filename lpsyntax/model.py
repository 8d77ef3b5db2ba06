"""
Compiled linear program model
"""
import numpy as np
from scipy import sparse
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Tuple

from .bounds import BoundKind, RowOrColumnSpec
from .modeling import Sense


class Direction(IntEnum):
    """Optimization direction in solver vocabulary"""
    MIN = 1
    MAX = 2

    @classmethod
    def from_sense(cls, sense) -> 'Direction':
        """Translate a surface ``minimize``/``maximize`` into a direction"""
        if Sense.parse(sense) is Sense.MAXIMIZE:
            return cls.MAX
        return cls.MIN


class MatrixEntry(NamedTuple):
    """One non-zero of the constraint matrix, with 1-based indices"""
    row: int
    column: int
    coefficient: float


class LinearProgramModel:
    """
    Matrix-oriented linear program, ready to hand to a solver.

    The model represents an LP of the form:
        minimize or maximize    c'*x
        subject to              row bounds on A*x
                                column bounds on x

    where each row and column carries a ``BoundKind`` telling which of its
    ``lower``/``upper`` values are meaningful.

    Attributes
    ----------
    rows : tuple of RowOrColumnSpec
        One spec per constraint, in input order
    columns : tuple of RowOrColumnSpec
        One spec per variable, in column order
    entries : tuple of MatrixEntry
        Non-zero coefficients of A, 1-based
    objective : tuple of float
        Objective coefficient per column
    direction : Direction
        ``Direction.MIN`` or ``Direction.MAX``

    Examples
    --------
    >>> from lpsyntax import compile_model, variables
    >>> x, y = variables('x y')
    >>> model = compile_model('maximize', 4*x + 7*y, [x + y <= 10], [x >= 0])
    >>> A, AL, AU, l, u, c = model.to_arrays()
    """

    def __init__(self, rows, columns, entries, objective, direction: Direction):
        self.rows: Tuple[RowOrColumnSpec, ...] = tuple(rows)
        self.columns: Tuple[RowOrColumnSpec, ...] = tuple(columns)
        self.entries: Tuple[MatrixEntry, ...] = tuple(entries)
        self.objective: Tuple[float, ...] = tuple(objective)
        self.direction = Direction(direction)

        if len(self.objective) != len(self.columns):
            raise ValueError(
                f"objective must have length {len(self.columns)} (number of columns)"
            )

    @property
    def m(self) -> int:
        """Number of rows"""
        return len(self.rows)

    @property
    def n(self) -> int:
        """Number of columns"""
        return len(self.columns)

    @property
    def nnz(self) -> int:
        """Number of materialized matrix entries"""
        return len(self.entries)

    @property
    def row_names(self) -> Tuple[str, ...]:
        return tuple(row.name for row in self.rows)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    def to_arrays(self) -> Tuple[sparse.csr_matrix, np.ndarray, np.ndarray,
                                 np.ndarray, np.ndarray, np.ndarray]:
        """
        Convert the model to dense bound arrays and a sparse matrix.

        Standard form:
            AL <= A*x <= AU
            l <= x <= u

        Sides a bound kind leaves open become -inf/+inf.

        Returns
        -------
        A : scipy.sparse.csr_matrix
            Constraint matrix (m x n)
        AL : np.ndarray
            Lower bounds for constraints (length m)
        AU : np.ndarray
            Upper bounds for constraints (length m)
        l : np.ndarray
            Lower bounds for variables (length n)
        u : np.ndarray
            Upper bounds for variables (length n)
        c : np.ndarray
            Objective coefficients (length n), in the model's own direction
        """
        m, n = self.m, self.n

        if self.entries:
            rows = [entry.row - 1 for entry in self.entries]
            cols = [entry.column - 1 for entry in self.entries]
            data = [float(entry.coefficient) for entry in self.entries]
            A = sparse.coo_matrix((data, (rows, cols)), shape=(m, n)).tocsr()
        else:
            A = sparse.csr_matrix((m, n))

        AL, AU = _bound_arrays(self.rows)
        l, u = _bound_arrays(self.columns)
        c = np.array(self.objective, dtype=np.float64)

        return A, AL, AU, l, u, c

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a dictionary of plain Python values"""
        def spec_dict(spec):
            return {
                'name': spec.name,
                'kind': spec.kind.name,
                'lower': spec.lower,
                'upper': spec.upper,
            }

        return {
            'direction': self.direction.name,
            'rows': [spec_dict(row) for row in self.rows],
            'columns': [spec_dict(column) for column in self.columns],
            'entries': [tuple(entry) for entry in self.entries],
            'objective': list(self.objective),
        }

    def __repr__(self):
        return (f"<LinearProgramModel {self.direction.name} "
                f"m={self.m} n={self.n} nnz={self.nnz}>")


def _bound_arrays(specs) -> Tuple[np.ndarray, np.ndarray]:
    lower = np.full(len(specs), -np.inf)
    upper = np.full(len(specs), np.inf)
    for i, spec in enumerate(specs):
        if spec.kind in (BoundKind.LOWER, BoundKind.DOUBLE, BoundKind.FIXED):
            lower[i] = spec.lower
        if spec.kind in (BoundKind.UPPER, BoundKind.DOUBLE, BoundKind.FIXED):
            upper[i] = spec.upper
    return lower, upper
