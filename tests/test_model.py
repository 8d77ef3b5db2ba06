"""
Tests for the compiled model record and its array export.
"""

import numpy as np
import pytest
from scipy import sparse

from lpsyntax.bounds import BoundKind, RowOrColumnSpec
from lpsyntax.compiler import compile_model
from lpsyntax.model import Direction, LinearProgramModel, MatrixEntry
from lpsyntax.modeling import Sense, between, variables


x, y, z = variables('x y z')


class TestDirection:

    def test_codes(self):
        assert Direction.MIN == 1
        assert Direction.MAX == 2

    @pytest.mark.parametrize("sense, direction", [
        ('minimize', Direction.MIN),
        ('max', Direction.MAX),
        (Sense.MAXIMIZE, Direction.MAX),
    ])
    def test_from_sense(self, sense, direction):
        assert Direction.from_sense(sense) is direction


class TestModelRecord:

    def test_objective_length_must_match_columns(self):
        columns = [RowOrColumnSpec('x', BoundKind.FREE, 0, 0)]
        with pytest.raises(ValueError):
            LinearProgramModel([], columns, [], [1, 2], Direction.MIN)

    def test_sizes(self):
        model = compile_model('min', x + y + z, [x + y <= 1, y + z >= 2, x == 0])
        assert (model.m, model.n, model.nnz) == (3, 3, 5)

    def test_to_dict(self):
        model = compile_model('max', 4*x + 7*y, [x + y <= 10], [x >= 0])
        assert model.to_dict() == {
            'direction': 'MAX',
            'rows': [{'name': 'r1', 'kind': 'UPPER', 'lower': 0, 'upper': 10}],
            'columns': [
                {'name': 'x', 'kind': 'LOWER', 'lower': 0, 'upper': 0},
                {'name': 'y', 'kind': 'FREE', 'lower': 0, 'upper': 0},
            ],
            'entries': [(1, 1, 1), (1, 2, 1)],
            'objective': [4, 7],
        }

    def test_repr(self):
        model = compile_model('max', x + y, [x + y <= 1])
        assert repr(model) == "<LinearProgramModel MAX m=1 n=2 nnz=2>"


class TestToArrays:

    def setup_method(self):
        self.model = compile_model(
            'max', 4*x + 7*y + z,
            constraints=[
                x + y <= 10,
                between(1, x - z, 6),
                y >= 2,
                x + y + z == 5,
            ],
            bounds=[x >= 0, between(0, y, 9)],
        )

    def test_matrix(self):
        A, AL, AU, l, u, c = self.model.to_arrays()
        assert isinstance(A, sparse.csr_matrix)
        assert A.shape == (4, 3)
        np.testing.assert_array_equal(A.toarray(), [
            [1, 1, 0],
            [1, 0, -1],
            [0, 1, 0],
            [1, 1, 1],
        ])

    def test_row_bounds(self):
        _, AL, AU, _, _, _ = self.model.to_arrays()
        np.testing.assert_array_equal(AL, [-np.inf, 1, 2, 5])
        np.testing.assert_array_equal(AU, [10, 6, np.inf, 5])

    def test_column_bounds_and_objective(self):
        _, _, _, l, u, c = self.model.to_arrays()
        np.testing.assert_array_equal(l, [0, 0, -np.inf])
        np.testing.assert_array_equal(u, [np.inf, 9, np.inf])
        np.testing.assert_array_equal(c, [4, 7, 1])

    def test_empty_model(self):
        A, AL, AU, l, u, c = compile_model('min', x).to_arrays()
        assert A.shape == (0, 1)
        assert AL.shape == AU.shape == (0,)
        np.testing.assert_array_equal(l, [-np.inf])
        np.testing.assert_array_equal(u, [np.inf])

    def test_entries_are_one_based(self):
        model = LinearProgramModel(
            [RowOrColumnSpec('r1', BoundKind.UPPER, 0, 1)],
            [RowOrColumnSpec('a', BoundKind.FREE, 0, 0), RowOrColumnSpec('b', BoundKind.FREE, 0, 0)],
            [MatrixEntry(1, 2, 5.0)],
            [0, 1],
            Direction.MIN,
        )
        A = model.to_arrays()[0]
        assert A[0, 1] == 5.0
        assert A[0, 0] == 0.0
