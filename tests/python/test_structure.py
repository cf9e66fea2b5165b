"""
Tests for construction, derived views and conversion.
"""

from types import SimpleNamespace

import pytest
import numpy as np

import linear
from linear import ArgumentError, BoundsError, DimensionError, OperandTypeError

from conftest import assert_array_equal


class TestIntrospection:
    """Test type_of and size."""

    def test_type_of(self, row_matrix):
        """Views are named, everything else is None."""
        assert linear.type_of(linear.vector(1)) == "vector"
        assert linear.type_of(row_matrix) == "matrix"
        assert linear.type_of(1.0) is None
        assert linear.type_of([1.0]) is None

    def test_size(self, row_matrix, col_matrix):
        """Length of a vector, shape and order of a matrix."""
        assert linear.size(linear.vector(4)) == 4
        assert linear.size(row_matrix) == (2, 3, "row")
        assert linear.size(col_matrix) == (2, 3, "col")

    def test_size_non_view(self):
        """size needs a view."""
        with pytest.raises(OperandTypeError):
            linear.size(3.0)


class TestDerivedViews:
    """Test tvector and sub."""

    def test_tvector_row_major(self, row_matrix):
        """tvector of a row-major matrix is a column."""
        col = linear.tvector(row_matrix, 1)
        assert list(col) == [2.0, 5.0]
        assert col.inc == 3
        col[0] = -2.0
        assert row_matrix[0, 1] == -2.0

    def test_tvector_col_major(self, col_matrix):
        """tvector of a col-major matrix is a row."""
        row = linear.tvector(col_matrix, 1)
        assert list(row) == [4.0, 5.0, 6.0]
        assert list(linear.tvector(col_matrix, -2)) == [1.0, 2.0, 3.0]

    def test_tvector_bounds(self, row_matrix):
        """The index must address a column (row-major)."""
        with pytest.raises(BoundsError):
            linear.tvector(row_matrix, 3)

    def test_sub_vector(self):
        """Vector sub-ranges alias the parent."""
        x = linear.tolinear([1, 2, 3, 4, 5])
        y = linear.sub(x, 1, 3)
        assert list(y) == [2.0, 3.0]
        assert list(linear.sub(x, 3)) == [4.0, 5.0]
        assert list(linear.sub(x)) == list(x)
        y[0] = 20.0
        assert x[1] == 20.0

    def test_sub_strided_vector(self):
        """sub of a strided vector keeps the stride."""
        x = linear.tolinear([0, 1, 2, 3, 4, 5])
        y = linear.sub(x[::2], 1)
        assert list(y) == [2.0, 4.0]
        assert y.inc == 2

    def test_sub_matrix(self):
        """Matrix sub-views keep order and leading dimension."""
        X = linear.tolinear([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        S = linear.sub(X, 1, 0, 3, 2)
        assert linear.size(S) == (2, 2, "row")
        assert S.ld == 3
        assert_array_equal(S, [[4, 5], [7, 8]])
        S[0, 1] = 50.0
        assert X[1, 1] == 50.0

    def test_sub_matrix_col_major(self, col_matrix):
        """Sub-views of col-major matrices address logical elements."""
        S = linear.sub(col_matrix, 0, 1, 2, 3)
        assert linear.size(S) == (2, 2, "col")
        assert_array_equal(S, [[2, 3], [5, 6]])

    def test_sub_bounds(self, row_matrix):
        """Empty or out-of-range sub-views are rejected."""
        with pytest.raises(BoundsError):
            linear.sub(linear.vector(3), 2, 2)
        with pytest.raises(BoundsError):
            linear.sub(row_matrix, 0, 0, 3, 1)
        with pytest.raises(ArgumentError):
            linear.sub(linear.vector(3), 0, 1, 2)

    def test_sub_non_view(self):
        """sub needs a view."""
        with pytest.raises(OperandTypeError):
            linear.sub([1, 2], 0)

    def test_sub_non_integer_bounds(self):
        """Fractional or non-numeric bounds are rejected, not truncated."""
        x = linear.tolinear([1, 2, 3, 4])
        with pytest.raises(OperandTypeError):
            linear.sub(x, 1.7, 3.2)
        with pytest.raises(OperandTypeError):
            linear.sub(x, "a")
        with pytest.raises(OperandTypeError):
            linear.sub(x, True)
        with pytest.raises(OperandTypeError):
            linear.sub(linear.tolinear([[1, 2], [3, 4]]), 0, 0.5)
        assert list(linear.sub(x, np.int64(1), 3)) == [2.0, 3.0]


class TestPacking:
    """Test unwind and reshape."""

    def test_unwind_storage_order(self, row_matrix, col_matrix):
        """Each matrix is unwound in its own storage order."""
        x = linear.vector(12)
        linear.unwind([row_matrix, col_matrix], x)
        assert list(x) == [1, 2, 3, 4, 5, 6, 1, 4, 2, 5, 3, 6]

    def test_reshape_inverse(self, row_matrix, col_matrix):
        """reshape distributes the values back."""
        x = linear.vector(12)
        linear.unwind([row_matrix, col_matrix], x)
        A = linear.matrix(2, 3)
        B = linear.matrix(2, 3, "col")
        linear.reshape(x, [A, B])
        np.testing.assert_array_equal(A.array, row_matrix.array)
        np.testing.assert_array_equal(B.array, col_matrix.array)

    def test_unwind_submatrix(self):
        """Non-packed matrices unwind their logical elements only."""
        X = linear.tolinear([[1, 2, 3], [4, 5, 6]])
        x = linear.vector(4)
        linear.unwind([linear.sub(X, 0, 1)], x)
        assert list(x) == [2.0, 3.0, 5.0, 6.0]

    def test_total_mismatch(self, row_matrix):
        """Element counts must match exactly."""
        with pytest.raises(DimensionError):
            linear.unwind([row_matrix], linear.vector(5))
        with pytest.raises(DimensionError):
            linear.reshape(linear.vector(7), [row_matrix])

    def test_empty_list(self):
        """At least one matrix is required."""
        with pytest.raises(ArgumentError):
            linear.unwind([], linear.vector(1))


class TestConversion:
    """Test tolist, tolinear, tovector and ipairs."""

    def test_tolist(self, row_matrix, col_matrix):
        """Matrices become lists of their major vectors."""
        assert linear.tolist(linear.tolinear([1, 2])) == [1.0, 2.0]
        assert linear.tolist(row_matrix) == [[1, 2, 3], [4, 5, 6]]
        assert linear.tolist(col_matrix) == [[1, 4], [2, 5], [3, 6]]

    def test_tolinear_roundtrip(self):
        """tolinear inverts tolist for both orders."""
        values = [[1.5, 2.0], [3.0, 4.0], [5.0, 6.5]]
        for order in ("row", "col"):
            assert linear.tolist(linear.tolinear(values, order)) == values

    def test_tolinear_default_order(self):
        """The default order applies when none is given."""
        linear.set_default_order("col")
        X = linear.tolinear([[1, 2, 3], [4, 5, 6]])
        assert linear.size(X) == (3, 2, "col")

    def test_tolinear_numpy(self):
        """numpy arrays are accepted and copied."""
        a = np.arange(6.0).reshape(2, 3)
        X = linear.tolinear(a)
        a[0, 0] = 99.0
        assert X[0, 0] == 0.0
        assert X.shape == (2, 3)

    def test_tolinear_invalid(self):
        """Ragged, empty and non-numeric values are rejected."""
        with pytest.raises(ArgumentError):
            linear.tolinear([[1, 2], [3]])
        with pytest.raises(ArgumentError):
            linear.tolinear([])
        with pytest.raises(ArgumentError):
            linear.tolinear(["a", "b"])
        with pytest.raises(ArgumentError):
            linear.tolinear("abc")
        with pytest.raises(ArgumentError):
            linear.tolinear([[[1.0]]])

    def test_tovector_key(self):
        """Mapping keys and attributes, skipping missing values."""
        records = [{"v": 1}, {"v": None}, {"w": 5}, {"v": 2.5}]
        x = linear.tovector(records, "v")
        assert list(x) == [1.0, 2.5]
        assert x.buffer.size == 2
        objects = [SimpleNamespace(v=3), SimpleNamespace(u=1), SimpleNamespace(v=4)]
        assert list(linear.tovector(objects, "v")) == [3.0, 4.0]

    def test_tovector_callable(self):
        """A callable extracts the value."""
        x = linear.tovector(range(4), lambda i: i * i if i % 2 else None)
        assert list(x) == [1.0, 9.0]

    def test_tovector_invalid(self):
        """No values, or non-numeric values, are rejected."""
        with pytest.raises(ArgumentError):
            linear.tovector([{"w": 1}], "v")
        with pytest.raises(ArgumentError):
            linear.tovector([], "v")
        with pytest.raises(ArgumentError):
            linear.tovector([{"v": "x"}], "v")
        with pytest.raises(ArgumentError):
            linear.tovector([{"v": 1}], 3)

    def test_ipairs(self, row_matrix):
        """ipairs yields 0-based positions with values or major vectors."""
        pairs = list(linear.ipairs(linear.tolinear([5, 6])))
        assert pairs == [(0, 5.0), (1, 6.0)]
        for i, row in linear.ipairs(row_matrix):
            linear.set(row, i + 1)
        assert_array_equal(row_matrix, [[1, 1, 1], [2, 2, 2]])

    def test_ipairs_non_view(self):
        """ipairs needs a view."""
        with pytest.raises(OperandTypeError):
            linear.ipairs([1, 2])
