"""
Tests for binary operations.
"""

import pytest

import linear
from linear import DimensionError, OperandTypeError

from conftest import assert_array_equal


class TestVectorVector:
    """Test binary operations on two vectors."""

    def test_axpy(self):
        """y += alpha * x."""
        x = linear.tolinear([1, 2, 3])
        y = linear.tolinear([1, 1, 1])
        assert linear.axpy(x, y) is None
        assert list(y) == [2.0, 3.0, 4.0]
        linear.axpy(x, y, -2)
        assert list(y) == [0.0, -1.0, -2.0]
        assert list(x) == [1.0, 2.0, 3.0]

    def test_axpby(self):
        """y = alpha * x + beta * y."""
        x = linear.tolinear([1, 2])
        y = linear.tolinear([3, 4])
        linear.axpby(x, y, 2, 3)
        assert list(y) == [11.0, 16.0]

    def test_axpby_keywords(self):
        """alpha and beta by keyword; beta defaults to 1."""
        x = linear.tolinear([1, 2])
        y = linear.tolinear([3, 4])
        linear.axpby(x, y, alpha=2)
        assert list(y) == [5.0, 8.0]
        linear.axpby(x, y, beta=0)
        assert list(y) == [1.0, 2.0]

    def test_mul(self):
        """Element-wise product with exponents."""
        x = linear.tolinear([2, 4])
        y = linear.tolinear([1, 1])
        linear.mul(x, y)
        assert list(y) == [2.0, 4.0]
        linear.mul(x, y, -1)
        assert list(y) == [1.0, 1.0]
        linear.mul(x, y, 0.5)
        assert_array_equal(y, [2 ** 0.5, 2.0])
        linear.mul(x, y, 0)
        assert_array_equal(y, [2 ** 0.5, 2.0])
        z = linear.tolinear([1, 1])
        linear.mul(x, z, 2)
        assert list(z) == [4.0, 16.0]

    def test_swap(self):
        """swap exchanges both operands."""
        x = linear.tolinear([1, 2])
        y = linear.tolinear([3, 4])
        linear.swap(x, y)
        assert list(x) == [3.0, 4.0]
        assert list(y) == [1.0, 2.0]

    def test_copy(self):
        """copy overwrites y only."""
        x = linear.tolinear([1, 2])
        y = linear.vector(2)
        linear.copy(x, y)
        assert list(y) == [1.0, 2.0]
        y[0] = 9.0
        assert x[0] == 1.0

    def test_strided_operands(self):
        """Strided views share storage correctly."""
        x = linear.tolinear([1, 2, 3, 4])
        linear.axpy(x[0::2], x[1::2], 10)
        assert list(x) == [1.0, 12.0, 3.0, 34.0]

    def test_length_mismatch(self):
        """Vectors must have equal lengths."""
        with pytest.raises(DimensionError):
            linear.axpy(linear.vector(2), linear.vector(3))

    def test_no_mutation_on_error(self):
        """A bad parameter leaves y untouched."""
        x = linear.tolinear([1, 2])
        y = linear.tolinear([3, 4])
        with pytest.raises(linear.ArgumentError):
            linear.axpby(x, y, 2, "b")
        assert list(y) == [3.0, 4.0]

    def test_number_rejected(self):
        """Numbers are not valid binary operands."""
        with pytest.raises(OperandTypeError):
            linear.axpy(1.0, linear.vector(2))
        with pytest.raises(OperandTypeError):
            linear.copy(linear.vector(2), "y")


class TestVectorMatrix:
    """Test broadcasting a vector over a matrix."""

    def test_axpy_rows(self):
        """x is added to every row."""
        x = linear.tolinear([1, 2, 3])
        Y = linear.tolinear([[1, 1, 1], [2, 2, 2]])
        linear.axpy(x, Y, "row")
        assert_array_equal(Y, [[2, 3, 4], [3, 4, 5]])

    def test_axpy_cols(self):
        """x is added to every column, with alpha."""
        x = linear.tolinear([1, 2])
        Y = linear.tolinear([[1, 1, 1], [2, 2, 2]])
        linear.axpy(x, Y, "col", 2)
        assert_array_equal(Y, [[3, 3, 3], [6, 6, 6]])

    def test_default_order(self):
        """The order defaults to the configured default."""
        x = linear.tolinear([1, 2, 3])
        Y = linear.matrix(2, 3)
        linear.copy(x, Y)
        assert_array_equal(Y, [[1, 2, 3], [1, 2, 3]])

    def test_col_major_target(self, col_matrix):
        """Broadcast over a col-major matrix in both directions."""
        linear.mul(linear.tolinear([1, 10, 100]), col_matrix, "row")
        assert_array_equal(col_matrix, [[1, 20, 300], [4, 50, 600]])
        linear.mul(linear.tolinear([2, 4]), col_matrix, "col", -1)
        assert_array_equal(col_matrix, [[0.5, 10, 150], [1, 12.5, 150]])

    def test_order_keyword(self):
        """order may be given by keyword alongside parameters."""
        x = linear.tolinear([1, 1])
        Y = linear.matrix(2, 3)
        linear.axpby(x, Y, order="col", alpha=3)
        assert_array_equal(Y, [[3, 3, 3], [3, 3, 3]])

    def test_length_mismatch(self, row_matrix):
        """x must match the broadcast line length."""
        with pytest.raises(DimensionError):
            linear.axpy(linear.vector(2), row_matrix, "row")


class TestMatrixMatrix:
    """Test binary operations on two matrices."""

    def test_axpy(self, row_matrix):
        """Matrices of the same order and shape."""
        Y = linear.matrix(2, 3)
        linear.axpy(row_matrix, Y, 2)
        assert_array_equal(Y, [[2, 4, 6], [8, 10, 12]])

    def test_swap_submatrices(self):
        """Non-packed matrices are processed per major line."""
        X = linear.tolinear([[1, 2], [3, 4], [5, 6]])
        top = linear.sub(X, 0, 0, 1)
        bottom = linear.sub(X, 2, 0)
        linear.swap(top, bottom)
        assert_array_equal(X, [[5, 6], [3, 4], [1, 2]])

    def test_order_mismatch(self, row_matrix, col_matrix):
        """Matrices must share their order."""
        with pytest.raises(DimensionError) as exc_info:
            linear.axpy(row_matrix, col_matrix)
        assert exc_info.value.code == linear.LinearError.ERROR_ORDER_MISMATCH

    def test_shape_mismatch(self, row_matrix):
        """Matrices must share their shape."""
        with pytest.raises(DimensionError):
            linear.copy(row_matrix, linear.matrix(3, 2))

    def test_matrix_vector_rejected(self, row_matrix):
        """A matrix cannot be combined into a vector."""
        with pytest.raises(OperandTypeError):
            linear.axpy(row_matrix, linear.vector(3))
