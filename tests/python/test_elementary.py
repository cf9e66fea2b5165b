"""
Tests for elementary (element-wise, in-place) operations.
"""

import math

import pytest
import numpy as np

import linear
from linear import RandomState

from conftest import EPSILON, assert_array_equal


class TestScalarOperands:
    """Test elementary operations on numbers."""

    def test_scal_number(self):
        """A number operand returns the transformed value."""
        assert linear.scal(3.0, alpha=2) == 6.0
        assert linear.scal(3) == 3.0

    def test_pow_special_exponents(self):
        """Dedicated exponents behave as their closed forms."""
        assert linear.pow(4.0, 0.5) == 2.0
        assert linear.pow(2.0, -1) == 0.5
        assert linear.pow(5.0, 0) == 1.0
        assert linear.pow(7.0) == 7.0
        assert linear.pow(2.0, 3) == 8.0

    def test_simple_functions(self):
        """exp, log, logistic, tanh and abs on numbers."""
        assert linear.exp(0.0) == 1.0
        assert linear.log(1.0) == 0.0
        assert linear.logistic(0.0) == 0.5
        assert linear.tanh(0.0) == 0.0
        assert linear.abs(-2.5) == 2.5
        assert linear.inc(1.0, 2.5) == 3.5

    def test_invalid_operand(self):
        """Non-numeric operands raise OperandTypeError."""
        with pytest.raises(linear.OperandTypeError):
            linear.scal("a")
        with pytest.raises(TypeError):
            linear.exp([1.0, 2.0])

    def test_invalid_parameter(self):
        """Parameters are validated."""
        x = linear.vector(2)
        with pytest.raises(linear.ArgumentError):
            linear.scal(x, "a")


class TestVectorOperations:
    """Test elementary operations on vectors."""

    def test_scal_involution(self):
        """scal by -1 applied twice restores the original values."""
        x = linear.tolinear([1, -2, 3.5])
        linear.scal(x, alpha=-1)
        assert list(x) == [-1.0, 2.0, -3.5]
        linear.scal(x, alpha=-1)
        assert list(x) == [1.0, -2.0, 3.5]

    def test_scal_strided(self):
        """scal on a strided view leaves the other elements alone."""
        x = linear.tolinear([1, 2, 3, 4])
        assert linear.scal(x[::2], 10) is None
        assert list(x) == [10.0, 2.0, 30.0, 4.0]

    def test_inc_default(self):
        """inc adds 1 by default."""
        x = linear.tolinear([1, 2])
        linear.inc(x)
        assert list(x) == [2.0, 3.0]

    def test_pow_vector(self):
        """pow on vectors."""
        x = linear.tolinear([1, 4, 9])
        linear.pow(x, 0.5)
        assert list(x) == [1.0, 2.0, 3.0]
        linear.pow(x, 2)
        assert_array_equal(x, [1, 4, 9])

    def test_sgn(self):
        """sgn maps to -1/1 and keeps zero and NaN."""
        x = linear.tolinear([-2, 0, 3, math.nan])
        linear.sgn(x)
        values = list(x)
        assert values[:3] == [-1.0, 0.0, 1.0]
        assert math.isnan(values[3])

    def test_abs_exp_log(self):
        """abs, exp and log on vectors."""
        x = linear.tolinear([-1, 0, 2])
        linear.abs(x)
        assert list(x) == [1.0, 0.0, 2.0]
        linear.exp(x)
        assert_array_equal(x, [math.e, 1.0, math.e ** 2])
        linear.log(x)
        assert_array_equal(x, [1.0, 0.0, 2.0])

    def test_logistic_tanh(self):
        """logistic and tanh on vectors."""
        x = linear.tolinear([0, 1])
        linear.logistic(x)
        assert_array_equal(x, [0.5, 1.0 / (1.0 + math.exp(-1.0))])
        y = linear.tolinear([0, 1])
        linear.tanh(y)
        assert_array_equal(y, [0.0, math.tanh(1.0)])

    def test_apply(self):
        """apply calls a Python function per element."""
        x = linear.tolinear([1, 2, 3])
        linear.apply(x, lambda v: v * v)
        assert list(x) == [1.0, 4.0, 9.0]

    def test_apply_strided(self):
        """apply visits only the view's elements."""
        x = linear.tolinear([1, 2, 3, 4])
        linear.apply(x[1::2], lambda v: -v)
        assert list(x) == [1.0, -2.0, 3.0, -4.0]

    def test_apply_requires_callable(self):
        """apply rejects a non-callable."""
        with pytest.raises(linear.ArgumentError):
            linear.apply(linear.vector(2), 3.0)

    def test_set(self):
        """set fills with alpha (default 1)."""
        x = linear.vector(3)
        linear.set(x)
        assert list(x) == [1.0, 1.0, 1.0]
        linear.set(x, alpha=-2)
        assert list(x) == [-2.0, -2.0, -2.0]

    def test_clip(self):
        """clip bounds values to [min, max]."""
        x = linear.tolinear([-1, 0.5, 2])
        linear.clip(x)
        assert list(x) == [0.0, 0.5, 1.0]
        y = linear.tolinear([-3, 0, 3])
        linear.clip(y, -1, max=2)
        assert list(y) == [-1.0, 0.0, 2.0]


class TestMatrixOperations:
    """Test elementary dispatch over matrices."""

    def test_packed_matrix(self, row_matrix):
        """A packed matrix is transformed entirely."""
        linear.scal(row_matrix, 2)
        assert_array_equal(row_matrix, [[2, 4, 6], [8, 10, 12]])

    def test_order_invariance(self, row_matrix, col_matrix):
        """Row-major and col-major matrices give identical logical results."""
        linear.exp(row_matrix)
        linear.exp(col_matrix)
        np.testing.assert_allclose(row_matrix.array, col_matrix.array)

    def test_submatrix_only(self):
        """A non-packed sub-matrix touches only its own elements."""
        X = linear.matrix(3, 3)
        block = linear.sub(X, 1, 1)
        assert not block.packed
        linear.set(block, 7)
        assert_array_equal(X, [[0, 0, 0], [0, 7, 7], [0, 7, 7]])

    def test_submatrix_col_major(self):
        """Sub-matrices of col-major matrices are walked per column."""
        X = linear.matrix(3, 3, "col")
        linear.inc(linear.sub(X, 0, 1, 2, 3), 1)
        assert_array_equal(X, [[0, 1, 1], [0, 1, 1], [0, 0, 0]])


class TestRandomFills:
    """Test uniform and normal fills."""

    def test_uniform_range(self, rng):
        """Uniform draws lie in [0, 1)."""
        x = linear.vector(100)
        linear.uniform(x, rng)
        v = x.values
        assert np.all(v >= 0.0)
        assert np.all(v < 1.0)
        assert len(np.unique(v)) == 100

    def test_uniform_reproducible(self):
        """Equal seeds give equal draws."""
        x = linear.vector(5)
        y = linear.vector(5)
        linear.uniform(x, RandomState(7))
        linear.uniform(y, rng=RandomState(7))
        assert list(x) == list(y)

    def test_uniform_default_state(self):
        """Without a handle, the default state is used and reseedable."""
        x = linear.vector(4)
        y = linear.vector(4)
        linear.randomseed(11)
        linear.uniform(x)
        linear.randomseed(11)
        linear.uniform(y)
        assert list(x) == list(y)

    def test_normal_moments(self, rng):
        """Normal draws have roughly zero mean and unit variance."""
        x = linear.vector(2001)
        linear.normal(x, rng)
        v = x.values
        assert np.all(np.isfinite(v))
        assert abs(v.mean()) < 0.1
        assert abs(v.std() - 1.0) < 0.1

    def test_normal_matrix(self, rng):
        """normal fills every element of a matrix."""
        X = linear.matrix(3, 3)
        linear.normal(X, rng)
        assert np.count_nonzero(X.array) == 9


class TestNormalDistribution:
    """Test normal pdf, cdf and quantile function."""

    def test_normalpdf(self):
        """Density values."""
        assert linear.normalpdf(0.0) == pytest.approx(0.398942, abs=EPSILON)
        assert linear.normalpdf(1.0, 2.5, 1.5) == pytest.approx(0.161314, abs=EPSILON)

    def test_normalcdf(self):
        """Distribution function values."""
        assert linear.normalcdf(0.0) == pytest.approx(0.5)
        assert linear.normalcdf(1.0) == pytest.approx(0.841345, abs=EPSILON)
        assert linear.normalcdf(3.0, mu=2.0) == pytest.approx(0.841345, abs=EPSILON)

    def test_normalqf(self):
        """Quantile function values."""
        assert linear.normalqf(0.5) == pytest.approx(0.0, abs=1e-12)
        assert linear.normalqf(0.841345) == pytest.approx(1.0, abs=1e-5)
        assert linear.normalqf(0.158655) == pytest.approx(-1.0, abs=1e-5)
        assert linear.normalqf(0.975, 1.0, 2.0) == pytest.approx(1.0 + 2.0 * 1.959964, abs=1e-5)

    def test_normalqf_limits(self):
        """0 and 1 map to infinities; outside [0, 1] is NaN."""
        assert linear.normalqf(0.0) == -math.inf
        assert linear.normalqf(1.0) == math.inf
        assert math.isnan(linear.normalqf(1.5))
        assert math.isnan(linear.normalqf(-0.5))

    def test_normalqf_inverts_normalcdf(self):
        """normalqf(normalcdf(x)) recovers x."""
        x = linear.tolinear([-2.0, -0.5, 0.25, 1.5, 2.5])
        linear.normalcdf(x)
        linear.normalqf(x)
        assert_array_equal(x, [-2.0, -0.5, 0.25, 1.5, 2.5], atol=1e-8)
