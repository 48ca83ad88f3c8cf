# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

import densematrix as dm
from densematrix import DenseMatrix, ShapeError


@pytest.fixture
def M():
    return dm.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


@pytest.fixture
def N():
    return dm.from_rows([[20, 1, 5], [20, 1, 5], [20, 1, 5]])


def random_matrix(rng, m, n):
    return DenseMatrix(m, n, rng.normal(size=m * n))


def test_add_concrete(M, N):
    expected = dm.from_rows([[21, 3, 8], [24, 6, 11], [27, 9, 14]])
    assert M + N == expected
    assert M.add(N) == expected


@pytest.mark.parametrize("m,n", [(1, 1), (3, 4), (6, 2)])
def test_zeros_is_additive_identity(m, n):
    rng = np.random.default_rng(seed=m * 10 + n)
    A = random_matrix(rng, m, n)
    assert (dm.zeros(m, n) + A).allclose(A)
    assert (A - A).allclose(dm.zeros(m, n))


def test_elementwise_against_numpy():
    rng = np.random.default_rng(0)
    A = random_matrix(rng, 4, 3)
    B = random_matrix(rng, 4, 3)
    a, b = A.to_numpy(), B.to_numpy()
    np.testing.assert_allclose(A.subtract(B).to_numpy(), a - b)
    np.testing.assert_allclose(A.multiply_elements(B).to_numpy(), a * b)
    np.testing.assert_allclose(A.divide_elements(B).to_numpy(), a / b)
    np.testing.assert_allclose((A * B).to_numpy(), a * b)
    np.testing.assert_allclose((A / B).to_numpy(), a / b)


def test_elementwise_shape_mismatch():
    with pytest.raises(ShapeError):
        dm.zeros(2, 3) + dm.zeros(3, 2)
    with pytest.raises(ShapeError):
        dm.ones(2, 3).multiply_elements(dm.ones(2, 2))
    with pytest.raises(ShapeError):
        dm.ones(2, 3).combine(dm.ones(3, 3), max)


def test_map_and_combine():
    A = dm.from_rows([[1, -2], [3, -4]])
    assert A.map(abs) == dm.from_rows([[1, 2], [3, 4]])
    B = dm.from_rows([[0, 0], [5, -5]])
    assert A.combine(B, max) == dm.from_rows([[1, 0], [5, -4]])
    # results are new matrices
    assert A == dm.from_rows([[1, -2], [3, -4]])


def test_scalar_matrix_forms(M):
    a = M.to_numpy()
    np.testing.assert_allclose(M.add_scalar(2).to_numpy(), a + 2)
    np.testing.assert_allclose(M.subtract_scalar(2).to_numpy(), a - 2)
    np.testing.assert_allclose(M.multiply_scalar(2).to_numpy(), a * 2)
    np.testing.assert_allclose(M.divide_scalar(2).to_numpy(), a / 2)
    assert M + 2 == M.add(2)
    assert M - 2 == M.subtract(2)
    assert M * 2 == M.multiply(2)
    assert M / 4 == M.divide_scalar(4)


def test_scalar_on_the_left(M):
    a = M.to_numpy()
    assert 3 + M == M + 3
    assert 3 * M == M * 3
    np.testing.assert_allclose((10 - M).to_numpy(), 10 - a)
    np.testing.assert_allclose((10 / M).to_numpy(), 10 / a)
    np.testing.assert_allclose(M.scalar_subtract(1.5).to_numpy(), 1.5 - a)
    np.testing.assert_allclose(M.scalar_divide(1.5).to_numpy(), 1.5 / a)
    # numpy scalars defer to the matrix
    assert np.float64(2.0) * M == M * 2


def test_scalar_divide_is_not_a_reciprocal_trick():
    A = dm.from_rows([[3.0, 7.0]])
    assert (1 / A).to_rows() == [[1 / 3.0, 1 / 7.0]]
    assert (2 / A).to_rows() == [[2 / 3.0, 2 / 7.0]]


def test_division_follows_ieee():
    A = dm.from_rows([[1.0, -1.0, 0.0]])
    Z = dm.zeros(1, 3)
    out = A / Z
    assert out[0, 0] == math.inf
    assert out[0, 1] == -math.inf
    assert math.isnan(out[0, 2])
    assert (1 / Z)[0, 0] == math.inf


def test_negation(M):
    assert -M == M * -1
    assert -M + M == dm.zeros(3)


def test_sum(M):
    assert M.sum() == 45.0
    assert dm.zeros(0, 3).sum() == 0.0
    assert isinstance(M.sum(), float)


def test_unsupported_operands(M):
    with pytest.raises(TypeError):
        M + "a"
    with pytest.raises(TypeError):
        M.add_scalar([1, 2])
    with pytest.raises(TypeError):
        M @ 2
