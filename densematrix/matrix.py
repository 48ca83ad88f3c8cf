# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import functools
import logging
import numbers
import operator
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from . import formatting
from .errors import OutOfBoundsError, ShapeError
from .indexing import IndexLike, is_single_index, normalize_index
from .utils import DEFAULT_PRECISION, scale_tol

logger = logging.getLogger(__name__)

Scalar = Union[int, float]


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real)


def _require_scalar(value) -> float:
    if not _is_scalar(value):
        raise TypeError(f"expected a real scalar, got {type(value).__name__}")
    return value


def _axis_fits(indices: List[int], length: int) -> bool:
    return not indices or (0 <= min(indices) and max(indices) < length)


def _describe_span(indices: List[int]) -> str:
    return f"{min(indices)}..{max(indices)}" if indices else "(none)"


class DenseMatrix:
    """
    Dense, row-major matrix of float64 values.

    Element (row, col) lives at ``elements[row * col_count + col]``. Every
    operation that returns a matrix allocates fresh storage; the only
    in-place mutations are cell assignment and `set_submatrix`.

    Parameters
    ----------
    rows, cols : int
        Dimensions, both non-negative.
    data : sequence of float
        ``rows * cols`` values in row-major order. The values are copied.
    """

    # let numpy scalars on the left defer to our reflected operators
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, rows: int, cols: int, data: Sequence[float]):
        rows, cols = operator.index(rows), operator.index(cols)
        if rows < 0 or cols < 0:
            raise ShapeError(f"dimensions must be non-negative, got {rows}x{cols}")
        try:
            elements = np.array(data, dtype=float)
        except ValueError as e:
            raise ShapeError(f"data must be a flat sequence of numbers: {e}") from e
        if elements.ndim != 1:
            raise ShapeError(f"data must be one-dimensional, got {elements.ndim} dimensions")
        if elements.size != rows * cols:
            logger.debug(f"rejecting {elements.size} values for a {rows}x{cols} matrix")
            raise ShapeError(
                f"insufficient data: {rows}x{cols} matrix needs {rows * cols} "
                f"values, got {elements.size}"
            )
        self.row_count = rows
        self.col_count = cols
        self.elements = elements

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> "DenseMatrix":
        """
        Build a matrix from a list of rows. The column count is taken from
        the first row and every other row must match it.
        """
        rows = [list(r) for r in rows]
        nr = len(rows)
        nc = len(rows[0]) if nr else 0
        for i, r in enumerate(rows):
            if len(r) != nc:
                raise ShapeError(f"row {i} has {len(r)} elements, expected {nc}")
        return cls(nr, nc, [x for r in rows for x in r])

    @classmethod
    def prefilled(cls, rows: int, cols: Optional[int] = None, value: float = 0.0) -> "DenseMatrix":
        """rows x cols matrix with every element equal to `value` (square when cols is None)."""
        if cols is None:
            cols = rows
        return cls(rows, cols, np.full(rows * cols, value, dtype=float))

    @classmethod
    def zeros(cls, rows: int, cols: Optional[int] = None) -> "DenseMatrix":
        return cls.prefilled(rows, cols, 0.0)

    @classmethod
    def ones(cls, rows: int, cols: Optional[int] = None) -> "DenseMatrix":
        return cls.prefilled(rows, cols, 1.0)

    @classmethod
    def diagonal(cls, values: Sequence[float], pad: float = 0.0) -> "DenseMatrix":
        """
        N x N matrix whose diagonal holds `values` from top-left to
        bottom-right, every other element equal to `pad`.
        """
        values = np.asarray(list(values), dtype=float)
        n = values.size
        result = cls.prefilled(n, n, pad)
        # stepping n + 1 through the flat storage visits (0,0), (1,1), ...
        result.elements[:: n + 1] = values
        return result

    @classmethod
    def identity(cls, size: int) -> "DenseMatrix":
        return cls.diagonal(np.ones(size), pad=0.0)

    def copy(self) -> "DenseMatrix":
        return DenseMatrix(self.row_count, self.col_count, self.elements)

    def to_rows(self) -> List[List[float]]:
        return self.to_numpy().tolist()

    def to_numpy(self) -> np.ndarray:
        """Independent (rows, cols) ndarray copy of the elements."""
        return self.elements.reshape(self.row_count, self.col_count).copy()

    # -----------------------------------------------------------------
    # Shape
    # -----------------------------------------------------------------
    @property
    def shape(self) -> Tuple[int, int]:
        return (self.row_count, self.col_count)

    @property
    def size(self) -> int:
        return self.row_count * self.col_count

    @property
    def all_rows(self) -> range:
        return range(self.row_count)

    @property
    def all_cols(self) -> range:
        return range(self.col_count)

    def index_in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.col_count

    def range_in_bounds(self, rows: range, cols: range) -> bool:
        """
        True when the first and the last addressable index of both spans
        are in bounds. Spans are half-open, so the last index of
        ``range(a, b)`` is ``b - 1``; an empty span addresses nothing and
        is never in bounds.
        """
        if len(rows) == 0 or len(cols) == 0:
            return False
        return self.index_in_bounds(rows[0], cols[0]) and self.index_in_bounds(
            rows[-1], cols[-1]
        )

    @staticmethod
    def dimensions_equal(first: "DenseMatrix", second: "DenseMatrix") -> bool:
        return first.row_count == second.row_count and first.col_count == second.col_count

    def _check_selection(self, rows: List[int], cols: List[int], action: str) -> None:
        # Only the extremes of each axis are checked; every index lies between them.
        if rows and cols:
            fits = self.range_in_bounds(
                range(min(rows), max(rows) + 1), range(min(cols), max(cols) + 1)
            )
        else:
            fits = _axis_fits(rows, self.row_count) and _axis_fits(cols, self.col_count)
        if not fits:
            raise OutOfBoundsError(
                f"{action} rows {_describe_span(rows)}, cols {_describe_span(cols)} "
                f"out of bounds for a {self.row_count}x{self.col_count} matrix"
            )

    # -----------------------------------------------------------------
    # Submatrix access
    # -----------------------------------------------------------------
    def submatrix(self, rows: IndexLike, cols: IndexLike) -> "DenseMatrix":
        """
        Copy out the cells selected by `rows` x `cols`.

        Parameters
        ----------
        rows, cols : sequence of int (or range / slice)
            Indices in any order, duplicates allowed.

        Returns
        -------
        DenseMatrix
            len(rows) x len(cols) matrix with
            ``result[i, j] == self[rows[i], cols[j]]``.

        Raises
        ------
        OutOfBoundsError
            If the bounding box of the selection leaves the matrix.
        """
        rows = normalize_index(rows, self.row_count)
        cols = normalize_index(cols, self.col_count)
        self._check_selection(rows, cols, "getting")
        if not rows or not cols:
            return DenseMatrix.zeros(len(rows), len(cols))
        grid = self.elements.reshape(self.row_count, self.col_count)
        return DenseMatrix(len(rows), len(cols), grid[np.ix_(rows, cols)].ravel())

    def set_submatrix(
        self,
        rows: IndexLike,
        cols: IndexLike,
        fill: Union["DenseMatrix", Scalar],
    ) -> None:
        """
        Overwrite the cells selected by `rows` x `cols` in place.

        `fill` is either broadcast (a scalar or a one-element matrix, written
        to every selected cell) or a matrix of exactly len(rows) x len(cols)
        whose element (i, j) goes to cell (rows[i], cols[j]). Bounds and
        shape are validated before anything is written.
        """
        rows = normalize_index(rows, self.row_count)
        cols = normalize_index(cols, self.col_count)
        self._check_selection(rows, cols, "setting")
        m, n = len(rows), len(cols)

        if _is_scalar(fill):
            values = float(fill)
            mode = "broadcast"
        elif isinstance(fill, DenseMatrix):
            if fill.size == 1:
                values = fill.elements[0]
                mode = "broadcast"
            elif fill.shape == (m, n):
                values = fill.elements.reshape(m, n)
                mode = "exact"
            else:
                raise ShapeError(
                    f"fill of shape {fill.row_count}x{fill.col_count} can neither "
                    f"be broadcast nor placed into a {m}x{n} selection"
                )
        else:
            raise TypeError(f"fill must be a DenseMatrix or a scalar, got {type(fill).__name__}")

        if m == 0 or n == 0:
            return
        logger.debug(f"set_submatrix: {mode} fill into {m}x{n} selection")
        flat = np.add.outer(np.asarray(rows) * self.col_count, np.asarray(cols))
        self.elements[flat] = values

    def get(self, row: int, col: int) -> float:
        if not self.index_in_bounds(row, col):
            raise OutOfBoundsError(
                f"getting ({row}, {col}) out of bounds for a "
                f"{self.row_count}x{self.col_count} matrix"
            )
        return float(self.elements[row * self.col_count + col])

    def set(self, row: int, col: int, value: float) -> None:
        if not self.index_in_bounds(row, col):
            raise OutOfBoundsError(
                f"setting ({row}, {col}) out of bounds for a "
                f"{self.row_count}x{self.col_count} matrix"
            )
        self.elements[row * self.col_count + col] = value

    def row(self, index: int, cols: Optional[IndexLike] = None) -> "DenseMatrix":
        """1 x n matrix holding row `index` (restricted to `cols` if given)."""
        return self.submatrix([index], self.all_cols if cols is None else cols)

    def column(self, index: int, rows: Optional[IndexLike] = None) -> "DenseMatrix":
        """m x 1 matrix holding column `index` (restricted to `rows` if given)."""
        return self.submatrix(self.all_rows if rows is None else rows, [index])

    def _split_key(self, key) -> Tuple[IndexLike, IndexLike]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("matrix indices must be a (rows, cols) pair")
        return key

    def __getitem__(self, key):
        rows, cols = self._split_key(key)
        if is_single_index(rows) and is_single_index(cols):
            return self.get(operator.index(rows), operator.index(cols))
        return self.submatrix(rows, cols)

    def __setitem__(self, key, value) -> None:
        rows, cols = self._split_key(key)
        if is_single_index(rows) and is_single_index(cols) and _is_scalar(value):
            self.set(operator.index(rows), operator.index(cols), value)
        else:
            self.set_submatrix(rows, cols, value)

    # -----------------------------------------------------------------
    # Element-wise arithmetic
    # -----------------------------------------------------------------
    def map(self, function: Callable[[float], float]) -> "DenseMatrix":
        """Apply `function` to every element."""
        with np.errstate(all="ignore"):
            values = [function(x) for x in self.elements]
        return DenseMatrix(self.row_count, self.col_count, values)

    def combine(
        self, other: "DenseMatrix", operation: Callable[[float, float], float]
    ) -> "DenseMatrix":
        """Combine two equally sized matrices pairwise with `operation`."""
        if not DenseMatrix.dimensions_equal(self, other):
            raise ShapeError(
                f"dimension mismatch: {self.row_count}x{self.col_count} vs "
                f"{other.row_count}x{other.col_count}"
            )
        with np.errstate(all="ignore"):
            values = [operation(a, b) for a, b in zip(self.elements, other.elements)]
        return DenseMatrix(self.row_count, self.col_count, values)

    def add(self, other: Union["DenseMatrix", Scalar]) -> "DenseMatrix":
        if isinstance(other, DenseMatrix):
            return self.combine(other, operator.add)
        return self.add_scalar(other)

    def subtract(self, other: Union["DenseMatrix", Scalar]) -> "DenseMatrix":
        if isinstance(other, DenseMatrix):
            return self.combine(other, operator.sub)
        return self.subtract_scalar(other)

    def multiply_elements(self, other: "DenseMatrix") -> "DenseMatrix":
        return self.combine(other, operator.mul)

    def divide_elements(self, other: "DenseMatrix") -> "DenseMatrix":
        return self.combine(other, operator.truediv)

    def add_scalar(self, scalar: Scalar) -> "DenseMatrix":
        scalar = _require_scalar(scalar)
        return self.map(lambda x: x + scalar)

    def subtract_scalar(self, scalar: Scalar) -> "DenseMatrix":
        scalar = _require_scalar(scalar)
        return self.map(lambda x: x - scalar)

    def multiply_scalar(self, scalar: Scalar) -> "DenseMatrix":
        scalar = _require_scalar(scalar)
        return self.map(lambda x: x * scalar)

    def divide_scalar(self, scalar: Scalar) -> "DenseMatrix":
        scalar = _require_scalar(scalar)
        return self.map(lambda x: x / scalar)

    def scalar_subtract(self, scalar: Scalar) -> "DenseMatrix":
        """``scalar - self`` element by element."""
        scalar = _require_scalar(scalar)
        return self.map(lambda x: scalar - x)

    def scalar_divide(self, scalar: Scalar) -> "DenseMatrix":
        """``scalar / self`` element by element."""
        scalar = _require_scalar(scalar)
        return self.map(lambda x: scalar / x)

    def sum(self) -> float:
        return float(functools.reduce(operator.add, self.elements, 0.0))

    # -----------------------------------------------------------------
    # Products
    # -----------------------------------------------------------------
    def multiply(self, other: Union["DenseMatrix", Scalar]) -> "DenseMatrix":
        """
        Matrix product with another matrix, or scaling by a scalar.

        Each output cell (i, j) is row i of self times column j of `other`
        (transposed to a row), element by element, then summed.
        """
        if not isinstance(other, DenseMatrix):
            return self.multiply_scalar(other)
        if self.col_count != other.row_count:
            raise ShapeError(
                f"multiplication dimension mismatch: {self.row_count}x{self.col_count} "
                f"by {other.row_count}x{other.col_count}"
            )
        logger.debug(
            f"multiply: ({self.row_count}x{self.col_count}) @ "
            f"({other.row_count}x{other.col_count})"
        )
        result = DenseMatrix.zeros(self.row_count, other.col_count)
        columns = [other.column(col).transpose() for col in other.all_cols]
        for row in result.all_rows:
            lhs = self.row(row)
            for col in result.all_cols:
                result[row, col] = lhs.multiply_elements(columns[col]).sum()
        return result

    def transpose(self) -> "DenseMatrix":
        """New col_count x row_count matrix with rows and columns swapped."""
        grid = self.elements.reshape(self.row_count, self.col_count)
        return DenseMatrix(self.col_count, self.row_count, grid.T.ravel())

    @property
    def T(self) -> "DenseMatrix":
        return self.transpose()

    # -----------------------------------------------------------------
    # Comparison
    # -----------------------------------------------------------------
    def __eq__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return DenseMatrix.dimensions_equal(self, other) and bool(
            np.array_equal(self.elements, other.elements)
        )

    def allclose(self, other: "DenseMatrix", rtol: float = 1e-9, atol: Optional[float] = None) -> bool:
        """Same shape and element-wise equal within floating tolerance."""
        if not DenseMatrix.dimensions_equal(self, other):
            return False
        if atol is None:
            atol = max(scale_tol(self.elements), scale_tol(other.elements))
        return bool(np.allclose(self.elements, other.elements, rtol=rtol, atol=atol))

    # -----------------------------------------------------------------
    # Operators
    # -----------------------------------------------------------------
    def __add__(self, other):
        if isinstance(other, DenseMatrix) or _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other):
        if _is_scalar(other):
            return self + other
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, DenseMatrix) or _is_scalar(other):
            return self.subtract(other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other):
            return self.scalar_subtract(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, DenseMatrix):
            return self.multiply_elements(other)
        if _is_scalar(other):
            return self.multiply_scalar(other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, DenseMatrix):
            return self.divide_elements(other)
        if _is_scalar(other):
            return self.divide_scalar(other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_scalar(other):
            return self.scalar_divide(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, DenseMatrix):
            return self.multiply(other)
        return NotImplemented

    def __neg__(self):
        return self.multiply_scalar(-1.0)

    # -----------------------------------------------------------------
    # Text
    # -----------------------------------------------------------------
    def render(self, precision: int = DEFAULT_PRECISION) -> str:
        return formatting.render(self, precision)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.row_count}, {self.col_count}, {self.elements.tolist()})"
