# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Text rendering of matrices
"""

import math

from .utils import DEFAULT_PRECISION


def format_number(value: float, precision: int = DEFAULT_PRECISION, width: int = 0) -> str:
    """Fixed-point text of `value` with `precision` decimals, right-aligned to `width`."""
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")
    return f"{value:>{width}.{precision}f}"


def element_width(value: float, precision: int = DEFAULT_PRECISION) -> int:
    """
    Display width of a single element: whole numbers are measured by their
    integer text, everything else by its rounded fixed-point text.
    """
    if math.isfinite(value) and value == math.floor(value):
        return len(str(int(value)))
    return len(format_number(value, precision))


def render(matrix, precision: int = DEFAULT_PRECISION) -> str:
    """
    Tab-separated, newline-terminated rows with one column width shared by
    the whole matrix.

    Parameters
    ----------
    matrix : DenseMatrix
    precision : int
        Number of digits after the decimal point.

    Returns
    -------
    text : str
        Empty string for a matrix with no elements.
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")
    values = matrix.elements.tolist()
    if not values:
        return ""
    width = max(element_width(v, precision) for v in values)

    cols = matrix.col_count
    lines = []
    for row in range(matrix.row_count):
        cells = values[row * cols : (row + 1) * cols]
        lines.append("\t".join(format_number(v, precision, width) for v in cells) + "\n")
    return "".join(lines)
