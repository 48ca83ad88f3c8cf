# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
densematrix
===========

A small, self-contained dense matrix value type: row-major float64
storage, flexible submatrix indexing, element-wise and scalar arithmetic,
matrix multiplication, transposition and plain-text rendering.

Public API
~~~~~~~~~~
- The matrix type
    - `DenseMatrix`
- Factories
    - `from_rows`, `prefilled`, `zeros`, `ones`, `diagonal`, `identity`
- Indexing helpers
    - `through` (inclusive strides)
- Errors
    - `MatrixError`, `OutOfBoundsError`, `ShapeError`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import densematrix as dm
>>> A = dm.from_rows([[1, 2], [3, 4]])
>>> (A @ dm.identity(2)) == A
True
>>> A[1, dm.through(0, 1)].to_rows()
[[3.0, 4.0]]
"""

from importlib.metadata import version as _pkg_version

from .errors import MatrixError, OutOfBoundsError, ShapeError
from .formatting import format_number
from .indexing import through
from .matrix import DenseMatrix
from .utils import DEFAULT_PRECISION, EPS

# ---------------------------------------------------------------------
# Re-export the factories as plain functions; DenseMatrix holds the
# canonical implementation of each.
# ---------------------------------------------------------------------
from_rows = DenseMatrix.from_rows
prefilled = DenseMatrix.prefilled
zeros = DenseMatrix.zeros
ones = DenseMatrix.ones
diagonal = DenseMatrix.diagonal
identity = DenseMatrix.identity

__all__ = [
    "DenseMatrix",
    "from_rows",
    "prefilled",
    "zeros",
    "ones",
    "diagonal",
    "identity",
    "through",
    "format_number",
    "MatrixError",
    "OutOfBoundsError",
    "ShapeError",
    "DEFAULT_PRECISION",
    "EPS",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show densematrix”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see debug output
# only if they deliberately enable it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
