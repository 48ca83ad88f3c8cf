# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by DenseMatrix operations
"""


class MatrixError(Exception):
    """Base class for every error raised by this package."""


class OutOfBoundsError(MatrixError, IndexError):
    """Requested row/column indices fall outside the matrix dimensions."""


class ShapeError(MatrixError, ValueError):
    """Operand dimensions are incompatible with the requested operation."""
