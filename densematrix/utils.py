# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

EPS: float = 1e-12
DEFAULT_PRECISION: int = 3


def scale_tol(elements: np.ndarray) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    if elements.size == 0:
        return EPS
    return EPS * max(1.0, float(np.max(np.abs(elements))))
