# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Index normalisation
===================

Every accessor on `DenseMatrix` is expressed in terms of one primitive that
takes an explicit list of row indices and an explicit list of column
indices. The helpers here turn the friendlier forms (a single int, a
`range`, a `slice`, an inclusive stride from `through`) into those lists.

Nothing is clamped or wrapped: a negative or too-large index survives
normalisation unchanged and is rejected later by the bounds check.
"""

import operator
from typing import Any, List, Sequence, Union

IndexLike = Union[int, Sequence[int], range, slice]


def through(start: int, end: int, step: int = 1) -> range:
    """
    Arithmetic progression from `start` towards `end`, inclusive of `end`
    when the step lands on it.

    >>> list(through(0, 6, 2))
    [0, 2, 4, 6]
    >>> list(through(4, 0, -2))
    [4, 2, 0]
    """
    start, end, step = operator.index(start), operator.index(end), operator.index(step)
    if step == 0:
        raise ValueError("stride step must not be zero")
    if step > 0:
        return range(start, end + 1, step)
    return range(start, end - 1, step)


def is_single_index(key: Any) -> bool:
    """True for a bare integer (bool excluded), including numpy integers."""
    if isinstance(key, bool):
        return False
    try:
        operator.index(key)
    except TypeError:
        return False
    return True


def slice_to_range(key: slice, length: int) -> range:
    # Unlike slice.indices(), explicit bounds are kept as given so that an
    # out-of-range slice is reported instead of silently truncated.
    step = 1 if key.step is None else operator.index(key.step)
    if step == 0:
        raise ValueError("slice step must not be zero")
    if step > 0:
        start = 0 if key.start is None else operator.index(key.start)
        stop = length if key.stop is None else operator.index(key.stop)
    else:
        start = length - 1 if key.start is None else operator.index(key.start)
        stop = -1 if key.stop is None else operator.index(key.stop)
    return range(start, stop, step)


def normalize_index(key: IndexLike, length: int) -> List[int]:
    """
    Expand one axis of an index expression into a list of integers.

    Parameters
    ----------
    key : int | sequence of int | range | slice
        Selection along one axis.
    length : int
        Size of that axis, only consulted to fill in open slice bounds.

    Returns
    -------
    indices : list[int]
        Indices in selection order (duplicates and any ordering preserved).
    """
    if isinstance(key, slice):
        return list(slice_to_range(key, length))
    if isinstance(key, range):
        return list(key)
    if is_single_index(key):
        return [operator.index(key)]
    if isinstance(key, (str, bytes)):
        raise TypeError(f"invalid index type: {type(key).__name__}")
    try:
        items = list(key)
    except TypeError:
        raise TypeError(f"invalid index type: {type(key).__name__}") from None
    indices = []
    for item in items:
        if not is_single_index(item):
            raise TypeError(f"indices must be integers, got {type(item).__name__}")
        indices.append(operator.index(item))
    return indices
