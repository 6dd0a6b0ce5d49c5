"""Bounds-checked block operations on flat numeric buffers.

Every primitive works on [source_index, source_index + block_size) of the
source and [target_index, target_index + block_size) of the target, both
1-D numpy arrays. Bounds are checked before anything is written; results
are cast to the target dtype.
"""

from __future__ import annotations

import numpy as np

from opshape.errors import BoundsError


def _check_bounds(target: np.ndarray, source: np.ndarray, target_index: int, source_index: int,
                  block_size: int) -> None:
    if source_index < 0 or source_index >= len(source):
        raise BoundsError(f"source_index {source_index} out of bounds for source of length {len(source)}")
    if target_index < 0 or target_index >= len(target):
        raise BoundsError(f"target_index {target_index} out of bounds for target of length {len(target)}")
    if block_size < 0:
        raise BoundsError(f"block_size must be non-negative, got {block_size}")
    if source_index + block_size > len(source):
        raise BoundsError(
            f"source indices to be copied are outside bounds: {source_index} + {block_size} > {len(source)}"
        )
    if target_index + block_size > len(target):
        raise BoundsError(
            f"target array is too small to hold result: {target_index} + {block_size} > {len(target)}"
        )


def array_copy(target: np.ndarray, source: np.ndarray, target_index: int, source_index: int,
               block_size: int) -> None:
    """target[t:t+n] = source[s:s+n] (memcpy semantics)."""
    _check_bounds(target, source, target_index, source_index, block_size)
    target[target_index:target_index + block_size] = source[source_index:source_index + block_size]


def sqr(target: np.ndarray, source: np.ndarray, target_index: int, source_index: int,
        block_size: int) -> None:
    """y = x * x + y"""
    _check_bounds(target, source, target_index, source_index, block_size)
    src = source[source_index:source_index + block_size]
    t = slice(target_index, target_index + block_size)
    target[t] = target[t] + np.square(src)


def axpy(target: np.ndarray, source: np.ndarray, target_index: int, source_index: int,
         block_size: int, alpha: float) -> None:
    """y = alpha * x + y"""
    _check_bounds(target, source, target_index, source_index, block_size)
    src = source[source_index:source_index + block_size]
    t = slice(target_index, target_index + block_size)
    target[t] = target[t] + alpha * src


def powx(target: np.ndarray, source: np.ndarray, target_index: int, source_index: int,
         block_size: int, b: float) -> None:
    """y = pow(x, b)"""
    _check_bounds(target, source, target_index, source_index, block_size)
    # float_power so that integer inputs accept negative exponents
    src = source[source_index:source_index + block_size]
    target[target_index:target_index + block_size] = np.float_power(src, b)


def mul(target: np.ndarray, source: np.ndarray, target_index: int, source_index: int,
        block_size: int) -> None:
    """y = x * y"""
    _check_bounds(target, source, target_index, source_index, block_size)
    src = source[source_index:source_index + block_size]
    t = slice(target_index, target_index + block_size)
    target[t] = src * target[t]
