"""NumPy-style broadcasting: shape resolution, index mapping, elementwise apply.

Incompatible shapes are an expected outcome here, so the queries return None
instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import numpy as np

from opshape.buffer import HostBuffer, TensorBuffer, as_buffer
from opshape.shape_util import size

logger = logging.getLogger(__name__)


def calc_shape(a_dims: Sequence[int], b_dims: Sequence[int], is_mat_mul: bool = False) -> list[int] | None:
    """Shape of broadcasting a with b, or None if they are not broadcastable.

    With is_mat_mul the trailing two axes follow the matmul rule and only the
    leading (batch) axes are broadcast.
    """
    a_rank = len(a_dims)
    b_rank = len(b_dims)
    c_rank = max(a_rank, b_rank)
    c_dims = [0] * c_rank

    if is_mat_mul:
        if a_rank < 2 or b_rank < 2:
            return None
        mm = calc_mat_mul_shape(
            (a_dims[a_rank - 2], a_dims[a_rank - 1]),
            (b_dims[b_rank - 2], b_dims[b_rank - 1]),
        )
        if mm is None:
            logger.debug("matmul shapes %s x %s: inner dims differ", list(a_dims), list(b_dims))
            return None
        c_dims[c_rank - 2], c_dims[c_rank - 1] = mm

    for i in range(3 if is_mat_mul else 1, c_rank + 1):
        a_len = 1 if a_rank - i < 0 else a_dims[a_rank - i]
        b_len = 1 if b_rank - i < 0 else b_dims[b_rank - i]

        if a_len != b_len and a_len > 1 and b_len > 1:
            logger.debug("shapes %s and %s are not broadcastable", list(a_dims), list(b_dims))
            return None
        c_dims[c_rank - i] = max(a_len, b_len)

    return c_dims


def calc_mat_mul_shape(a: Sequence[int], b: Sequence[int]) -> list[int] | None:
    """[M, K] x [K, N] -> [M, N]; None when the inner dimensions differ."""
    if a[1] != b[0]:
        return None
    return [a[0], b[1]]


def index(indices: Sequence[int], shape_origin: Sequence[int], is_mat_mul: bool = False) -> list[int]:
    """Map indices of the broadcast result back into an operand of shape_origin.

    indices must be valid for the broadcast shape. Under matmul the last two
    coordinates are returned unchanged.
    """
    dim_offset = len(indices) - len(shape_origin)
    indices_origin = list(indices[dim_offset:])
    dim_len = len(indices_origin) - 2 if is_mat_mul else len(indices_origin)
    for i in range(dim_len):
        indices_origin[i] = indices[dim_offset + i] % shape_origin[i]
    return indices_origin


def calc(
    a: TensorBuffer | np.ndarray,
    b: TensorBuffer | np.ndarray,
    op: Callable[[Any, Any], Any],
) -> HostBuffer | None:
    """Apply the scalar binary op elementwise with broadcasting.

    The result has a's dtype. Returns None (and allocates nothing) if the
    shapes are not broadcastable.
    """
    a = as_buffer(a)
    b = as_buffer(b)
    a_dims = a.dims
    b_dims = b.dims
    shape = calc_shape(a_dims, b_dims)
    if shape is None:
        return None

    c = HostBuffer.create_like(a, shape)
    total = size(shape)
    rank = len(shape)
    indices = [0] * rank
    for i in range(total):
        rest = i
        for j in range(rank - 1, -1, -1):
            indices[j] = rest % shape[j]
            rest //= shape[j]

        value = op(a.get(index(indices, a_dims)), b.get(index(indices, b_dims)))
        c.set(indices, value)

    return c


def is_valid_broadcast(shape: Sequence[int], final_shape: Sequence[int]) -> bool:
    """True if shape broadcasts unidirectionally into final_shape."""
    input_rank = len(shape)
    final_rank = len(final_shape)
    if input_rank > final_rank:
        return False
    for i in range(1, input_rank + 1):
        if shape[input_rank - i] != 1 and shape[input_rank - i] != final_shape[final_rank - i]:
            return False
    return True
