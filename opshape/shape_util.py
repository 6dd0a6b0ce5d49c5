"""Shape and stride arithmetic: sizes, strides, offsets, reshape and transpose helpers.

All shapes are row-major (last dimension fastest). Every function returns a
fresh list; only increment_index() mutates its argument.
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Sequence

from opshape.errors import InvalidAttributeError, ShapeError, UnsupportedError
from opshape.limits import DEFAULT_LIMITS, ShapeLimits

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_dims(dims: Sequence[int], limits: ShapeLimits = DEFAULT_LIMITS) -> None:
    """Raise unless dims is a supported tensor shape.

    Rank 0 (scalar) raises UnsupportedError. A rank above limits.max_rank, or
    a dimension that is not a positive integer <= limits.max_dim, raises
    ShapeError.
    """
    rank = len(dims)
    if rank == 0:
        raise UnsupportedError("Scalar tensor is not implemented yet")
    if rank < limits.min_rank or rank > limits.max_rank:
        raise ShapeError(
            f"Only rank {limits.min_rank} to {limits.max_rank} is supported for tensor shape, got {rank}"
        )

    for n in dims:
        if isinstance(n, bool) or not isinstance(n, Integral):
            raise ShapeError(f"Invalid shape: {n!r} is not an integer")
        if n <= 0 or n > limits.max_dim:
            raise ShapeError(f"Invalid shape: length {n} is not allowed")


def validate_equal_dims(dims_list: Sequence[Sequence[int]]) -> None:
    """Raise ShapeError unless at least two shapes are given and all are identical."""
    if len(dims_list) < 2:
        raise ShapeError("must contain at least 2 shapes to compare equality")

    base = dims_list[0]
    for dims in dims_list[1:]:
        if len(dims) != len(base):
            raise ShapeError(f"rank is not the same for given input shapes: {list(base)} vs {list(dims)}")
        if not are_equal(base, dims):
            raise ShapeError(f"input shapes are not the same: {list(base)} vs {list(dims)}")


# ---------------------------------------------------------------------------
# Sizes
# ---------------------------------------------------------------------------

def size(dims: Sequence[int]) -> int:
    return size_from_dimension_range(dims, 0, len(dims))


def size_from_dimension(dims: Sequence[int], axis: int) -> int:
    """Product of dims[axis:]."""
    if axis > len(dims):
        raise ShapeError(
            f"invalid dimension of {axis} for size_from_dimension as tensor has {len(dims)} dimensions"
        )
    return size_from_dimension_range(dims, axis, len(dims))


def size_to_dimension(dims: Sequence[int], axis: int) -> int:
    """Product of dims[:axis]."""
    if axis > len(dims):
        raise ShapeError(
            f"invalid dimension of {axis} for size_to_dimension as tensor has {len(dims)} dimensions"
        )
    return size_from_dimension_range(dims, 0, axis)


def size_from_dimension_range(dims: Sequence[int], start: int, end: int) -> int:
    result = 1
    for i in range(start, end):
        if dims[i] <= 0:
            raise ShapeError(
                f"cannot get valid size from dimension range [{start}, {end}) of {list(dims)}: "
                "range contains 0 or negative values"
            )
        result *= dims[i]
    return result


# ---------------------------------------------------------------------------
# Strides, offsets, indices
# ---------------------------------------------------------------------------

def compute_strides(shape: Sequence[int]) -> list[int]:
    """Row-major element strides. Rank < 2 yields [1]."""
    rank = len(shape)
    if rank < 2:
        return [1]

    strides = [0] * rank
    strides[rank - 1] = 1
    strides[rank - 2] = shape[rank - 1]
    for i in range(rank - 3, -1, -1):
        strides[i] = strides[i + 1] * shape[i + 1]
    return strides


def compute_offset(index: Sequence[int], strides: Sequence[int], axis: int | None = None) -> int:
    """Offset contributed by the first `axis` coordinates (all of them when axis is None)."""
    if axis is None:
        axis = len(index)
    return sum(index[i] * strides[i] for i in range(axis))


def indices_to_offset(indices: Sequence[int], strides: Sequence[int]) -> int:
    if len(strides) == 0:
        return 0
    # innermost stride is always 1
    offset = indices[-1]
    for i in range(len(indices) - 1):
        offset += strides[i] * indices[i]
    return offset


def offset_to_indices(offset: int, strides: Sequence[int]) -> list[int]:
    rank = len(strides)
    if rank == 0:
        return []
    if rank == 1:
        return [offset]

    indices = [0] * rank
    for i in range(rank - 1):
        indices[i] = offset // strides[i]
        offset -= indices[i] * strides[i]
    indices[rank - 1] = offset
    return indices


def get_actual_axis_from_negative_value(axis: int, tensor_rank: int) -> int:
    """Map a possibly negative axis into [0, tensor_rank).

    Raises InvalidAttributeError for axis outside [-tensor_rank, tensor_rank - 1].
    """
    if axis < -tensor_rank or axis > tensor_rank - 1:
        raise InvalidAttributeError(f"unsupported axis {axis} for a tensor of rank {tensor_rank}")
    return axis + tensor_rank if axis < 0 else axis


def increment_index(index: list[int], dims: Sequence[int], axis_to_increment_on: int | None = None) -> None:
    """Advance index in place in lexicographic order, wrapping within dims.

    Only the first `axis_to_increment_on` coordinates take part; the carry
    propagates from the rightmost of them towards axis 0.
    """
    if axis_to_increment_on is None:
        axis_to_increment_on = len(dims)

    for k in range(axis_to_increment_on - 1, -1, -1):
        index[k] += 1
        if index[k] < dims[k]:
            break
        index[k] = 0


# ---------------------------------------------------------------------------
# Reshape / transpose / pad
# ---------------------------------------------------------------------------

def calculate_reshaped_dims(original_dims: Sequence[int], shape_hints: Sequence[int]) -> list[int]:
    """Resolve a Reshape target shape.

    A hint of 0 copies the original dimension at that position, a single -1
    is inferred from the remaining size. Examples:
        [2, 2] with [0, -1] -> [2, 2]
        [2, 2] with [4]     -> [4]
        [2, 2] with [5]     -> InvalidAttributeError
    """
    n_dims = len(shape_hints)
    reshaped = [0] * n_dims
    unknown_dimension = -1
    known_size = 1

    for i, hint in enumerate(shape_hints):
        if hint < -1:
            raise InvalidAttributeError(f"a dimension cannot be less than -1, got {hint}")
        if hint == -1:
            if unknown_dimension != -1:
                raise InvalidAttributeError("at most one dimension can be -1")
            unknown_dimension = i
            continue
        if hint == 0:
            if i >= len(original_dims):
                raise InvalidAttributeError(
                    f"the dimension with value zero at {i} exceeds the rank of the input tensor ({len(original_dims)})"
                )
            reshaped[i] = original_dims[i]
        else:
            reshaped[i] = hint
        known_size *= reshaped[i]

    original_size = size(original_dims)
    if unknown_dimension != -1:
        if original_size % known_size != 0:
            raise InvalidAttributeError(
                f"the input tensor cannot be reshaped to the requested shape. "
                f"Input shape: {list(original_dims)} Output shape: {list(shape_hints)}"
            )
        reshaped[unknown_dimension] = original_size // known_size
        logger.debug("reshape %s with %s inferred dim %d = %d",
                     list(original_dims), list(shape_hints), unknown_dimension, reshaped[unknown_dimension])
    elif known_size != original_size:
        raise InvalidAttributeError(
            f"the input tensor cannot be reshaped to the requested shape. "
            f"Input shape: {list(original_dims)} Output shape: {list(shape_hints)}"
        )
    return reshaped


def sort_based_on_perm(a: Sequence[int], perm: Sequence[int] | None = None) -> list[int]:
    """Permute `a` by `perm` (Transpose); reverse it when no perm is given."""
    if perm is not None:
        return [a[v] for v in perm]
    return list(reversed(a))


def pad_shape(dims: Sequence[int], pad: Sequence[int]) -> list[int]:
    """Grow every dim by its head and tail pad: pad is [heads..., tails...]."""
    rank = len(dims)
    return [v + pad[i] + pad[i + rank] for i, v in enumerate(dims)]


def are_equal(shape1: Sequence[int], shape2: Sequence[int]) -> bool:
    if len(shape1) != len(shape2):
        return False
    return all(a == b for a, b in zip(shape1, shape2))


def split_dims_into_two(dims: Sequence[int], pick: int) -> tuple[list[int], list[int]]:
    """Return ([dims[pick]], the other dims in order)."""
    picked: list[int] = []
    remnants: list[int] = []
    for i, d in enumerate(dims):
        if i == pick:
            picked.append(d)
        else:
            remnants.append(d)
    return picked, remnants
