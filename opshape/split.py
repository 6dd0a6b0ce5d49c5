"""Output shapes of Split."""

from __future__ import annotations

from typing import Sequence

from opshape.errors import InvalidAttributeError
from opshape.shape_util import get_actual_axis_from_negative_value


def split_shape(
    dims: Sequence[int],
    axis: int,
    split: Sequence[int],
    num_outputs: int | None = None,
) -> tuple[list[list[int]], list[int]]:
    """Split dims along axis.

    Args:
        dims: Shape of the tensor being split.
        axis: Axis to split along; negative values count from the end.
        split: Size of each output along axis. When empty, dims[axis] is
            divided equally into num_outputs parts.
        num_outputs: Number of outputs, required when split is empty.

    Returns:
        (shapes, offsets): one shape per output, and the start offset of each
        output along axis.
    """
    axis = get_actual_axis_from_negative_value(axis, len(dims))

    if len(split) == 0:
        if not num_outputs:
            raise InvalidAttributeError(
                "need to know number of outputs when the 'split' attribute is not specified"
            )
        split = determine_split(dims[axis], num_outputs)
    elif sum(split) != dims[axis]:
        raise InvalidAttributeError(
            f"split sizes {list(split)} do not add up to dimension {dims[axis]} of axis {axis}"
        )

    shapes: list[list[int]] = []
    offsets = [0]
    for i, part in enumerate(split):
        if i != 0:
            offsets.append(offsets[i - 1] + split[i - 1])
        shape = list(dims)
        shape[axis] = part
        shapes.append(shape)
    return shapes, offsets


def determine_split(num_elements_along_axis: int, num_outputs: int) -> list[int]:
    """Equal partition of num_elements_along_axis into num_outputs parts."""
    if num_elements_along_axis % num_outputs != 0:
        raise InvalidAttributeError(
            f"cannot split {num_elements_along_axis} elements into {num_outputs} equal sized parts"
        )
    return [num_elements_along_axis // num_outputs] * num_outputs
