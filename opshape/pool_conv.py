"""Kernel/stride/pad normalization and output shapes for pooling and convolution.

Attribute vectors follow the ONNX layout:
    kernel_shape: one entry per spatial axis
    strides:      one entry per spatial axis
    pads:         [head_0, ..., head_{n-1}, tail_0, ..., tail_{n-1}]

adjust_pool_attributes() and adjust_pads_based_on_auto_pad() mutate the
caller's lists in place, and compute_pool_output_shape() and
compute_conv_output_shape() rewrite pads for auto-pad modes, so callers must
pass lists they own. All four validate every axis before the first write.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from opshape.errors import InvalidAttributeError, ShapeError

logger = logging.getLogger(__name__)


class AutoPad(str, Enum):
    """Implicit padding policy (deprecated in ONNX, still used by legacy models)."""

    NOTSET = "NOTSET"
    VALID = "VALID"
    SAME_UPPER = "SAME_UPPER"
    SAME_LOWER = "SAME_LOWER"


def _parse_auto_pad(auto_pad: str | None) -> AutoPad | None:
    """None for unset padding, the AutoPad member otherwise."""
    if not auto_pad:
        return None
    try:
        mode = AutoPad(auto_pad)
    except ValueError:
        raise InvalidAttributeError(f"Unsupported AutoPad type: {auto_pad}") from None
    return None if mode == AutoPad.NOTSET else mode


# ---------------------------------------------------------------------------
# Attribute normalization
# ---------------------------------------------------------------------------

def adjust_pool_attributes(
    is_global_operator: bool,
    input_dims: Sequence[int],
    kernel_shape: list[int],
    strides: list[int],
    pads: list[int],
) -> None:
    """Bring kernel_shape, strides and pads to the input's spatial rank.

    Global pooling overwrites the kernel with the spatial extents of the
    input. Missing strides default to 1, missing pads to 0.
    """
    spatial_rank = len(input_dims) - 2
    if not is_global_operator and len(kernel_shape) != spatial_rank:
        raise InvalidAttributeError(
            f"length of specified kernel shapes should be 2 less than length of input dimensions "
            f"(kernel_shape={list(kernel_shape)}, input_dims={list(input_dims)})"
        )

    new_kernel = list(kernel_shape)
    if is_global_operator:
        for dim in range(spatial_rank):
            if dim >= len(new_kernel):
                new_kernel.append(input_dims[dim + 2])
            else:
                new_kernel[dim] = input_dims[dim + 2]
    kernel_rank = len(new_kernel)

    for s in strides[:kernel_rank]:
        if s < 1:
            raise InvalidAttributeError(f"strides should be greater than or equal to 1, got {list(strides)}")
    new_strides = list(strides) + [1] * (kernel_rank - len(strides))

    for p in pads[:kernel_rank * 2]:
        if p < 0:
            raise InvalidAttributeError(f"pads should be greater than or equal to 0, got {list(pads)}")
    new_pads = list(pads) + [0] * (kernel_rank * 2 - len(pads))

    for dim in range(kernel_rank):
        if new_kernel[dim] <= 0:
            raise InvalidAttributeError(f"kernel shapes need to be greater than 0, got {new_kernel}")
        if new_pads[dim] >= new_kernel[dim] or new_pads[dim + kernel_rank] >= new_kernel[dim]:
            raise InvalidAttributeError(f"pads should be smaller than kernel (pads={new_pads}, kernel={new_kernel})")

    kernel_shape[:] = new_kernel
    strides[:] = new_strides
    pads[:] = new_pads


def adjust_pads_based_on_auto_pad(
    input_dims: Sequence[int],
    strides: Sequence[int],
    kernel_shape: Sequence[int],
    pads: list[int],
    auto_pad: str | None = None,
) -> None:
    """Recompute pads in place from auto_pad. No-op when auto_pad is unset."""
    mode = _parse_auto_pad(auto_pad)
    if mode is None:
        return

    spatial_rank = len(input_dims) - 2
    _check_spatial_attributes(spatial_rank, strides, kernel_shape, pads)
    new_pads = list(pads)
    for dim in range(spatial_rank):
        head, tail, _ = _pad_and_output_extent(
            input_dims[dim + 2], strides[dim], kernel_shape[dim], pads[dim], pads[dim + spatial_rank], mode
        )
        new_pads[dim], new_pads[dim + spatial_rank] = head, tail
    pads[:] = new_pads


# ---------------------------------------------------------------------------
# Output shapes
# ---------------------------------------------------------------------------

def compute_pool_output_shape(
    is_global_operator: bool,
    input_dims: Sequence[int],
    strides: Sequence[int],
    kernel_shape: Sequence[int],
    pads: list[int],
    auto_pad: str | None = None,
) -> list[int]:
    """Output shape [N, C, *spatial] of a pooling op. pads are updated for auto_pad."""
    if len(input_dims) < 2:
        raise ShapeError(f"input shape must have batch and channel dimensions, got {list(input_dims)}")

    output_dims = [input_dims[0], input_dims[1]]
    _compute_shape_helper(is_global_operator, input_dims, output_dims, strides, kernel_shape, pads, auto_pad)
    return output_dims


def compute_conv_output_shape(
    input_dims: Sequence[int],
    filter_dims: Sequence[int],
    strides: Sequence[int],
    kernel_shape: Sequence[int],
    pads: list[int],
    auto_pad: str | None = None,
) -> list[int]:
    """Output shape [N, M, *spatial] of Conv, M = filter_dims[0]. pads are updated for auto_pad."""
    if len(input_dims) < 2 or len(filter_dims) == 0:
        raise ShapeError(
            f"invalid input tensor dims {list(input_dims)} or invalid filter tensor dims {list(filter_dims)}"
        )

    output_dims = [input_dims[0], filter_dims[0]]
    _compute_shape_helper(False, input_dims, output_dims, strides, kernel_shape, pads, auto_pad)
    return output_dims


def _check_spatial_attributes(
    spatial_rank: int,
    strides: Sequence[int],
    kernel_shape: Sequence[int],
    pads: Sequence[int],
) -> None:
    if len(pads) != 2 * spatial_rank:
        raise InvalidAttributeError("length of pads should be twice the length of data dimensions")
    if len(strides) != spatial_rank:
        raise InvalidAttributeError("length of strides should be the length of data dimensions")
    if len(kernel_shape) != spatial_rank:
        raise InvalidAttributeError("length of kernel shapes should be the length of data dimensions")
    if any(s < 1 for s in strides):
        raise InvalidAttributeError(f"strides should be greater than or equal to 1, got {list(strides)}")


def _compute_shape_helper(
    is_global_operator: bool,
    input_dims: Sequence[int],
    output_dims: list[int],
    strides: Sequence[int],
    kernel_shape: Sequence[int],
    pads: list[int],
    auto_pad: str | None,
) -> None:
    """Append the spatial output dims to output_dims; pads are written only on success."""
    spatial_rank = len(input_dims) - 2
    if is_global_operator:
        output_dims.extend([1] * spatial_rank)
        return

    mode = _parse_auto_pad(auto_pad)
    _check_spatial_attributes(spatial_rank, strides, kernel_shape, pads)

    new_pads = list(pads)
    spatial: list[int] = []
    for dim in range(spatial_rank):
        head, tail, out = _pad_and_output_extent(
            input_dims[dim + 2], strides[dim], kernel_shape[dim], pads[dim], pads[dim + spatial_rank], mode
        )
        if out <= 0:
            raise ShapeError(
                f"kernel {kernel_shape[dim]} does not fit input extent {input_dims[dim + 2]} "
                f"on spatial axis {dim} (pads=({head}, {tail}), stride={strides[dim]})"
            )
        new_pads[dim], new_pads[dim + spatial_rank] = head, tail
        spatial.append(out)

    pads[:] = new_pads
    output_dims.extend(spatial)


def _pad_and_output_extent(
    in_size: int,
    stride: int,
    kernel: int,
    pad_head: int,
    pad_tail: int,
    mode: AutoPad | None,
) -> tuple[int, int, int]:
    """(pad_head, pad_tail, output extent) along one spatial axis.

    Without an auto-pad mode the given pads are returned unchanged.
    """
    if mode is None:
        return pad_head, pad_tail, (in_size + pad_head + pad_tail - kernel) // stride + 1

    if mode == AutoPad.VALID:
        return 0, 0, (in_size - kernel) // stride + 1

    target_size = -(-in_size // stride)
    pad_needed = max(0, (target_size - 1) * stride + kernel - in_size)
    if mode == AutoPad.SAME_LOWER:
        head = (pad_needed + 1) // 2
    else:
        head = pad_needed // 2
    logger.debug("%s: in=%d stride=%d kernel=%d -> pads (%d, %d)",
                 mode.value, in_size, stride, kernel, head, pad_needed - head)
    return head, pad_needed - head, (in_size + pad_needed - kernel) // stride + 1
