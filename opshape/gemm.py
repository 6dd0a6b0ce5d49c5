"""Output shape of Gemm: Y = alpha * op(A) @ op(B) + beta * C."""

from __future__ import annotations

from typing import Sequence

from opshape.broadcast import is_valid_broadcast
from opshape.errors import ShapeError


def get_shape_of_gemm_result(
    left_shape: Sequence[int],
    trans_left: bool,
    right_shape: Sequence[int],
    trans_right: bool,
    bias_shape: Sequence[int],
) -> list[int]:
    """Return [M, N] for op(A) [M, K] x op(B) [K, N].

    Raises ShapeError if an operand is not 2-D, the contracted dimensions
    differ, M/N/K is not positive, or the bias cannot broadcast to [M, N].
    """
    if len(left_shape) != 2 or len(right_shape) != 2:
        raise ShapeError(f"gemm operands need to be 2-D, got {list(left_shape)} and {list(right_shape)}")

    if trans_left:
        K, M = left_shape
    else:
        M, K = left_shape

    if trans_right:
        N, k_right = right_shape
    else:
        k_right, N = right_shape

    if k_right != K:
        raise ShapeError(
            f"gemm dimension mismatch: {list(left_shape)} (trans={trans_left}) x "
            f"{list(right_shape)} (trans={trans_right})"
        )

    if M <= 0 or N <= 0 or K <= 0:
        raise ShapeError(f"invalid gemm shape specified: M={M}, N={N}, K={K}")

    if not is_valid_broadcast(bias_shape, [M, N]):
        raise ShapeError(f"gemm: invalid bias shape {list(bias_shape)} for broadcast to {[M, N]}")

    return [M, N]
