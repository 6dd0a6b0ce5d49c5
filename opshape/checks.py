"""Non-throwing input guards for operator dispatch."""

from __future__ import annotations

from typing import Any, Sequence


def _dims_of(tensor: Any) -> Sequence[int] | None:
    dims = getattr(tensor, "dims", None)
    if dims is None:
        dims = getattr(tensor, "shape", None)
    return dims


def check_inputs_shape(inputs: Sequence[Any] | None, *expected_ranks: int) -> bool:
    """True when inputs[i] has rank expected_ranks[i] for every i.

    Returns False (never raises) on a count or rank mismatch so the caller
    can fall back to another implementation or reject the op.
    """
    if not inputs or len(inputs) != len(expected_ranks):
        return False
    for tensor, rank in zip(inputs, expected_ranks):
        dims = _dims_of(tensor)
        if dims is None or len(dims) != rank:
            return False
    return True
