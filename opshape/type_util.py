"""Element type consistency checks across operator inputs."""

from __future__ import annotations

from typing import Sequence

import ml_dtypes  # noqa: F401  registers bfloat16 with numpy
import numpy as np

from opshape.errors import TypeMismatchError


def validate_same_types(types: Sequence[np.dtype | str | type]) -> None:
    """Raise TypeMismatchError unless at least two types are given and all are equal.

    Entries go through numpy.dtype, so "float32", np.float32 and
    np.dtype("float32") compare equal.
    """
    if len(types) < 2:
        raise TypeMismatchError("must contain at least 2 types to compare equality")

    normalized = [np.dtype(t) for t in types]
    base = normalized[0]
    for i, t in enumerate(normalized):
        if t != base:
            raise TypeMismatchError(f"input types are not the same: input {i} is {t}, expected {base}")
