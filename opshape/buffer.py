"""Tensor buffer abstraction with a numpy-backed host implementation.

The shape layer only needs five things from a tensor: its dims, its strides,
typed element get/set by multi-index, and a way to allocate a new buffer of
a given dtype and shape. TensorBuffer names exactly those; HostBuffer backs
them with a numpy array.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

import ml_dtypes  # noqa: F401  registers bfloat16 with numpy
import numpy as np

from opshape.errors import UnsupportedError
from opshape.limits import DEFAULT_LIMITS, ShapeLimits
from opshape.shape_util import validate_dims


class TensorBuffer(ABC):
    """Typed, strided, shape-tagged numeric buffer."""

    @property
    @abstractmethod
    def dims(self) -> list[int]:
        ...

    @property
    @abstractmethod
    def strides(self) -> list[int]:
        """Element (not byte) strides, one per dimension."""
        ...

    @property
    @abstractmethod
    def dtype(self) -> np.dtype:
        ...

    @abstractmethod
    def get(self, indices: Sequence[int]) -> Any:
        ...

    @abstractmethod
    def set(self, indices: Sequence[int], value: Any) -> None:
        ...

    @abstractmethod
    def to_numpy(self) -> np.ndarray:
        ...


class HostBuffer(TensorBuffer):
    """TensorBuffer over an in-memory numpy array.

    The array is held by reference: set() writes through to the array passed
    to from_numpy().
    """

    def __init__(self, data: np.ndarray):
        self._data = data

    @property
    def dims(self) -> list[int]:
        return list(self._data.shape)

    @property
    def strides(self) -> list[int]:
        itemsize = self._data.dtype.itemsize
        return [s // itemsize for s in self._data.strides]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def size(self) -> int:
        return int(self._data.size)

    def get(self, indices: Sequence[int]) -> Any:
        return self._data[tuple(indices)]

    def set(self, indices: Sequence[int], value: Any) -> None:
        self._data[tuple(indices)] = value

    def to_numpy(self) -> np.ndarray:
        return self._data

    @staticmethod
    def from_numpy(data: np.ndarray) -> HostBuffer:
        return HostBuffer(np.asarray(data))

    @staticmethod
    def zeros(
        dims: Sequence[int],
        dtype: np.dtype | str = np.dtype(np.float32),
        limits: ShapeLimits = DEFAULT_LIMITS,
    ) -> HostBuffer:
        """Allocate a zero-filled buffer. dims must pass validate_dims()."""
        validate_dims(dims, limits)
        return HostBuffer(np.zeros(tuple(dims), dtype=np.dtype(dtype)))

    @staticmethod
    def create_like(proto: TensorBuffer, dims: Sequence[int]) -> HostBuffer:
        """New zero-filled buffer with proto's dtype and the given dims."""
        return HostBuffer.zeros(dims, proto.dtype)

    def __repr__(self) -> str:
        return f"HostBuffer(dims={self.dims}, dtype={self.dtype})"


def as_buffer(x: TensorBuffer | np.ndarray) -> TensorBuffer:
    """Pass TensorBuffers through, wrap anything array-like in a HostBuffer."""
    if isinstance(x, TensorBuffer):
        return x
    return HostBuffer.from_numpy(x)


_TYPED_ARRAY_DTYPES = {
    "bool": np.dtype(np.uint8),
    "int32": np.dtype(np.int32),
    "float32": np.dtype(np.float32),
}


def create_typed_array(type_name: str, size: int) -> np.ndarray:
    """Flat zero-filled array for an operator element type name.

    bool tensors are stored one byte per element.
    """
    dtype = _TYPED_ARRAY_DTYPES.get(type_name)
    if dtype is None:
        raise UnsupportedError(f"Unsupported type: {type_name}. Supported: {sorted(_TYPED_ARRAY_DTYPES)}")
    return np.zeros(size, dtype=dtype)
