"""Conversion between torch.Tensor and HostBuffer.

numpy has no native bfloat16. bfloat16 tensors cross the boundary as a
uint16 reinterpretation and come out as ml_dtypes.bfloat16 arrays.
"""

from __future__ import annotations

import ml_dtypes
import numpy as np
import torch

from opshape.buffer import HostBuffer, TensorBuffer


def from_torch(t: torch.Tensor) -> HostBuffer:
    """Copy a torch tensor into a HostBuffer, handling bfloat16."""
    t = t.detach().cpu()
    if t.dtype == torch.bfloat16:
        return HostBuffer(t.view(torch.uint16).numpy().view(ml_dtypes.bfloat16).copy())
    return HostBuffer(t.numpy().copy())


def to_torch(buf: TensorBuffer | np.ndarray) -> torch.Tensor:
    """Copy a buffer (or numpy array) into a torch tensor, handling bfloat16."""
    arr = buf.to_numpy() if isinstance(buf, TensorBuffer) else np.asarray(buf)
    if arr.dtype == ml_dtypes.bfloat16:
        return torch.from_numpy(arr.view(np.uint16).copy()).view(torch.bfloat16)
    return torch.from_numpy(np.ascontiguousarray(arr).copy())
