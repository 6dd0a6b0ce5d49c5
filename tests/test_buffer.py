"""Tests for the host buffer and torch interop."""

import ml_dtypes
import numpy as np
import numpy.testing as npt
import pytest
import torch

from opshape import broadcast
from opshape.buffer import HostBuffer, as_buffer, create_typed_array
from opshape.errors import ShapeError, UnsupportedError
from opshape.shape_util import compute_strides
from opshape.torch_interop import from_torch, to_torch


class TestHostBuffer:
    def test_dims_and_strides(self):
        buf = HostBuffer.from_numpy(np.zeros((2, 3, 4), dtype=np.float32))
        assert buf.dims == [2, 3, 4]
        assert buf.strides == compute_strides([2, 3, 4])

    def test_transposed_view_strides(self):
        buf = HostBuffer.from_numpy(np.zeros((2, 3), dtype=np.float64).T)
        assert buf.dims == [3, 2]
        assert buf.strides == [1, 3]

    def test_get_set_write_through(self):
        arr = np.zeros((2, 2), dtype=np.int32)
        buf = HostBuffer.from_numpy(arr)
        buf.set([1, 0], 7)
        assert buf.get([1, 0]) == 7
        assert arr[1, 0] == 7

    def test_zeros(self):
        buf = HostBuffer.zeros([3, 2], "int32")
        assert buf.dtype == np.int32
        npt.assert_array_equal(buf.to_numpy(), np.zeros((3, 2)))

    def test_zeros_validates_dims(self):
        with pytest.raises(UnsupportedError):
            HostBuffer.zeros([])
        with pytest.raises(ShapeError):
            HostBuffer.zeros([2, 0])

    def test_create_like(self):
        proto = HostBuffer.from_numpy(np.ones(3, dtype=np.float64))
        buf = HostBuffer.create_like(proto, [2, 2])
        assert buf.dtype == np.float64
        assert buf.dims == [2, 2]

    def test_as_buffer(self):
        buf = HostBuffer.zeros([2])
        assert as_buffer(buf) is buf
        assert isinstance(as_buffer(np.zeros(2)), HostBuffer)


class TestCreateTypedArray:
    @pytest.mark.parametrize("name,dtype", [("bool", np.uint8), ("int32", np.int32), ("float32", np.float32)])
    def test_supported(self, name, dtype):
        arr = create_typed_array(name, 5)
        assert arr.dtype == dtype
        assert arr.shape == (5,)

    def test_unsupported(self):
        with pytest.raises(UnsupportedError):
            create_typed_array("string", 5)


class TestTorchInterop:
    def test_float32_round_trip(self):
        t = torch.arange(6, dtype=torch.float32).reshape(2, 3)
        buf = from_torch(t)
        assert buf.dims == [2, 3]
        assert buf.dtype == np.float32
        assert torch.equal(to_torch(buf), t)

    def test_bfloat16_round_trip(self):
        t = torch.tensor([1.0, 2.5, -3.0], dtype=torch.bfloat16)
        buf = from_torch(t)
        assert buf.dtype == np.dtype(ml_dtypes.bfloat16)
        back = to_torch(buf)
        assert back.dtype == torch.bfloat16
        assert torch.equal(back, t)

    def test_broadcast_add_matches_torch(self):
        torch.manual_seed(0)
        a = torch.randn(3, 1, 4)
        b = torch.randn(2, 1)
        c = broadcast.calc(from_torch(a), from_torch(b), lambda x, y: x + y)
        assert c.dims == list((a + b).shape)
        npt.assert_allclose(c.to_numpy(), (a + b).numpy(), rtol=1e-6)
