"""Tests for dtype consistency and the non-throwing rank guard."""

import ml_dtypes
import numpy as np
import pytest

from opshape.buffer import HostBuffer
from opshape.checks import check_inputs_shape
from opshape.errors import TypeMismatchError
from opshape.type_util import validate_same_types


class TestValidateSameTypes:
    def test_equal_types(self):
        validate_same_types(["float32", np.float32, np.dtype("float32")])

    def test_bfloat16_names(self):
        validate_same_types(["bfloat16", ml_dtypes.bfloat16])

    def test_needs_two_entries(self):
        with pytest.raises(TypeMismatchError, match="at least 2"):
            validate_same_types(["float32"])

    def test_mismatch(self):
        with pytest.raises(TypeMismatchError):
            validate_same_types(["float32", "float32", "int32"])

    def test_mismatch_is_type_error(self):
        with pytest.raises(TypeError):
            validate_same_types([np.int32, np.int64])


class _Tensor:
    def __init__(self, dims):
        self.dims = dims


class TestCheckInputsShape:
    def test_matching_ranks(self):
        assert check_inputs_shape([_Tensor([2, 3]), _Tensor([4])], 2, 1)

    def test_numpy_arrays_and_buffers(self):
        inputs = [np.zeros((2, 3)), HostBuffer.from_numpy(np.zeros((1, 2, 3)))]
        assert check_inputs_shape(inputs, 2, 3)

    def test_rank_mismatch(self):
        assert not check_inputs_shape([_Tensor([2, 3]), _Tensor([4])], 2, 2)

    def test_count_mismatch(self):
        assert not check_inputs_shape([_Tensor([2, 3])], 2, 1)

    def test_no_inputs(self):
        assert not check_inputs_shape(None, 2)
        assert not check_inputs_shape([], 2)

    def test_input_without_dims(self):
        assert not check_inputs_shape([object()], 1)
