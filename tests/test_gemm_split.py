"""Tests for Gemm and Split output shapes."""

import pytest
import torch

from opshape.errors import InvalidAttributeError, ShapeError
from opshape.gemm import get_shape_of_gemm_result
from opshape.split import determine_split, split_shape


class TestGemm:
    def test_basic(self):
        assert get_shape_of_gemm_result([2, 3], False, [3, 4], False, [1, 4]) == [2, 4]

    def test_transposed_operands(self):
        assert get_shape_of_gemm_result([3, 2], True, [4, 3], True, [2, 4]) == [2, 4]

    def test_matches_torch_addmm(self):
        a, b, bias = torch.zeros(5, 3), torch.zeros(4, 3), torch.zeros(4)
        expected = torch.addmm(bias, a, b.t()).shape
        assert get_shape_of_gemm_result([5, 3], False, [4, 3], True, [4]) == list(expected)

    @pytest.mark.parametrize("bias", [[], [1], [4], [2, 1], [2, 4]])
    def test_valid_bias(self, bias):
        assert get_shape_of_gemm_result([2, 3], False, [3, 4], False, bias) == [2, 4]

    @pytest.mark.parametrize("bias", [[3], [2], [3, 4], [1, 2, 4]])
    def test_invalid_bias(self, bias):
        with pytest.raises(ShapeError, match="bias"):
            get_shape_of_gemm_result([2, 3], False, [3, 4], False, bias)

    def test_inner_dimension_mismatch(self):
        with pytest.raises(ShapeError, match="mismatch"):
            get_shape_of_gemm_result([2, 3], False, [5, 4], False, [1, 4])

    def test_operands_must_be_2d(self):
        with pytest.raises(ShapeError):
            get_shape_of_gemm_result([2, 3, 4], False, [4, 5], False, [5])

    def test_zero_dimension(self):
        with pytest.raises(ShapeError):
            get_shape_of_gemm_result([0, 3], False, [3, 4], False, [4])


class TestSplit:
    def test_equal_split(self):
        shapes, offsets = split_shape([1, 9, 4], 1, [], 3)
        assert shapes == [[1, 3, 4]] * 3
        assert offsets == [0, 3, 6]

    def test_equal_split_not_divisible(self):
        with pytest.raises(InvalidAttributeError):
            split_shape([1, 10, 4], 1, [], 3)

    def test_num_outputs_required(self):
        with pytest.raises(InvalidAttributeError):
            split_shape([1, 9, 4], 1, [])

    def test_explicit_split(self):
        shapes, offsets = split_shape([1, 9, 4], 1, [2, 7])
        assert shapes == [[1, 2, 4], [1, 7, 4]]
        assert offsets == [0, 2]

    def test_negative_axis(self):
        assert split_shape([1, 9, 4], -2, [2, 7]) == split_shape([1, 9, 4], 1, [2, 7])

    def test_matches_torch_split(self):
        parts = torch.zeros(6, 10).split([3, 2, 5], dim=1)
        shapes, offsets = split_shape([6, 10], 1, [3, 2, 5])
        assert shapes == [list(p.shape) for p in parts]
        assert offsets == [0, 3, 5]

    def test_explicit_split_must_cover_axis(self):
        with pytest.raises(InvalidAttributeError):
            split_shape([1, 9, 4], 1, [2, 6])

    def test_axis_out_of_range(self):
        with pytest.raises(InvalidAttributeError):
            split_shape([1, 9, 4], 3, [], 3)

    def test_input_dims_not_mutated(self):
        dims = [1, 9, 4]
        split_shape(dims, 1, [], 3)
        assert dims == [1, 9, 4]

    def test_determine_split(self):
        assert determine_split(12, 4) == [3, 3, 3, 3]
