"""
Tests for shape arithmetic.

These tests verify:
    - element counting and shape validation
    - row-major sub2ind and its inverse ind2sub
    - out-of-bounds and rank errors (never clamping)
"""

import itertools

import pytest
from tensorplus.errors import ShapeError, ShapeErrorKind, TensorIndexError
from tensorplus.shape_math import element_count, ind2sub, strides, sub2ind, validate_shape


class TestElementCount:
    """Test element_count."""

    def test_product_of_shape(self):
        assert element_count([2, 3, 4]) == 24

    def test_empty_shape_counts_one(self):
        assert element_count([]) == 1


class TestValidateShape:
    """Test validate_shape."""

    def test_accepts_positive_shape(self):
        validate_shape([1, 5, 2])

    @pytest.mark.parametrize("shape", [[], [0], [2, 0], [3, -1], [2.5], [True, 2]])
    def test_rejects_invalid_shapes(self, shape):
        with pytest.raises(ShapeError) as exc:
            validate_shape(shape)
        assert exc.value.kind == ShapeErrorKind.NON_POSITIVE_DIMENSION


class TestSub2Ind:
    """Test subscript -> linear offset conversion."""

    def test_row_major_order(self):
        """Last dimension varies fastest."""
        assert sub2ind([0, 0], [2, 3]) == 0
        assert sub2ind([0, 2], [2, 3]) == 2
        assert sub2ind([1, 0], [2, 3]) == 3
        assert sub2ind([1, 2], [2, 3]) == 5

    def test_strides(self):
        assert strides([2, 3, 4]) == (12, 4, 1)
        assert strides([7]) == (1,)

    def test_bijection_onto_offsets(self):
        """Every coordinate maps to a distinct offset covering [0, count)."""
        shape = [2, 3, 4]
        offsets = [sub2ind(c, shape) for c in itertools.product(*(range(d) for d in shape))]
        assert offsets == list(range(element_count(shape)))

    def test_round_trip_with_ind2sub(self):
        shape = (3, 1, 4, 2)
        for coords in itertools.product(*(range(d) for d in shape)):
            assert ind2sub(sub2ind(coords, shape), shape) == coords

    def test_rank_mismatch(self):
        with pytest.raises(TensorIndexError):
            sub2ind([1, 2, 0], [2, 3])

    @pytest.mark.parametrize("coords", [[2, 0], [0, 3], [-1, 0]])
    def test_out_of_bounds(self, coords):
        with pytest.raises(TensorIndexError):
            sub2ind(coords, [2, 3])

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            sub2ind([5], [2])


class TestInd2Sub:
    """Test linear offset -> subscripts conversion."""

    def test_decompose(self):
        assert ind2sub(5, [2, 3]) == (1, 2)
        assert ind2sub(0, [4]) == (0,)

    @pytest.mark.parametrize("index", [-1, 6])
    def test_out_of_bounds(self, index):
        with pytest.raises(TensorIndexError):
            ind2sub(index, [2, 3])
