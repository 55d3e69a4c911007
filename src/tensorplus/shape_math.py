"""
Shape arithmetic for row-major tensors.

Pure functions only:
    - element_count: number of elements described by a shape
    - validate_shape: reject empty or non-positive shapes
    - strides: row-major weight of every dimension
    - sub2ind / ind2sub: subscripts <-> linear storage offset

Row-major means the LAST dimension varies fastest. For shape (2, 3):

    (0, 0) -> 0    (0, 1) -> 1    (0, 2) -> 2
    (1, 0) -> 3    (1, 1) -> 4    (1, 2) -> 5

Out-of-range input is always an error. Nothing here clamps.
"""

from typing import Sequence, Tuple

from tensorplus.errors import ShapeError, ShapeErrorKind, TensorIndexError


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def element_count(shape: Sequence[int]) -> int:
    """Product of the shape entries (1 for an empty shape)."""
    count = 1
    for dim in shape:
        count *= dim
    return count


def validate_shape(shape: Sequence[int]) -> None:
    """
    Check that a shape can describe a tensor.

    Args:
        shape: Number of elements along each dimension

    Raises:
        ShapeError: NON_POSITIVE_DIMENSION if the shape is empty or any
            entry is not a positive integer
    """
    if len(shape) == 0:
        raise ShapeError(
            ShapeErrorKind.NON_POSITIVE_DIMENSION,
            "Tensor shape must have at least one dimension",
        )
    bad = [dim for dim in shape if not _is_int(dim) or dim <= 0]
    if bad:
        raise ShapeError(
            ShapeErrorKind.NON_POSITIVE_DIMENSION,
            f"Tensor dimensions must all be positive integers, got {tuple(shape)}",
        )


def strides(shape: Sequence[int]) -> Tuple[int, ...]:
    """Row-major weight of each dimension: product of all later entries."""
    weights = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        weights[i] = weights[i + 1] * shape[i + 1]
    return tuple(weights)


def sub2ind(subscripts: Sequence[int], shape: Sequence[int]) -> int:
    """
    Convert per-dimension subscripts to a row-major linear offset.

    Args:
        subscripts: One coordinate per dimension
        shape: Tensor shape

    Returns:
        Linear offset into the element buffer

    Raises:
        TensorIndexError: If the rank differs from the shape, or any
            coordinate lies outside [0, shape[i])
    """
    if len(subscripts) != len(shape):
        raise TensorIndexError(
            f"Expected {len(shape)} subscripts for shape {tuple(shape)}, got {len(subscripts)}"
        )

    index = 0
    for i, (sub, dim, weight) in enumerate(zip(subscripts, shape, strides(shape))):
        if not _is_int(sub):
            raise TensorIndexError(f"Subscript {sub!r} in dimension {i} is not an integer")
        if sub < 0 or sub >= dim:
            raise TensorIndexError(
                f"Subscript {sub} out of bounds for dimension {i} of size {dim}"
            )
        index += sub * weight
    return index


def ind2sub(index: int, shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Convert a row-major linear offset back to per-dimension subscripts.

    Raises:
        TensorIndexError: If index lies outside [0, element_count(shape))
    """
    count = element_count(shape)
    if not _is_int(index) or index < 0 or index >= count:
        raise TensorIndexError(f"Linear index {index!r} out of bounds for {count} elements")

    subscripts = []
    remainder = index
    for weight in strides(shape):
        sub, remainder = divmod(remainder, weight)
        subscripts.append(sub)
    return tuple(subscripts)


__all__ = [
    "element_count",
    "validate_shape",
    "strides",
    "sub2ind",
    "ind2sub",
]
