"""
Error types shared by the tensor core.

Two failure families exist:
    - ShapeError: the shape of something is wrong (dimensions, data length,
      rank of a slice spec, size of an assigned slice)
    - TensorIndexError: a linear index or coordinate is out of bounds

Both are raised before any element is touched, so a failed call never
leaves a tensor partially mutated.
"""

from enum import Enum


class ShapeErrorKind(Enum):
    """Reason attached to a ShapeError."""

    NON_POSITIVE_DIMENSION = "non_positive_dimension"
    DATA_LENGTH_MISMATCH = "data_length_mismatch"
    RANK_MISMATCH = "rank_mismatch"
    SLICE_SIZE_MISMATCH = "slice_size_mismatch"


class TensorError(Exception):
    """Base class for all tensor failures."""
    pass


class ShapeError(TensorError):
    """
    Raised when a shape is invalid or two shapes disagree.

    Properties:
        kind: ShapeErrorKind describing the violation
    """

    def __init__(self, kind: ShapeErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class TensorIndexError(TensorError, IndexError):
    """Raised when a linear index or a coordinate is out of bounds."""
    pass
