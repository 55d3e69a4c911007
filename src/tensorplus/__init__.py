"""
TensorPlus Package

Row-major, N-dimensional arrays ("tensors") with shared indexing and
slicing behavior for Vector, Matrix and Tensor containers.

ARCHITECTURAL GUARANTEE:
------------------------
The core (shape_math, cursor, slicing, tensor) contains ZERO knowledge of:
    - Display formatting
    - CSV text layout
    - Configuration files

Those layers consume the public shape/elements accessors only.
"""

from tensorplus.errors import ShapeError, ShapeErrorKind, TensorError, TensorIndexError
from tensorplus.slicing import Coords, Full, Linear, Range, Single
from tensorplus.tensor import Matrix, TensorStore, Vector

__version__ = "0.1.0"

__all__ = [
    "TensorStore",
    "Vector",
    "Matrix",
    "Single",
    "Range",
    "Full",
    "Linear",
    "Coords",
    "TensorError",
    "ShapeError",
    "ShapeErrorKind",
    "TensorIndexError",
]
