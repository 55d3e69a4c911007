"""
Tensor Storage

Defines TensorStore, the owning container for an N-dimensional,
row-major array, and the thin Vector and Matrix specializations.

A TensorStore holds:
    - shape: tuple of positive ints (rank >= 1)
    - elements: contiguous buffer of product(shape) values
    - name / show_name / number_format: display metadata

ELEMENT ACCESS (dual contract):
    A single subscript is ALWAYS a linear row-major index, whatever the
    rank. Two or more subscripts are ALWAYS per-dimension coordinates and
    must match the rank exactly.

        t = TensorStore([2, 3], [1, 2, 3, 4, 5, 6])
        t.get([0])      -> 1     (linear)
        t.get([1, 2])   -> 6     (coordinates)
        t[4]            -> 5     (linear)
        t[1, 1]         -> 5     (coordinates)

SLICING:
    Slices are independent copies. A one-selector spec addresses the flat
    element buffer; otherwise the slice spec must have one selector per
    dimension. Single selectors keep their dimension (extent 1).

ARCHITECTURAL RULE:
    Every check runs before any element is written. A failed call never
    leaves a tensor partially mutated, and a failed constructor never
    produces an instance.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Generic, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar, Union

from tensorplus.config import NumberFormat
from tensorplus.cursor import MultiIndexCursor
from tensorplus.display import format_tensor
from tensorplus.errors import ShapeError, ShapeErrorKind, TensorIndexError
from tensorplus.shape_math import element_count, sub2ind, validate_shape
from tensorplus.slicing import (
    Bounds,
    Coords,
    ElementSelector,
    Linear,
    SliceIndex,
    SliceSpec,
    Single,
    format_slice_spec,
    resolve_bounds,
    resolve_linear_bounds,
    selector_from_slice,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TensorStore(Generic[T]):
    """
    N-dimensional, row-major array with exclusive ownership of its data.

    Properties:
        shape: Number of elements along each dimension
        elements: Copy of the element buffer in row-major order
        count: Total number of elements
        rank: Number of dimensions
        name: Optional name used in display
        show_name: Whether display prints the name
        number_format: Per-instance display configuration

    INVARIANT:
        len(elements) == product(shape), all shape entries > 0
    """

    required_rank: Optional[int] = None

    def __init__(
        self,
        shape: Sequence[int],
        data: Iterable[T],
        name: Optional[str] = None,
        show_name: Optional[bool] = None,
        number_format: Optional[NumberFormat] = None,
    ):
        """
        Create a tensor from a shape and row-major data.

        Args:
            shape: Number of elements along each dimension
            data: Elements in row-major order
            name: Optional tensor name
            show_name: Print the name when displaying; defaults to True
                if a name is given, otherwise False
            number_format: Display format to copy; defaults to NumberFormat()

        Raises:
            ShapeError: If the shape is invalid, its rank is not allowed for
                this class, or len(data) != product(shape)
        """
        shape = tuple(shape)
        validate_shape(shape)
        self._check_rank(shape)

        elements = list(data)
        count = element_count(shape)
        if len(elements) != count:
            raise ShapeError(
                ShapeErrorKind.DATA_LENGTH_MISMATCH,
                f"Shape {shape} needs {count} elements, got {len(elements)}",
            )

        self._shape: Tuple[int, ...] = shape
        self._elements: List[T] = elements
        self.name = name
        self.show_name = (name is not None) if show_name is None else show_name
        self.number_format = number_format.copy() if number_format is not None else NumberFormat()

    @classmethod
    def _check_rank(cls, shape: Tuple[int, ...]) -> None:
        if cls.required_rank is not None and len(shape) != cls.required_rank:
            raise ShapeError(
                ShapeErrorKind.RANK_MISMATCH,
                f"{cls.__name__} must have rank {cls.required_rank}, got shape {shape}",
            )

    @classmethod
    def filled(
        cls,
        shape: Sequence[int],
        value: T,
        name: Optional[str] = None,
        show_name: Optional[bool] = None,
    ) -> TensorStore[T]:
        """Create a tensor with every element set to its own deep copy of value."""
        validate_shape(shape)
        data = [deepcopy(value) for _ in range(element_count(shape))]
        return cls(shape, data, name=name, show_name=show_name)

    @classmethod
    def from_tensor(
        cls,
        other: TensorStore[T],
        name: Optional[str] = None,
        show_name: Optional[bool] = None,
    ) -> TensorStore[T]:
        """
        Create an independent copy of another tensor.

        Elements and number format are duplicated; nothing is shared with
        the source.
        """
        return cls(other.shape, other.elements, name=name, show_name=show_name,
                   number_format=other.number_format)

    def copy(self) -> TensorStore[T]:
        return type(self).from_tensor(self, name=self.name, show_name=self.show_name)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def elements(self) -> List[T]:
        return list(self._elements)

    @property
    def count(self) -> int:
        return len(self._elements)

    @property
    def rank(self) -> int:
        return len(self._shape)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._elements))

    def __eq__(self, other) -> bool:
        if not isinstance(other, TensorStore):
            return NotImplemented
        return self._shape == other._shape and self._elements == other._elements

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={list(self._shape)}, "
            f"elements={self._elements!r}, name={self.name!r})"
        )

    def __str__(self) -> str:
        return format_tensor(self)

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _linear_offset(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TensorIndexError(f"Linear index {index!r} is not an integer")
        if index < 0 or index >= len(self._elements):
            raise TensorIndexError(
                f"Linear index {index} out of bounds for {len(self._elements)} elements"
            )
        return index

    def _offset(self, selector: Union[ElementSelector, Sequence[int]]) -> int:
        if isinstance(selector, Linear):
            return self._linear_offset(selector.index)
        if isinstance(selector, Coords):
            return sub2ind(selector.coords, self._shape)

        subscripts = tuple(selector)
        if len(subscripts) == 0:
            raise TensorIndexError("At least one subscript is required")
        if len(subscripts) == 1:
            return self._linear_offset(subscripts[0])
        return sub2ind(subscripts, self._shape)

    def get(self, selector: Union[ElementSelector, Sequence[int]]) -> T:
        """
        Read one element.

        Args:
            selector: Linear(i), Coords(c), or a sequence of subscripts.
                A one-element sequence is a linear index; longer sequences
                are coordinates.

        Raises:
            TensorIndexError: If the index or coordinates are out of bounds
                or the number of coordinates differs from the rank
        """
        return self._elements[self._offset(selector)]

    def set(self, selector: Union[ElementSelector, Sequence[int]], value: T) -> None:
        """Write one element; same addressing rules as get()."""
        self._elements[self._offset(selector)] = value

    def get_linear(self, index: int) -> T:
        return self._elements[self._linear_offset(index)]

    def set_linear(self, index: int, value: T) -> None:
        self._elements[self._linear_offset(index)] = value

    def get_at(self, coords: Sequence[int]) -> T:
        return self._elements[sub2ind(coords, self._shape)]

    def set_at(self, coords: Sequence[int], value: T) -> None:
        self._elements[sub2ind(coords, self._shape)] = value

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------

    def _region(self, spec: SliceSpec) -> Tuple[Bounds, List[int]]:
        """Resolve a spec and list the covered offsets in row-major order."""
        if len(spec) == 0:
            raise ShapeError(ShapeErrorKind.RANK_MISMATCH, "Slice spec must not be empty")

        if len(spec) == 1:
            bounds = resolve_linear_bounds(spec[0], len(self._elements))
            return bounds, list(range(bounds.lower[0], bounds.upper[0] + 1))

        bounds = resolve_bounds(spec, self._shape)
        cursor = MultiIndexCursor(bounds.lower, bounds.upper)
        return bounds, [sub2ind(coords, self._shape) for coords in cursor]

    def _slice_name(self, spec: SliceSpec) -> Optional[str]:
        if self.name is None:
            return None
        base = self.name if self.name.isidentifier() else f"({self.name})"
        return base + format_slice_spec(spec)

    def get_slice(self, spec: SliceSpec) -> TensorStore[T]:
        """
        Copy a rectangular region into a new tensor.

        Args:
            spec: One selector per dimension, or a single selector that
                addresses the flat element buffer

        Returns:
            New TensorStore whose shape is the extent of each selector

        Raises:
            ShapeError: RANK_MISMATCH if the slice spec does not fit the rank
            TensorIndexError: If any selector leaves its dimension
        """
        spec = tuple(spec)
        bounds, offsets = self._region(spec)
        logger.debug("Reading slice %s (%d elements) from shape %s",
                     format_slice_spec(spec), len(offsets), self._shape)
        return TensorStore(
            bounds.extents,
            [self._elements[offset] for offset in offsets],
            name=self._slice_name(spec),
            show_name=self.show_name,
            number_format=self.number_format,
        )

    def set_slice(self, spec: SliceSpec, value: TensorStore[T]) -> None:
        """
        Overwrite a rectangular region with the elements of value.

        Elements are written in the same row-major order get_slice reads
        them, so set_slice(spec, get_slice(spec)) is a no-op.

        Raises:
            ShapeError: SLICE_SIZE_MISMATCH if value.shape differs from the
                extents of the region; RANK_MISMATCH as for get_slice
            TensorIndexError: If any selector leaves its dimension
        """
        spec = tuple(spec)
        bounds, offsets = self._region(spec)
        if tuple(value.shape) != bounds.extents:
            raise ShapeError(
                ShapeErrorKind.SLICE_SIZE_MISMATCH,
                f"Cannot assign shape {tuple(value.shape)} to slice "
                f"{format_slice_spec(spec)} of shape {bounds.extents}",
            )
        logger.debug("Writing slice %s (%d elements) into shape %s",
                     format_slice_spec(spec), len(offsets), self._shape)
        for offset, element in zip(offsets, value.elements):
            self._elements[offset] = element

    # ------------------------------------------------------------------
    # Subscript sugar
    # ------------------------------------------------------------------

    def _slice_spec_from_key(self, key: tuple) -> Optional[Tuple[SliceIndex, ...]]:
        """Return a slice spec if key selects a region, None for one element."""
        if not any(isinstance(k, (slice, SliceIndex)) for k in key):
            return None
        if len(key) == 1:
            sizes: Tuple[int, ...] = (len(self._elements),)
        elif len(key) == len(self._shape):
            sizes = self._shape
        else:
            raise ShapeError(
                ShapeErrorKind.RANK_MISMATCH,
                f"Slice has {len(key)} selectors but tensor has rank {len(self._shape)}",
            )

        spec = []
        for k, size in zip(key, sizes):
            if isinstance(k, slice):
                spec.append(selector_from_slice(k, size))
            elif isinstance(k, SliceIndex):
                spec.append(k)
            else:
                spec.append(Single(k))
        return tuple(spec)

    def __getitem__(self, key):
        if isinstance(key, (Linear, Coords)):
            return self.get(key)
        if not isinstance(key, tuple):
            key = (key,)
        spec = self._slice_spec_from_key(key)
        if spec is not None:
            return self.get_slice(spec)
        return self.get(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, (Linear, Coords)):
            self.set(key, value)
            return
        if not isinstance(key, tuple):
            key = (key,)
        spec = self._slice_spec_from_key(key)
        if spec is not None:
            if not isinstance(value, TensorStore):
                raise TypeError(f"Slice assignment needs a TensorStore, got {type(value).__name__}")
            self.set_slice(spec, value)
        else:
            self.set(key, value)


class Vector(TensorStore[T]):
    """Rank-1 tensor."""

    required_rank = 1

    @classmethod
    def of(cls, values: Iterable[T], name: Optional[str] = None,
           show_name: Optional[bool] = None) -> Vector[T]:
        values = list(values)
        return cls([len(values)], values, name=name, show_name=show_name)

    @property
    def length(self) -> int:
        return self._shape[0]


class Matrix(TensorStore[T]):
    """
    Rank-2 tensor.

    Properties:
        rows: Size of dimension 0
        columns: Size of dimension 1
    """

    required_rank = 2

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[T]], name: Optional[str] = None,
                  show_name: Optional[bool] = None) -> Matrix[T]:
        rows = [list(row) for row in rows]
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ShapeError(
                ShapeErrorKind.DATA_LENGTH_MISMATCH,
                f"Matrix rows differ in length: {sorted(widths)}",
            )
        columns = widths.pop() if widths else 0
        data = [value for row in rows for value in row]
        return cls([len(rows), columns], data, name=name, show_name=show_name)

    @property
    def rows(self) -> int:
        return self._shape[0]

    @property
    def columns(self) -> int:
        return self._shape[1]


__all__ = ["TensorStore", "Vector", "Matrix"]
