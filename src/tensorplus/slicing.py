"""
Slice and element selectors.

A slice spec is an ordered sequence of per-dimension selectors:

    Single(i)          one index, kept as a dimension of extent 1
    Range(low, high)   inclusive on BOTH ends
    Full()             the whole dimension

Element selectors make the dual element-access contract explicit:

    Linear(i)          row-major offset into the element buffer
    Coords((i, j))     one coordinate per dimension

Resolution turns a spec into inclusive Bounds that a MultiIndexCursor can
walk. Text form (used for slice names and accepted by parse_slice_spec):

    "[0...1, 2, :]"  ==  (Range(0, 1), Single(2), Full())
"""

import re
from abc import ABC
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from tensorplus.errors import ShapeError, ShapeErrorKind, TensorIndexError
from tensorplus.shape_math import _is_int, element_count


class SliceIndex(ABC):
    """Base class for per-dimension slice selectors."""
    pass


@dataclass(frozen=True)
class Single(SliceIndex):
    """Selects one index; the dimension survives with extent 1."""

    index: int


@dataclass(frozen=True)
class Range(SliceIndex):
    """
    Selects the closed interval [low, high].

    Example:
        Range(0, 1) selects indices 0 and 1 (extent 2)
    """

    low: int
    high: int


@dataclass(frozen=True)
class Full(SliceIndex):
    """Selects every index of a dimension."""
    pass


SliceSpec = Sequence[SliceIndex]


@dataclass(frozen=True)
class Linear:
    """Element selector: linear row-major offset."""

    index: int


@dataclass(frozen=True)
class Coords:
    """Element selector: one coordinate per dimension."""

    coords: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "coords", tuple(self.coords))


ElementSelector = Union[Linear, Coords]


class SliceSyntaxError(Exception):
    """Raised when a textual slice spec cannot be parsed."""
    pass


@dataclass(frozen=True)
class Bounds:
    """
    Resolved inclusive bounds of a rectangular region.

    Properties:
        lower: First index per dimension
        upper: Last index per dimension (inclusive)
    """

    lower: Tuple[int, ...]
    upper: Tuple[int, ...]

    @property
    def extents(self) -> Tuple[int, ...]:
        return tuple(high - low + 1 for low, high in zip(self.lower, self.upper))

    @property
    def count(self) -> int:
        return element_count(self.extents)


def _resolve_selector(selector: SliceIndex, size: int, dim: int) -> Tuple[int, int]:
    if isinstance(selector, Single):
        low = high = selector.index
    elif isinstance(selector, Range):
        low, high = selector.low, selector.high
    elif isinstance(selector, Full):
        return 0, size - 1
    else:
        raise TypeError(f"Unsupported slice selector: {type(selector)}")

    for bound in (low, high):
        if not _is_int(bound):
            raise TensorIndexError(f"Slice bound {bound!r} in dimension {dim} is not an integer")
    if low > high:
        raise TensorIndexError(f"Empty range {low}...{high} in dimension {dim}")
    if low < 0 or high >= size:
        raise TensorIndexError(
            f"Range {low}...{high} out of bounds for dimension {dim} of size {size}"
        )
    return low, high


def resolve_bounds(spec: SliceSpec, shape: Sequence[int]) -> Bounds:
    """
    Resolve a full-rank slice spec against a tensor shape.

    Args:
        spec: One selector per dimension
        shape: Shape of the target tensor

    Returns:
        Bounds of the selected region

    Raises:
        ShapeError: RANK_MISMATCH if len(spec) != len(shape)
        TensorIndexError: If a selector leaves its dimension or is empty
    """
    if len(spec) != len(shape):
        raise ShapeError(
            ShapeErrorKind.RANK_MISMATCH,
            f"Slice spec has {len(spec)} selectors but tensor has rank {len(shape)}",
        )
    pairs = [_resolve_selector(sel, size, dim) for dim, (sel, size) in enumerate(zip(spec, shape))]
    return Bounds(lower=tuple(p[0] for p in pairs), upper=tuple(p[1] for p in pairs))


def resolve_linear_bounds(selector: SliceIndex, count: int) -> Bounds:
    """Resolve a single selector against the flat element buffer."""
    low, high = _resolve_selector(selector, count, 0)
    return Bounds(lower=(low,), upper=(high,))


def selector_from_slice(item: slice, size: int) -> SliceIndex:
    """
    Convert a Python slice (half-open) to an inclusive Range.

    Missing ends default to the dimension bounds. Only a step of 1 is
    supported; negative indices are not wrapped.
    """
    if item.step not in (None, 1):
        raise TensorIndexError(f"Slice step {item.step} is not supported")
    start = 0 if item.start is None else item.start
    stop = size if item.stop is None else item.stop
    return Range(start, stop - 1)


# Textual form -----------------------------------------------------------

_INT_RE = re.compile(r'^-?\d+$')
_RANGE_RE = re.compile(r'^(-?\d+)\s*\.\.\.\s*(-?\d+)$')


def parse_slice_spec(text: str) -> Tuple[SliceIndex, ...]:
    """
    Parse the textual slice form.

    Grammar:
        spec      := ["["] selector ("," selector)* ["]"]
        selector  := INT | INT "..." INT | ":"

    Args:
        text: e.g. "0...1, 2" or "[:, 3]"

    Returns:
        Tuple of selectors

    Raises:
        SliceSyntaxError: If the text is empty or a selector is malformed
    """
    body = text.strip()
    if body.startswith("[") != body.endswith("]"):
        raise SliceSyntaxError(f"Unbalanced brackets in slice spec '{text}'")
    if body.startswith("["):
        body = body[1:-1].strip()
    if not body:
        raise SliceSyntaxError("Slice spec is empty")

    selectors: List[SliceIndex] = []
    for position, part in enumerate(body.split(","), start=1):
        token = part.strip()
        if token == ":":
            selectors.append(Full())
        elif _INT_RE.match(token):
            selectors.append(Single(int(token)))
        else:
            match = _RANGE_RE.match(token)
            if match is None:
                raise SliceSyntaxError(f"Invalid selector '{token}' at position {position}")
            selectors.append(Range(int(match.group(1)), int(match.group(2))))
    return tuple(selectors)


def format_selector(selector: SliceIndex) -> str:
    if isinstance(selector, Single):
        return str(selector.index)
    if isinstance(selector, Range):
        return f"{selector.low}...{selector.high}"
    if isinstance(selector, Full):
        return ":"
    raise TypeError(f"Unsupported slice selector: {type(selector)}")


def format_slice_spec(spec: SliceSpec) -> str:
    """Render a spec in the form accepted by parse_slice_spec."""
    return "[" + ", ".join(format_selector(sel) for sel in spec) + "]"


__all__ = [
    "SliceIndex",
    "Single",
    "Range",
    "Full",
    "SliceSpec",
    "Linear",
    "Coords",
    "ElementSelector",
    "Bounds",
    "SliceSyntaxError",
    "resolve_bounds",
    "resolve_linear_bounds",
    "selector_from_slice",
    "parse_slice_spec",
    "format_selector",
    "format_slice_spec",
]
