"""
Multi-dimensional index cursor.

Walks every coordinate of a rectangular region of index space exactly
once, in row-major order (last dimension fastest):

    lower=[0, 0], upper=[1, 2]

    [0, 0] [0, 1] [0, 2] [1, 0] [1, 1] [1, 2]   -> exhausted

Advancing increments the last coordinate. When it passes its upper
bound it resets to its lower bound and the carry moves one dimension to
the left. A carry out of the first dimension exhausts the cursor.

The same cursor, run over reversed dimensions, drives the decomposition
of a tensor into 2-D matrix faces for display and CSV output.
"""

from typing import Iterator, List, Optional, Sequence, Tuple


class MultiIndexCursor:
    """
    Lazy, finite, non-restartable iterator over a box of coordinates.

    Properties:
        lower: Inclusive lower bound per dimension
        upper: Inclusive upper bound per dimension
        current: Coordinate the cursor points at, or None once exhausted

    INVARIANT:
        lower[i] <= current[i] <= upper[i] while the cursor is active.
    """

    def __init__(self, lower: Sequence[int], upper: Sequence[int]):
        if len(lower) != len(upper):
            raise ValueError(
                f"Cursor bounds differ in length: {len(lower)} vs {len(upper)}"
            )
        if len(lower) == 0:
            raise ValueError("Cursor needs at least one dimension")
        for i, (low, high) in enumerate(zip(lower, upper)):
            if low > high:
                raise ValueError(f"Cursor lower bound {low} exceeds upper bound {high} in dimension {i}")

        self.lower: Tuple[int, ...] = tuple(lower)
        self.upper: Tuple[int, ...] = tuple(upper)
        self._current: Optional[List[int]] = list(lower)
        self._started = False

    @property
    def current(self) -> Optional[Tuple[int, ...]]:
        if self._current is None:
            return None
        return tuple(self._current)

    @property
    def exhausted(self) -> bool:
        return self._current is None

    def advance(self) -> bool:
        """
        Move to the next coordinate in row-major order.

        Returns:
            True if the cursor still points at a coordinate, False once the
            carry has propagated past the first dimension
        """
        if self._current is None:
            return False

        dim = len(self._current) - 1
        while dim >= 0:
            if self._current[dim] < self.upper[dim]:
                self._current[dim] += 1
                return True
            self._current[dim] = self.lower[dim]
            dim -= 1

        self._current = None
        return False

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return self

    def __next__(self) -> Tuple[int, ...]:
        if self._started:
            self.advance()
        self._started = True
        if self._current is None:
            raise StopIteration
        return tuple(self._current)

    def __repr__(self) -> str:
        return f"MultiIndexCursor(lower={list(self.lower)}, upper={list(self.upper)}, current={self.current})"


def matrix_faces(shape: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """
    Enumerate the 2-D matrix faces of a tensor.

    Dimensions 0 and 1 form the face (rows and columns). Every yielded
    tuple holds the indices of dimensions 2, 3, ... for one face, with
    dimension 2 varying fastest:

        shape (2, 2, 2, 3) -> (0, 0) (1, 0) (0, 1) (1, 1) (0, 2) (1, 2)

    Rank 1 and rank 2 tensors have a single face, yielded as ().
    """
    higher = list(shape[2:])
    if not higher:
        yield ()
        return

    # Reversed so the cursor's fastest (last) dimension is dimension 2.
    upper = [dim - 1 for dim in reversed(higher)]
    for coords in MultiIndexCursor([0] * len(upper), upper):
        yield tuple(reversed(coords))


__all__ = ["MultiIndexCursor", "matrix_faces"]
