"""
Grid-text rendering of tensors.

Produces the string returned by str(tensor):

    A =
    A[:, :, 0]
    1       2
    3       4

    A[:, :, 1]
    5       6
    7       8

Rank 1 tensors print as a single row, rank 2 as one line per row, and
higher ranks as a sequence of matrix faces in matrix_faces() order.

Only the public accessors of a tensor are used here (shape, get_at,
name, show_name, number_format).
"""

from numbers import Number
from typing import Any, List, Sequence

from tensorplus.config import NumberFormat
from tensorplus.cursor import matrix_faces


def format_element(value: Any, fmt: NumberFormat) -> str:
    """
    Render one element into a cell of exactly fmt.width characters.

    Numbers use up to fmt.significant_digits significant digits. A value
    that does not fit is shown as fmt.overflow_char repeated.
    """
    if isinstance(value, Number) and not isinstance(value, (bool, complex)):
        text = f"{value:.{fmt.significant_digits}g}"
    else:
        text = str(value)

    if len(text) > fmt.width:
        return fmt.overflow_char * fmt.width
    return text.ljust(fmt.width, fmt.padding)


def _format_row(tensor, prefix: Sequence[int], fixed: Sequence[int], columns: int) -> str:
    fmt = tensor.number_format
    cells = [format_element(tensor.get_at((*prefix, col, *fixed)), fmt) for col in range(columns)]
    return "".join(cells).rstrip(fmt.padding)


def _face_label(name: str, face: Sequence[int]) -> str:
    return f"{name}[:, :, " + ", ".join(str(i) for i in face) + "]"


def format_tensor(tensor) -> str:
    """Return the tensor as an easily readable grid."""
    shape = tuple(tensor.shape)
    name = tensor.name if tensor.show_name and tensor.name is not None else ""
    lines: List[str] = []

    if name:
        lines.append(f"{name} =")

    if len(shape) == 1:
        lines.append(_format_row(tensor, (), (), shape[0]))
        return "\n".join(lines)

    first = True
    for face in matrix_faces(shape):
        if face:
            if not first:
                lines.append("")
            lines.append(_face_label(name, face))
        for row in range(shape[0]):
            lines.append(_format_row(tensor, (row,), face, shape[1]))
        first = False
    return "\n".join(lines)


__all__ = ["format_element", "format_tensor"]
