"""
Comma-separated text format for tensors.

Layout:
    - elements of a row are comma separated
    - rows are separated by newlines
    - matrix faces of higher-rank tensors are separated by a line made of
      semicolons, one per dimension boundary crossed

Example, shape (2, 2, 2, 2):

    1,2        <- [:, :, 0, 0]
    3,4
    ;
    5,6        <- [:, :, 1, 0]
    7,8
    ;;
    9,10       <- [:, :, 0, 1]
    11,12
    ;
    13,14      <- [:, :, 1, 1]
    15,16

A single line without separators parses as a rank 1 tensor, several lines
as rank 2. Trailing dimensions of extent 1 leave no trace in the text;
pass shape= to parse_csv_string to restore them. This module only uses the
public tensor accessors.
"""

import csv
import logging
import os
import re
from io import StringIO
from typing import Any, Callable, List, Optional, Sequence, Tuple

from tensorplus.cursor import matrix_faces
from tensorplus.errors import TensorError
from tensorplus.shape_math import element_count, sub2ind
from tensorplus.tensor import TensorStore

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r'^;+$')

# (line number, cells)
_Record = Tuple[int, List[str]]


class CSVParseError(Exception):
    """Raised when CSV parsing fails."""
    pass


def to_csv(tensor) -> str:
    """
    Return the tensor as an unformatted, comma separated string.

    Args:
        tensor: Any object exposing shape and get_at()

    Returns:
        CSV text without a trailing newline
    """
    shape = tuple(tensor.shape)
    if len(shape) == 1:
        return ",".join(str(tensor.get_at((i,))) for i in range(shape[0]))

    lines: List[str] = []
    previous: Optional[Tuple[int, ...]] = None
    for face in matrix_faces(shape):
        if previous is not None:
            changed = max(i for i, (a, b) in enumerate(zip(previous, face)) if a != b)
            lines.append(";" * (changed + 1))
        for row in range(shape[0]):
            lines.append(",".join(str(tensor.get_at((row, col, *face))) for col in range(shape[1])))
        previous = face
    return "\n".join(lines)


def _separator_depth(cells: List[str]) -> int:
    if len(cells) == 1 and _SEPARATOR_RE.match(cells[0]):
        return len(cells[0])
    return 0


def _read_records(csv_content: str) -> List[_Record]:
    reader = csv.reader(StringIO(csv_content))
    records: List[_Record] = []
    for row in reader:
        cells = [cell.strip() for cell in row]
        if not cells or all(cell == "" for cell in cells):
            continue
        records.append((reader.line_num, cells))
    return records


def _parse_matrix(records: List[_Record], converter: Callable[[str], Any]) -> Tuple[Tuple[int, ...], list]:
    width = len(records[0][1])
    rows = []
    for line_num, cells in records:
        if _separator_depth(cells):
            raise CSVParseError(f"Unexpected separator on line {line_num}")
        if len(cells) != width:
            raise CSVParseError(
                f"Row on line {line_num} has {len(cells)} values, expected {width}"
            )
        try:
            rows.append([converter(cell) for cell in cells])
        except (ValueError, TypeError) as e:
            raise CSVParseError(f"Error parsing row on line {line_num}: {str(e)}")
    return (len(rows), width), [rows]


def _parse_block(records: List[_Record], depth: int,
                 converter: Callable[[str], Any]) -> Tuple[Tuple[int, ...], list]:
    """
    Parse records separated by lines of `depth` semicolons.

    Returns the shape of the block and its matrix faces in matrix_faces()
    order.
    """
    if depth == 0:
        return _parse_matrix(records, converter)

    groups: List[List[_Record]] = [[]]
    for record in records:
        if _separator_depth(record[1]) == depth:
            if not groups[-1]:
                raise CSVParseError(f"Empty block before separator on line {record[0]}")
            groups.append([])
        else:
            groups[-1].append(record)
    if not groups[-1]:
        raise CSVParseError("CSV ends with a separator")

    block_shape: Optional[Tuple[int, ...]] = None
    faces: list = []
    for group in groups:
        shape, group_faces = _parse_block(group, depth - 1, converter)
        if block_shape is None:
            block_shape = shape
        elif shape != block_shape:
            raise CSVParseError(
                f"Block starting on line {group[0][0]} has shape {shape}, expected {block_shape}"
            )
        faces.extend(group_faces)
    return block_shape + (len(groups),), faces


def _layout_shape(shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Shape as the text layout records it.

    Rank 1 is written like a 1 x n matrix and trailing dimensions of
    extent 1 above the matrix face leave no separator. Neither changes the
    row-major order of the elements.
    """
    layout = tuple(shape)
    if len(layout) == 1:
        layout = (1,) + layout
    while len(layout) > 2 and layout[-1] == 1:
        layout = layout[:-1]
    return layout


def parse_csv_string(
    csv_content: str,
    name: Optional[str] = None,
    show_name: Optional[bool] = None,
    converter: Callable[[str], Any] = float,
    shape: Optional[Sequence[int]] = None,
) -> TensorStore:
    """
    Parse CSV text produced by to_csv() into a tensor.

    Args:
        csv_content: CSV as string
        name: Optional tensor name
        show_name: Optional display flag (see TensorStore)
        converter: Callable turning one cell into an element
        shape: Optional expected shape. Restores what the text cannot
            express: a leading extent of 1 on a 1 x n matrix and trailing
            dimensions of extent 1

    Returns:
        TensorStore with the inferred shape, or with shape if given

    Raises:
        CSVParseError: If the text is empty, ragged, has inconsistent
            blocks or contains a value the converter rejects
            (or its layout disagrees with shape)
    """
    records = _read_records(csv_content)
    if not records:
        raise CSVParseError("CSV is empty")

    depth = max(_separator_depth(cells) for _, cells in records)
    inferred, faces = _parse_block(records, depth, converter)

    if depth == 0 and inferred[0] == 1:
        inferred = (inferred[1],)
        data = faces[0][0]
    else:
        data = [None] * element_count(inferred)
        for face, rows in zip(matrix_faces(inferred), faces):
            for r, row in enumerate(rows):
                for c, value in enumerate(row):
                    data[sub2ind((r, c, *face), inferred)] = value

    if shape is not None:
        expected = tuple(shape)
        if _layout_shape(expected) != _layout_shape(inferred):
            raise CSVParseError(f"CSV has shape {inferred}, which does not match expected shape {expected}")
        inferred = expected

    logger.debug("Parsed CSV tensor with shape %s", inferred)
    try:
        return TensorStore(inferred, data, name=name, show_name=show_name)
    except TensorError as e:
        raise CSVParseError(f"CSV does not describe a valid tensor: {str(e)}")


def parse_csv_file(filepath: str, name: Optional[str] = None,
                   show_name: Optional[bool] = None,
                   converter: Callable[[str], Any] = float,
                   shape: Optional[Sequence[int]] = None) -> TensorStore:
    """
    Parse a CSV file into a tensor.

    Args:
        filepath: Path to CSV file
        name: Optional tensor name (defaults to the file name without extension)
        shape: Optional expected shape (see parse_csv_string)

    Raises:
        FileNotFoundError: If file doesn't exist
        CSVParseError: If parsing fails
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    if name is None:
        name = os.path.splitext(os.path.basename(filepath))[0]

    return parse_csv_string(content, name=name, show_name=show_name, converter=converter, shape=shape)


__all__ = [
    "to_csv",
    "parse_csv_string",
    "parse_csv_file",
    "CSVParseError",
]
