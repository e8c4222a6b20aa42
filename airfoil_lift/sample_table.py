"""
Reader for semicolon-delimited pressure-coefficient tables.

The file holds one header line followed by one line per chordwise
position. Values may use ``,`` as the decimal separator. Columns:

    0  position / index (unused)
    1  over-surface Cp at 10°
    2  over-surface Cp at 5°
    3  over-surface Cp at 0°
    4  under-surface Cp at 0°
    5  under-surface Cp at 5°
    6  under-surface Cp at 10°
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .errors import MalformedInputRow, ShapeMismatch, TableNotFound, TableReadError

logger = logging.getLogger(__name__)

TABLE_ROWS = 140        # header included
TABLE_COLUMNS = 7

# angle of attack (deg) → (over column, under column)
ANGLE_COLUMNS = OrderedDict([
    (10, (1, 6)),
    (5, (2, 5)),
    (0, (3, 4)),
])


def normalize_decimal(token: str) -> str:
    """``"1,23"`` and ``"1.23"`` both become ``"1.23"``."""
    return token.strip().replace(",", ".")


def to_float(token: str) -> float:
    """Converter for ``np.loadtxt``: decimal comma, no empty or non-finite cells."""
    text = normalize_decimal(token)
    if not text:
        raise ValueError("empty cell")
    value = float(text)
    if not np.isfinite(value):
        raise ValueError(f"non-finite value {token!r}")
    return value


def strip_trailing_delimiter(line: str) -> str:
    """Drop line ending and a single trailing ``;``."""
    line = line.rstrip()
    return line[:-1] if line.endswith(";") else line


def parse_row(line: str, row_index: int, columns: int = TABLE_COLUMNS) -> List[float]:
    """
    Parse one data line, reporting the first offending cell.

    Only a single trailing ``;`` may leave an empty field; an empty cell
    anywhere else is an error, so values never shift between columns.
    """
    tokens = strip_trailing_delimiter(line).split(";")
    values = []
    for col, token in enumerate(tokens):
        if not token.strip():
            raise MalformedInputRow("empty cell", row_index, col)
        try:
            values.append(to_float(token))
        except ValueError:
            raise MalformedInputRow(f"non-numeric or non-finite token {token!r}", row_index, col) from None
    if len(values) != columns:
        raise MalformedInputRow(f"expected {columns} columns, found {len(values)}", row_index)
    return values


class SampleTable:
    """Read-only grid of digitized Cp curves (header row excluded)."""

    def __init__(self, data, source: Optional[str] = None):
        data = np.array(data, dtype=float)
        if data.ndim != 2 or data.shape[1] < TABLE_COLUMNS or data.shape[0] == 0:
            raise ShapeMismatch(
                f"Sample table must be a non-empty grid with {TABLE_COLUMNS} columns, got shape {data.shape}"
            )
        data.setflags(write=False)
        self.data = data
        self.source = source

    @property
    def n_positions(self) -> int:
        """Chordwise positions per surface (the data rows)."""
        return self.data.shape[0]

    def column(self, index: int) -> np.ndarray:
        return self.data[:, index]

    def angle_of_attack_curves(self) -> "OrderedDict[int, np.ndarray]":
        """
        Map angle of attack to its full Cp curve: over-surface positions
        followed by under-surface positions, ``2 * n_positions`` values.
        """
        curves = OrderedDict()
        for angle, (over, under) in ANGLE_COLUMNS.items():
            curves[angle] = np.concatenate([self.column(over), self.column(under)])
        return curves

    def __repr__(self):
        return f"SampleTable(shape={self.data.shape}, source={self.source!r})"


def _locate_error(numbered_lines, columns: int, cause: Exception) -> MalformedInputRow:
    for row_index, line in numbered_lines:
        try:
            parse_row(line, row_index, columns)
        except MalformedInputRow as err:
            return err
    return MalformedInputRow(str(cause), numbered_lines[0][0])


def load_sample_table(path: Union[str, Path],
                      rows: Optional[int] = TABLE_ROWS,
                      columns: int = TABLE_COLUMNS) -> SampleTable:
    """
    Load a table from ``path``.

    Parameters
    ----------
    rows : int or None
        Required number of non-blank lines, header included. ``None``
        accepts any count of at least two.
    columns : int
        Required number of columns per data line.

    Rows in ``MalformedInputRow`` are 0-based file line numbers, the
    header being row 0.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except FileNotFoundError as exc:
        raise TableNotFound(f"Sample table not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TableReadError(f"Cannot read sample table {path}: {exc}") from exc

    numbered = [(i, line) for i, line in enumerate(lines) if line.strip()]
    if rows is not None and len(numbered) != rows:
        raise MalformedInputRow(f"{path}: expected {rows} lines including header, found {len(numbered)}",
                                len(lines))
    if len(numbered) < 2:
        raise MalformedInputRow(f"{path}: table has no data rows", len(lines))

    body = numbered[1:]     # first non-blank line is the header
    try:
        data = np.loadtxt([strip_trailing_delimiter(line) for _, line in body],
                          delimiter=";", ndmin=2, converters=to_float, comments=None)
    except (ValueError, TypeError) as exc:
        raise _locate_error(body, columns, exc) from exc
    if data.shape[1] != columns:
        raise _locate_error(body, columns, ValueError(f"expected {columns} columns, found {data.shape[1]}"))

    logger.debug("Loaded %d data rows from %s", data.shape[0], path)
    return SampleTable(data, source=str(path))
