"""
Grid parsing utilities for beamgrid.

Puzzle input is one line per row, one character per cell:

    .|...\\....
    |.-.\\.....

Valid characters are the ElementType symbols: . / \\ | -
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Iterable

from grid_types import ElementType, Grid, MalformedGridError

__all__ = ["parse_grid", "parse_grid_rows", "load_grid"]

logger = logging.getLogger(__name__)

_VALID_SYMBOLS = " ".join(e.symbol for e in ElementType)


def parse_grid_rows(rows: Iterable[str]) -> Grid:
    """
    Build a Grid from rows of element symbols.

    Unlike parse_grid(), every row is taken as-is: an empty row is an error.

    Args:
        rows: One string per grid row

    Returns:
        The parsed Grid

    Raises:
        MalformedGridError: If there are no rows, a row is empty, rows differ
            in length, or a character is not an element symbol
    """
    row_strings = list(rows)
    if not row_strings:
        raise MalformedGridError("Grid input is empty: expected at least one row")

    parsed: list[tuple[ElementType, ...]] = []
    for row_idx, row_str in enumerate(row_strings):
        if not row_str:
            raise MalformedGridError(f"Row {row_idx} is empty")

        cells: list[ElementType] = []
        for col_idx, char in enumerate(row_str):
            try:
                cells.append(ElementType(char))
            except ValueError:
                raise MalformedGridError(
                    f"Invalid character {char!r}\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: {_VALID_SYMBOLS}"
                ) from None
        parsed.append(tuple(cells))

    # Validate all rows have same length
    cols = len(parsed[0])
    mismatched = [(i, len(row)) for i, row in enumerate(parsed) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise MalformedGridError(error_msg)

    return Grid(tuple(parsed))


def parse_grid(text: str) -> Grid:
    """
    Parse a puzzle grid from a text blob.

    The blob is dedented and blank lines are skipped, so indented
    triple-quoted strings parse directly. Any other whitespace inside the
    grid is an invalid character.

    Example:
        \"\"\"
        .|.
        \\-/
        \"\"\"

        Creates a 2x3 grid:
        [[EMPTY_SPACE, VERTICAL_SPLITTER, EMPTY_SPACE],
         [BACKWARD_MIRROR, HORIZONTAL_SPLITTER, FORWARD_MIRROR]]

    Raises:
        MalformedGridError: If no rows remain or the rows are malformed
    """
    lines = [line for line in textwrap.dedent(text).splitlines() if line.strip()]
    grid = parse_grid_rows(lines)
    logger.debug("parse_grid: %dx%d grid", grid.rows, grid.cols)
    return grid


def load_grid(path: str | Path) -> Grid:
    """Read and parse a puzzle file."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_grid(text)
