"""
Shared type definitions for the beamgrid system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Errors
# =============================================================================


class MalformedGridError(ValueError):
    """Raised when grid input is empty, ragged, or contains an unknown symbol."""


ParseError = MalformedGridError


class OutOfBoundsAccess(AssertionError):
    """Raised when an element is looked up outside the grid. Always a bug in the caller."""


# =============================================================================
# Directions and Positions
# =============================================================================


class Direction(Enum):
    """Cardinal direction a beam travels in."""

    N = "N"  # Up (decreasing y)
    E = "E"  # Right (increasing x)
    S = "S"  # Down (increasing y)
    W = "W"  # Left (decreasing x)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

# Direction deltas: (dx, dy)
DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.E: (1, 0),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
}


@dataclass(frozen=True)
class Position:
    """A cell coordinate. x is the column, y is the row, both zero-based."""

    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        dx, dy = DELTAS[direction]
        return Position(self.x + dx, self.y + dy)


# =============================================================================
# Grid Definition Types
# =============================================================================


class ElementType(Enum):
    """Optical element occupying a cell, valued by its puzzle symbol."""

    EMPTY_SPACE = "."
    FORWARD_MIRROR = "/"
    BACKWARD_MIRROR = "\\"
    VERTICAL_SPLITTER = "|"
    HORIZONTAL_SPLITTER = "-"

    @property
    def symbol(self) -> str:
        return self.value

    @staticmethod
    def from_symbol(symbol: str) -> ElementType:
        try:
            return ElementType(symbol)
        except ValueError:
            raise MalformedGridError(
                f"Unknown element symbol {symbol!r}\n"
                f"  Valid symbols: {' '.join(e.symbol for e in ElementType)}"
            ) from None


@dataclass(frozen=True)
class BeamState:
    """One beam: the cell it occupies and the direction it is moving in."""

    position: Position
    direction: Direction


@dataclass(frozen=True)
class Grid:
    """A dense, rectangular, immutable 2D grid of elements indexed cells[y][x]."""

    cells: tuple[tuple[ElementType, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells:
            raise MalformedGridError("Grid must have at least one row")
        cols = len(self.cells[0])
        if cols == 0:
            raise MalformedGridError("Grid rows must have at least one column")
        mismatched = [(i, len(row)) for i, row in enumerate(self.cells) if len(row) != cols]
        if mismatched:
            row_idx, actual = mismatched[0]
            raise MalformedGridError(
                f"Grid is not rectangular: row 0 has {cols} columns but row {row_idx} has {actual}"
            )

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def dimensions(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.cols and 0 <= pos.y < self.rows

    def element_at(self, pos: Position) -> ElementType:
        """
        Look up the element at pos.

        Callers must check in_bounds() first; an out-of-range lookup raises
        OutOfBoundsAccess rather than wrapping around on negative indices.
        """
        if not self.in_bounds(pos):
            raise OutOfBoundsAccess(f"{pos} is outside a {self.rows}x{self.cols} grid")
        return self.cells[pos.y][pos.x]
