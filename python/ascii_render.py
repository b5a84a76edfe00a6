"""
ASCII rendering for beamgrid structures.

Provides two rendering approaches:
1. Plain maps - element symbols or energized '#' cells, one line per row
2. Boxed rendering - a bordered grid with optional colours, beam overlay and
   a highlighted entry cell
"""

from __future__ import annotations

import logging
from typing import Callable, Collection

import simple_chalk as chalk  # type: ignore[import-untyped]

from beamgrid import BeamState, Direction, ElementType, Grid, Position, TraceSession

logger = logging.getLogger(__name__)

ENERGIZED_CHAR = "#"
DARK_CHAR = "."

# Direction arrows used to mark the entry cell
ARROWS: dict[Direction, str] = {
    Direction.N: "^",
    Direction.E: ">",
    Direction.S: "v",
    Direction.W: "<",
}


# =============================================================================
# Plain Maps
# =============================================================================


def render_element_map(grid: Grid) -> str:
    """Render the grid back to its puzzle symbols."""
    return "\n".join("".join(cell.symbol for cell in row) for row in grid.cells)


def render_energy_map(grid: Grid, energized: Collection[Position]) -> str:
    """Render energized cells as '#' and everything else as '.'."""
    lines = []
    for y in range(grid.rows):
        lines.append(
            "".join(
                ENERGIZED_CHAR if Position(x, y) in energized else DARK_CHAR
                for x in range(grid.cols)
            )
        )
    return "\n".join(lines)


# =============================================================================
# Boxed Rendering
# =============================================================================


ColorFn = Callable[[ElementType, bool], Callable[[str], str]]

ELEMENT_COLORS: dict[ElementType, Callable[[str], str]] = {
    ElementType.EMPTY_SPACE: chalk.blue,
    ElementType.FORWARD_MIRROR: chalk.cyan,
    ElementType.BACKWARD_MIRROR: chalk.cyan,
    ElementType.VERTICAL_SPLITTER: chalk.magenta,
    ElementType.HORIZONTAL_SPLITTER: chalk.magenta,
}


def element_color_fn(element: ElementType, energized: bool) -> Callable[[str], str]:
    """Colour by element type; any energized cell is drawn yellow."""
    if energized:
        return chalk.yellowBright
    return ELEMENT_COLORS[element]


def render_grid_simple(
    grid: Grid,
    energized: Collection[Position] | None = None,
    highlight_pos: Position | None = None,
    cell_width: int = 1,
    color_fn: ColorFn | None = None,
    title: str = "grid",
) -> list[str]:
    """
    Render a grid as a bordered character display.

    Args:
        grid: The grid to render
        energized: Optional energized positions; empty cells among them are
            drawn as '#', other elements keep their symbol
        highlight_pos: Optional position to highlight (white background)
        cell_width: Characters per cell (default 1)
        color_fn: Optional function returning a colorizer for (element, energized)
        title: Text centred in the top border

    Returns:
        List of strings representing the rendered grid lines
    """
    if color_fn is None:
        color_fn = lambda element, lit: lambda s: s

    lit_cells = energized if energized is not None else ()
    grid_width = grid.cols * cell_width + 2  # +2 for borders
    label = f" {title} "

    lines: list[str] = []

    # Top border with title
    if len(label) <= grid_width - 2:
        title_start = (grid_width - len(label)) // 2
        lines.append(
            "┌"
            + "─" * (title_start - 1)
            + label
            + "─" * (grid_width - title_start - len(label) - 1)
            + "┐"
        )
    else:
        lines.append("┌" + "─" * (grid_width - 2) + "┐")

    for y, row in enumerate(grid.cells):
        line_parts = ["│"]
        for x, element in enumerate(row):
            pos = Position(x, y)
            lit = pos in lit_cells

            char = element.symbol
            if lit and element is ElementType.EMPTY_SPACE:
                char = ENERGIZED_CHAR

            content = char if cell_width == 1 else char.center(cell_width)

            if highlight_pos is not None and pos == highlight_pos:
                content = chalk.bgWhite.black(content)
            else:
                content = color_fn(element, lit)(content)

            line_parts.append(content)

        line_parts.append("│")
        lines.append("".join(line_parts))

    # Bottom border
    lines.append("└" + "─" * (grid_width - 2) + "┘")

    return lines


def render_trace(
    grid: Grid,
    session: TraceSession,
    entry: BeamState | None = None,
    color_fn: ColorFn | None = None,
) -> str:
    """
    Render a finished trace, highlighting the entry cell if given.

    The title shows the entry and energized count, e.g. " (0,0)> 46 ".
    """
    if entry is not None:
        title = (
            f"({entry.position.x},{entry.position.y})"
            f"{ARROWS[entry.direction]} {session.energized_count}"
        )
        highlight = entry.position
    else:
        title = str(session.energized_count)
        highlight = None

    logger.debug("render_trace: %s", title)
    return "\n".join(
        render_grid_simple(
            grid,
            energized=session.energized,
            highlight_pos=highlight,
            color_fn=color_fn,
            title=title,
        )
    )
