"""
Light-beam tracing through a grid of mirrors and splitters.

Beams are explored as a reachability problem over (position, direction)
states: trace -> count energized cells, or try every border entry and keep
the best.
"""

from __future__ import annotations

import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from grid_parser import load_grid, parse_grid, parse_grid_rows
from grid_types import (
    DELTAS,
    BeamState,
    Direction,
    ElementType,
    Grid,
    MalformedGridError,
    OutOfBoundsAccess,
    ParseError,
    Position,
)

__all__ = [
    "BeamState",
    "DEFAULT_RULES",
    "DELTAS",
    "Direction",
    "ElementType",
    "FrontierStrategy",
    "Grid",
    "MalformedGridError",
    "OutOfBoundsAccess",
    "ParseError",
    "Position",
    "REDIRECTIONS",
    "TraceRules",
    "TraceSession",
    "best_entry",
    "count_energized",
    "entry_configurations",
    "load_grid",
    "max_energized",
    "parse_grid",
    "parse_grid_rows",
    "redirect",
    "solve_best_entry",
    "solve_single_entry",
    "trace",
    "trace_beams",
]

logger = logging.getLogger(__name__)


class FrontierStrategy(Enum):
    """Order in which pending beams are taken off the frontier."""

    STACK = "stack"  # LIFO, depth-first
    QUEUE = "queue"  # FIFO, breadth-first


@dataclass(frozen=True)
class TraceRules:
    """Rules governing how traces are run."""

    frontier: FrontierStrategy = FrontierStrategy.STACK
    max_workers: int = 1  # >1 fans border entries out over a thread pool


DEFAULT_RULES = TraceRules()


# =============================================================================
# Redirection Table
# =============================================================================

_N, _E, _S, _W = Direction.N, Direction.E, Direction.S, Direction.W

REDIRECTIONS: dict[tuple[ElementType, Direction], tuple[Direction, ...]] = {
    (ElementType.EMPTY_SPACE, _N): (_N,),
    (ElementType.EMPTY_SPACE, _E): (_E,),
    (ElementType.EMPTY_SPACE, _S): (_S,),
    (ElementType.EMPTY_SPACE, _W): (_W,),
    # '/'
    (ElementType.FORWARD_MIRROR, _N): (_E,),
    (ElementType.FORWARD_MIRROR, _E): (_N,),
    (ElementType.FORWARD_MIRROR, _S): (_W,),
    (ElementType.FORWARD_MIRROR, _W): (_S,),
    # '\'
    (ElementType.BACKWARD_MIRROR, _N): (_W,),
    (ElementType.BACKWARD_MIRROR, _E): (_S,),
    (ElementType.BACKWARD_MIRROR, _S): (_E,),
    (ElementType.BACKWARD_MIRROR, _W): (_N,),
    # '|'
    (ElementType.VERTICAL_SPLITTER, _N): (_N,),
    (ElementType.VERTICAL_SPLITTER, _E): (_N, _S),
    (ElementType.VERTICAL_SPLITTER, _S): (_S,),
    (ElementType.VERTICAL_SPLITTER, _W): (_N, _S),
    # '-'
    (ElementType.HORIZONTAL_SPLITTER, _N): (_E, _W),
    (ElementType.HORIZONTAL_SPLITTER, _E): (_E,),
    (ElementType.HORIZONTAL_SPLITTER, _S): (_E, _W),
    (ElementType.HORIZONTAL_SPLITTER, _W): (_W,),
}


def redirect(element: ElementType, incoming: Direction) -> tuple[Direction, ...]:
    """Outgoing direction(s) of a beam entering element while moving incoming."""
    return REDIRECTIONS[(element, incoming)]


# =============================================================================
# Tracing
# =============================================================================


@dataclass
class TraceSession:
    """
    Visitation state for a single trace.

    Owned by exactly one trace and thrown away once the count is read; the
    Grid itself never carries per-trace state.
    """

    processed: set[BeamState] = field(default_factory=set)
    energized: set[Position] = field(default_factory=set)

    @property
    def energized_count(self) -> int:
        return len(self.energized)


def trace_beams(
    grid: Grid,
    session: TraceSession,
    start: Position,
    direction: Direction,
    rules: TraceRules = DEFAULT_RULES,
) -> int:
    """
    Follow every beam reachable from (start, direction), recording into session.

    Each (position, direction) state is processed at most once, so the trace
    ends after at most 4 * rows * cols states no matter how the mirrors loop.
    A split at a splitter also records the two outgoing states on that cell.

    The relative order in which the two halves of a split are explored
    depends on rules.frontier and is not part of the contract; the processed
    and energized sets are the same either way.

    Args:
        grid: The grid to trace through
        session: Fresh session to populate
        start: Cell the beam starts on (its element applies immediately)
        direction: Direction the beam is moving when it reaches start
        rules: Frontier strategy

    Returns:
        Number of distinct energized positions
    """
    frontier: deque[BeamState] = deque([BeamState(start, direction)])
    take = frontier.pop if rules.frontier is FrontierStrategy.STACK else frontier.popleft

    while frontier:
        state = take()

        # Beam left the grid
        if not grid.in_bounds(state.position):
            continue
        # Identical beam already followed
        if state in session.processed:
            continue

        session.processed.add(state)
        session.energized.add(state.position)

        element = grid.element_at(state.position)
        outgoing_dirs = redirect(element, state.direction)
        for outgoing in outgoing_dirs:
            if len(outgoing_dirs) > 1:
                # Split halves run along the splitter's axis, where a beam
                # arriving at this cell would continue identically
                session.processed.add(BeamState(state.position, outgoing))
            frontier.append(BeamState(state.position.step(outgoing), outgoing))

    logger.debug(
        "trace_beams: start=(%d, %d) %s processed=%d energized=%d",
        start.x,
        start.y,
        direction.value,
        len(session.processed),
        session.energized_count,
    )
    return session.energized_count


def trace(
    grid: Grid,
    start: Position,
    direction: Direction,
    rules: TraceRules = DEFAULT_RULES,
) -> TraceSession:
    """Run a trace in a fresh session and return the populated session."""
    session = TraceSession()
    trace_beams(grid, session, start, direction, rules)
    return session


def count_energized(
    grid: Grid,
    start_position: Position,
    start_direction: Direction,
    rules: TraceRules = DEFAULT_RULES,
) -> int:
    """Number of cells energized by a beam entering at start_position."""
    return trace_beams(grid, TraceSession(), start_position, start_direction, rules)


# =============================================================================
# Entry Search
# =============================================================================


def entry_configurations(grid: Grid) -> Iterator[BeamState]:
    """
    Yield every border entry, pointing into the grid.

    Columns first (top edge heading S, bottom edge heading N), then rows
    (left edge heading E, right edge heading W): 2 * (rows + cols) entries.
    Corner cells appear once per edge they sit on.
    """
    rows, cols = grid.rows, grid.cols
    if rows == 0 or cols == 0:
        return
    for x in range(cols):
        yield BeamState(Position(x, 0), Direction.S)
        yield BeamState(Position(x, rows - 1), Direction.N)
    for y in range(rows):
        yield BeamState(Position(0, y), Direction.E)
        yield BeamState(Position(cols - 1, y), Direction.W)


def _score_entries(grid: Grid, rules: TraceRules) -> list[tuple[BeamState, int]]:
    entries = list(entry_configurations(grid))

    def score(entry: BeamState) -> int:
        return count_energized(grid, entry.position, entry.direction, rules)

    if rules.max_workers > 1 and len(entries) > 1:
        # Grid is read-only; every call builds its own TraceSession
        with ThreadPoolExecutor(max_workers=rules.max_workers) as executor:
            counts = list(executor.map(score, entries))
    else:
        counts = [score(entry) for entry in entries]

    return list(zip(entries, counts))


def best_entry(grid: Grid, rules: TraceRules = DEFAULT_RULES) -> tuple[BeamState, int] | None:
    """
    Find the border entry that energizes the most cells.

    Returns:
        (entry, count) for the first entry reaching the maximum, in
        entry_configurations() order, or None if the grid has no border
    """
    scored = _score_entries(grid, rules)
    if not scored:
        return None

    best, best_count = scored[0]
    for entry, count in scored[1:]:
        if count > best_count:
            best, best_count = entry, count

    logger.info(
        "best_entry: %d candidates, best=(%d, %d) %s energizing %d",
        len(scored),
        best.position.x,
        best.position.y,
        best.direction.value,
        best_count,
    )
    return (best, best_count)


def max_energized(grid: Grid, rules: TraceRules = DEFAULT_RULES) -> int:
    """Maximum energized count over all border entries (0 for a borderless grid)."""
    result = best_entry(grid, rules)
    return result[1] if result is not None else 0


# =============================================================================
# Entry Points
# =============================================================================


def solve_single_entry(
    grid_text: str,
    start: Position | tuple[int, int] = (0, 0),
    direction: Direction = Direction.E,
) -> int:
    """Energized tile count for a single fixed entry (part one)."""
    grid = parse_grid(grid_text)
    if not isinstance(start, Position):
        start = Position(*start)
    return count_energized(grid, start, direction)


def solve_best_entry(grid_text: str) -> int:
    """Best energized tile count over all border entries (part two)."""
    return max_energized(parse_grid(grid_text))
