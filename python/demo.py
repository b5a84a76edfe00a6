#!/usr/bin/env python3
"""
Demo of beam tracing on the example contraption, or on a puzzle file.

    python demo.py [puzzle.txt]
"""

import logging
import sys

from ascii_render import element_color_fn, render_element_map, render_energy_map, render_trace
from beamgrid import (
    BeamState,
    Direction,
    Grid,
    MalformedGridError,
    Position,
    best_entry,
    load_grid,
    parse_grid,
    trace,
)

EXAMPLE = r"""
.|...\....
|.-.\.....
.....|-...
........|.
..........
.........\
..../.\\..
.-.-/..|..
.|....-|.\
..//.|....
"""


def single_entry_demo(grid: Grid) -> int:
    """Trace from the top-left corner heading east and print both maps."""
    entry = BeamState(Position(0, 0), Direction.E)
    session = trace(grid, entry.position, entry.direction)

    print("=" * 40)
    print("Element map:")
    print("=" * 40)
    print(render_element_map(grid))
    print()

    print("=" * 40)
    print("Energy map from (0,0) heading E:")
    print("=" * 40)
    print(render_energy_map(grid, session.energized))
    print()
    print(render_trace(grid, session, entry, color_fn=element_color_fn))
    print()
    return session.energized_count


def best_entry_demo(grid: Grid) -> int:
    """Search the border for the entry that energizes the most cells."""
    result = best_entry(grid)
    if result is None:
        return 0
    entry, count = result

    print("=" * 40)
    print(f"Best entry: ({entry.position.x},{entry.position.y}) heading {entry.direction.value}")
    print("=" * 40)
    session = trace(grid, entry.position, entry.direction)
    print(render_trace(grid, session, entry, color_fn=element_color_fn))
    print()
    return count


def main(argv: list[str]) -> int:
    try:
        grid = load_grid(argv[1]) if len(argv) > 1 else parse_grid(EXAMPLE)
    except MalformedGridError as e:
        print(f"Parse error: {e}")
        return 1
    except OSError as e:
        print(f"Cannot read puzzle: {e}")
        return 1

    part_one = single_entry_demo(grid)
    part_two = best_entry_demo(grid)

    print(f"Part one (energized from top-left): {part_one}")
    print(f"Part two (best border entry):       {part_two}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    sys.exit(main(sys.argv))
