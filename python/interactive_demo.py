"""
Interactive demo for beamgrid.
Walk the beam entry around the border with keyboard commands and watch the
energized cells update.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import element_color_fn, render_trace
from beamgrid import (
    BeamState,
    Grid,
    MalformedGridError,
    TraceSession,
    best_entry,
    entry_configurations,
    load_grid,
    parse_grid,
    trace,
)
from demo import EXAMPLE


class InteractiveDemo:
    """Interactive explorer over border entries."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.entries: list[BeamState] = list(entry_configurations(grid))
        self.index = 0
        self.best: tuple[BeamState, int] | None = None
        self.console = Console()
        self.status_message = "Ready"

    @property
    def entry(self) -> BeamState:
        return self.entries[self.index]

    def current_session(self) -> TraceSession:
        return trace(self.grid, self.entry.position, self.entry.direction)

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        entry = self.entry
        session = self.current_session()
        grid_text = render_trace(self.grid, session, entry, color_fn=element_color_fn)

        status = Text()
        status.append("Entry: ", style="bold")
        status.append(
            f"({entry.position.x}, {entry.position.y}) heading {entry.direction.value}"
            f"  [{self.index + 1}/{len(self.entries)}]\n"
        )
        status.append("Energized: ", style="bold")
        status.append(f"{session.energized_count}\n")
        if self.best is not None:
            best, best_count = self.best
            status.append("Best: ", style="bold")
            status.append(
                f"{best_count} from ({best.position.x}, {best.position.y}) heading {best.direction.value}\n"
            )
        status.append("\n")

        # Convert ANSI-colored grid text to Rich Text properly
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N - Next entry\n")
        status.append("  P - Previous entry\n")
        status.append("  B - Jump to best entry\n")
        status.append("  R - Reset to first entry\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Beamgrid Entry Explorer", border_style="green", width=80)

    def move(self, step: int) -> None:
        """Move to the next (step=1) or previous (step=-1) border entry."""
        self.index = (self.index + step) % len(self.entries)
        self.status_message = f"Entry {self.index + 1} of {len(self.entries)}"

    def jump_to_best(self) -> None:
        if self.best is None:
            self.best = best_entry(self.grid)
        if self.best is None:
            self.status_message = "No border entries"
            return
        self.index = self.entries.index(self.best[0])
        self.status_message = f"✓ Best entry energizes {self.best[1]} cells"

    def reset(self) -> None:
        self.index = 0
        self.status_message = "Reset to first entry"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'n':
                        self.move(1)
                    elif key.lower() == 'p':
                        self.move(-1)
                    elif key.lower() == 'b':
                        self.jump_to_best()
                    elif key.lower() == 'r':
                        self.reset()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(argv: list[str]) -> int:
    try:
        grid = load_grid(argv[1]) if len(argv) > 1 else parse_grid(EXAMPLE)
    except MalformedGridError as e:
        print(f"Parse error: {e}")
        return 1
    except OSError as e:
        print(f"Cannot read puzzle: {e}")
        return 1

    InteractiveDemo(grid).run()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    sys.exit(main(sys.argv))
