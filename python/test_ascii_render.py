"""Tests for ascii_render and the demos built on it."""

from pathlib import Path

from rich.panel import Panel

from ascii_render import (
    ARROWS,
    ELEMENT_COLORS,
    element_color_fn,
    render_element_map,
    render_energy_map,
    render_grid_simple,
    render_trace,
)
from beamgrid import BeamState, Direction, ElementType, Position, parse_grid, trace
from demo import EXAMPLE, main
from interactive_demo import InteractiveDemo
from interactive_demo import main as interactive_main

EXPECTED_ENERGY_MAP = "\n".join(
    [
        "######....",
        ".#...#....",
        ".#...#####",
        ".#...##...",
        ".#...##...",
        ".#...##...",
        ".#..####..",
        "########..",
        ".#######..",
        ".#...#.#..",
    ]
)


class TestPlainMaps:
    """Tests for the uncoloured element and energy maps."""

    def test_element_map_round_trip(self) -> None:
        grid = parse_grid(EXAMPLE)
        assert render_element_map(grid) == EXAMPLE.strip()

    def test_energy_map_example(self) -> None:
        grid = parse_grid(EXAMPLE)
        session = trace(grid, Position(0, 0), Direction.E)
        assert render_energy_map(grid, session.energized) == EXPECTED_ENERGY_MAP

    def test_energy_map_nothing_energized(self) -> None:
        grid = parse_grid("..\n..")
        assert render_energy_map(grid, set()) == "..\n.."


class TestRenderGridSimple:
    """Tests for boxed rendering."""

    def test_plain_box(self) -> None:
        grid = parse_grid("./\n|-")
        lines = render_grid_simple(grid, title="g")
        assert lines == [
            "┌──┐",
            "│./│",
            "│|-│",
            "└──┘",
        ]

    def test_title_centred(self) -> None:
        grid = parse_grid("......")
        lines = render_grid_simple(grid, title="ab")
        assert lines[0] == "┌─ ab ─┐"

    def test_energized_empty_cells_marked(self) -> None:
        grid = parse_grid("...")
        lines = render_grid_simple(grid, energized={Position(0, 0), Position(1, 0)})
        assert lines[1] == "│##.│"

    def test_energized_elements_keep_symbol(self) -> None:
        grid = parse_grid("./")
        lines = render_grid_simple(grid, energized={Position(0, 0), Position(1, 0)})
        assert lines[1] == "│#/│"

    def test_cell_width(self) -> None:
        grid = parse_grid("./")
        lines = render_grid_simple(grid, cell_width=3)
        assert lines[1] == "│ .  / │"
        assert lines[-1] == "└" + "─" * 6 + "┘"

    def test_color_fn_called_per_cell(self) -> None:
        grid = parse_grid("./")
        seen: list[tuple[ElementType, bool]] = []

        def color_fn(element: ElementType, lit: bool):
            seen.append((element, lit))
            return lambda s: f"<{s}>"

        lines = render_grid_simple(grid, energized={Position(1, 0)}, color_fn=color_fn)
        assert lines[1] == "│<.></>│"
        assert seen == [(ElementType.EMPTY_SPACE, False), (ElementType.FORWARD_MIRROR, True)]

    def test_highlight_keeps_content(self) -> None:
        grid = parse_grid("...")
        lines = render_grid_simple(grid, highlight_pos=Position(1, 0))
        assert lines[1].startswith("│.")
        assert lines[1].endswith(".│")
        assert "." in lines[1][2:-2]

    def test_element_color_fn_wraps_text(self) -> None:
        for element in ElementType:
            for lit in (False, True):
                assert "x" in element_color_fn(element, lit)("x")

    def test_element_colors_cover_every_element(self) -> None:
        assert set(ELEMENT_COLORS) == set(ElementType)
        for element in ElementType:
            assert element_color_fn(element, False) is ELEMENT_COLORS[element]


class TestRenderTrace:
    """Tests for render_trace()."""

    def test_row_count(self) -> None:
        grid = parse_grid(EXAMPLE)
        entry = BeamState(Position(0, 0), Direction.E)
        session = trace(grid, entry.position, entry.direction)
        rendered = render_trace(grid, session, entry)
        assert len(rendered.split("\n")) == grid.rows + 2

    def test_title_shows_count(self) -> None:
        grid = parse_grid("." * 12)
        entry = BeamState(Position(0, 0), Direction.E)
        session = trace(grid, entry.position, entry.direction)
        rendered = render_trace(grid, session, entry)
        assert "(0,0)> 12" in rendered.split("\n")[0]

    def test_arrows_cover_every_direction(self) -> None:
        assert set(ARROWS) == set(Direction)

    def test_title_arrow_for_west_entry(self) -> None:
        grid = parse_grid("." * 12)
        entry = BeamState(Position(11, 0), Direction.W)
        session = trace(grid, entry.position, entry.direction)
        rendered = render_trace(grid, session, entry)
        assert "(11,0)< 12" in rendered.split("\n")[0]

    def test_without_entry(self) -> None:
        grid = parse_grid("....")
        session = trace(grid, Position(0, 0), Direction.E)
        rendered = render_trace(grid, session)
        assert rendered.split("\n")[1] == "│####│"


class TestDemos:
    """Smoke tests for the demo scripts."""

    def test_demo_main_example(self, capsys) -> None:
        assert main(["demo.py"]) == 0
        out = capsys.readouterr().out
        assert "Part one (energized from top-left): 46" in out
        assert "Part two (best border entry):       51" in out
        assert EXPECTED_ENERGY_MAP in out

    def test_demo_main_file(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "puzzle.txt"
        path.write_text("...\n", encoding="utf-8")
        assert main(["demo.py", str(path)]) == 0
        assert "Part one (energized from top-left): 3" in capsys.readouterr().out

    def test_demo_main_parse_error(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("..\n.\n", encoding="utf-8")
        assert main(["demo.py", str(path)]) == 1
        assert "Parse error" in capsys.readouterr().out

    def test_demo_main_missing_file(self, tmp_path: Path, capsys) -> None:
        assert main(["demo.py", str(tmp_path / "missing.txt")]) == 1
        assert "Cannot read puzzle" in capsys.readouterr().out

    def test_interactive_main_missing_file(self, tmp_path: Path, capsys) -> None:
        assert interactive_main(["interactive_demo.py", str(tmp_path / "missing.txt")]) == 1
        assert "Cannot read puzzle" in capsys.readouterr().out

    def test_interactive_main_parse_error(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "bad.txt"
        path.write_text(".x\n", encoding="utf-8")
        assert interactive_main(["interactive_demo.py", str(path)]) == 1
        assert "Parse error" in capsys.readouterr().out

    def test_interactive_display(self) -> None:
        demo = InteractiveDemo(parse_grid(EXAMPLE))
        assert len(demo.entries) == 40
        assert isinstance(demo.generate_display(), Panel)

    def test_interactive_navigation(self) -> None:
        demo = InteractiveDemo(parse_grid(EXAMPLE))
        demo.move(-1)
        assert demo.index == len(demo.entries) - 1
        demo.move(1)
        assert demo.index == 0

        demo.jump_to_best()
        assert demo.best is not None
        assert demo.best[1] == 51
        assert demo.entry == demo.best[0]
        assert demo.current_session().energized_count == 51
        assert isinstance(demo.generate_display(), Panel)

        demo.reset()
        assert demo.index == 0
