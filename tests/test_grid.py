"""Tests for grid assembly: flips and borders."""

from __future__ import annotations

import pytest

from asciigrid.grid import Cell, OutputGrid


def _grid(lines):
    width = len(lines[0])
    cells = [Cell(ch, float(i), (i, i, i)) for i, ch in enumerate("".join(lines))]
    return OutputGrid(cells, width, len(lines))


def test_text_lines_and_indexing():
    grid = _grid(["abc", "def"])
    assert grid.text_lines() == ["abc", "def"]
    assert grid.cell(1, 2).char == "f"
    assert [len(row) for row in grid.rows()] == [3, 3]


def test_flip_x_reverses_columns():
    assert _grid(["abc", "def"]).flip_x().text_lines() == ["cba", "fed"]


def test_flip_y_reverses_rows():
    assert _grid(["abc", "def"]).flip_y().text_lines() == ["def", "abc"]


@pytest.mark.parametrize("lines", [["a"], ["ab", "cd", "ef"], ["abcd"], ["a", "b", "c"]])
def test_flips_are_involutions(lines):
    grid = _grid(lines)
    assert grid.flip_x().flip_x() == grid
    assert grid.flip_y().flip_y() == grid


def test_flips_commute():
    grid = _grid(["abc", "def", "ghi"])
    assert grid.flip_x().flip_y() == grid.flip_y().flip_x()


def test_border_adds_two_per_axis():
    grid = _grid(["ab", "cd"])
    bordered = grid.with_border()

    assert (bordered.width, bordered.height) == (grid.width + 2, grid.height + 2)
    assert bordered.text_lines() == [
        "╔══╗",
        "║ab║",
        "║cd║",
        "╚══╝",
    ]


def test_border_cells_are_uncolored():
    bordered = _grid(["a"]).with_border()
    assert bordered.cell(0, 0).color is None
    assert bordered.cell(1, 1).color == (0, 0, 0)


def test_single_cell_border_is_3x3():
    bordered = _grid(["x"]).with_border()
    assert (bordered.width, bordered.height) == (3, 3)


def test_cell_count_must_match_dimensions():
    with pytest.raises(ValueError):
        OutputGrid([Cell("a")], 2, 1)
    with pytest.raises(ValueError):
        OutputGrid([], 0, 0)
