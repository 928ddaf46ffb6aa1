"""
Image to ASCII Art Converter - Output Grid
==========================================
Cells and the row-major grid they are assembled into.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from asciigrid.constants import (
    BORDER_BOTTOM_LEFT,
    BORDER_BOTTOM_RIGHT,
    BORDER_HORIZONTAL,
    BORDER_TOP_LEFT,
    BORDER_TOP_RIGHT,
    BORDER_VERTICAL,
)


@dataclass(frozen=True)
class Cell:
    """One character of output."""
    char: str
    value: float = 0.0                                   # Brightness or edge strength
    color: Optional[Tuple[int, int, int]] = None         # Block color, None for border
    bounds: Optional[Tuple[int, int, int, int]] = None   # Source (x0, y0, x1, y1)


class OutputGrid:
    """Flat, row-major grid of cells; every row has ``width`` cells."""

    def __init__(self, cells: Sequence[Cell], width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        if len(cells) != width * height:
            raise ValueError(
                f"Expected {width * height} cells for a {width}x{height} grid, got {len(cells)}"
            )
        self.cells: List[Cell] = list(cells)
        self.width = width
        self.height = height

    def __eq__(self, other):
        if not isinstance(other, OutputGrid):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def __repr__(self):
        return f"OutputGrid({self.width}x{self.height})"

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row * self.width + col]

    def rows(self) -> Iterator[List[Cell]]:
        for row in range(self.height):
            start = row * self.width
            yield self.cells[start:start + self.width]

    def text_lines(self) -> List[str]:
        """Characters only, one string per row."""
        return [''.join(cell.char for cell in row) for row in self.rows()]

    def flip_x(self) -> 'OutputGrid':
        """Reverse the column order of every row."""
        cells = []
        for row in self.rows():
            cells.extend(reversed(row))
        return OutputGrid(cells, self.width, self.height)

    def flip_y(self) -> 'OutputGrid':
        """Reverse the row order."""
        cells = []
        for row in reversed(list(self.rows())):
            cells.extend(row)
        return OutputGrid(cells, self.width, self.height)

    def with_border(self) -> 'OutputGrid':
        """Wrap the grid in a box-drawing frame, one cell wide on every side."""
        width = self.width + 2
        cells = [Cell(BORDER_TOP_LEFT)]
        cells.extend(Cell(BORDER_HORIZONTAL) for _ in range(self.width))
        cells.append(Cell(BORDER_TOP_RIGHT))

        for row in self.rows():
            cells.append(Cell(BORDER_VERTICAL))
            cells.extend(row)
            cells.append(Cell(BORDER_VERTICAL))

        cells.append(Cell(BORDER_BOTTOM_LEFT))
        cells.extend(Cell(BORDER_HORIZONTAL) for _ in range(self.width))
        cells.append(Cell(BORDER_BOTTOM_RIGHT))

        return OutputGrid(cells, width, self.height + 2)
