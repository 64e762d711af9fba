"""Cell grid, styles and geometry for a terminal screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Iterator, List, Optional, Tuple

from softterm.colors import AnyColor, Color

Position = Tuple[int, int]


class Modifier(IntFlag):
    """Text style modifiers of a cell."""

    BOLD = 0b0000_0000_0001
    DIM = 0b0000_0000_0010
    ITALIC = 0b0000_0000_0100
    UNDERLINED = 0b0000_0000_1000
    SLOW_BLINK = 0b0000_0001_0000
    RAPID_BLINK = 0b0000_0010_0000
    REVERSED = 0b0000_0100_0000
    HIDDEN = 0b0000_1000_0000
    CROSSED_OUT = 0b0001_0000_0000


@dataclass
class Cell:
    """One character cell: its symbol, colours and modifiers."""

    symbol: str = " "
    fg: AnyColor = Color.RESET
    bg: AnyColor = Color.RESET
    modifier: Modifier = Modifier(0)

    def reset(self) -> None:
        """Return the cell to its empty state."""
        self.symbol = " "
        self.fg = Color.RESET
        self.bg = Color.RESET
        self.modifier = Modifier(0)


@dataclass(frozen=True)
class Size:
    """A width and height."""

    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    """A rectangle of cells."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def size(self) -> Size:
        """The rectangle's dimensions."""
        return Size(self.width, self.height)


@dataclass
class Buffer:
    """A rectangular grid of cells addressed by absolute (x, y) positions."""

    area: Rect
    content: List[Cell] = field(default_factory=list)

    def __init__(self, area: Rect) -> None:
        self.area = area
        self.content = [Cell() for _ in range(area.area)]

    def _index(self, x: int, y: int) -> Optional[int]:
        a = self.area
        if a.x <= x < a.x + a.width and a.y <= y < a.y + a.height:
            return (y - a.y) * a.width + (x - a.x)
        return None

    def __getitem__(self, position: Position) -> Cell:
        x, y = position
        index = self._index(x, y)
        if index is None:
            raise IndexError(f"position ({x}, {y}) outside {self.area}")
        return self.content[index]

    def __setitem__(self, position: Position, cell: Cell) -> None:
        x, y = position
        index = self._index(x, y)
        if index is None:
            raise IndexError(f"position ({x}, {y}) outside {self.area}")
        self.content[index] = cell

    def __iter__(self) -> Iterator[Tuple[int, int, Cell]]:
        a = self.area
        for i, cell in enumerate(self.content):
            yield a.x + i % a.width, a.y + i // a.width, cell

    def cell(self, x: int, y: int) -> Optional[Cell]:
        """Return the cell at (x, y), or None if it lies outside the area."""
        index = self._index(x, y)
        return None if index is None else self.content[index]

    def reset(self) -> None:
        """Empty every cell."""
        for cell in self.content:
            cell.reset()

    def resize(self, area: Rect) -> None:
        """Change the area, truncating or extending the cells with empty ones."""
        length = area.area
        if len(self.content) > length:
            del self.content[length:]
        else:
            self.content.extend(Cell() for _ in range(length - len(self.content)))
        self.area = area