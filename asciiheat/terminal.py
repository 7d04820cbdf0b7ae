"""
24-bit ANSI rendering of cell grids.
"""

import os
from typing import IO, List, NamedTuple, Optional, Sequence, Tuple

from .gradient import RGB8

RESET = '\033[0m'

CellGrid = List[List["Cell"]]


class Cell(NamedTuple):
    """One character position: glyph, foreground and optional background."""
    char: str
    fg: RGB8
    bg: Optional[RGB8] = None


def fg_escape(color: RGB8) -> str:
    r, g, b = color
    return f'\033[38;2;{r};{g};{b}m'


def bg_escape(color: RGB8) -> str:
    r, g, b = color
    return f'\033[48;2;{r};{g};{b}m'


def render_cell(cell: Cell) -> str:
    background = bg_escape(cell.bg) if cell.bg is not None else ''
    return f"{background}{fg_escape(cell.fg)}{cell.char}{RESET}"


def render_cells(cells: Sequence[Sequence[Cell]]) -> str:
    """Render a cell grid as escape-coded text, one newline-terminated line per row."""
    lines = []
    for row in cells:
        lines.append(''.join(render_cell(cell) for cell in row))
    return ''.join(line + '\n' for line in lines)


def write_cells(cells: Sequence[Sequence[Cell]], stream: IO[str]) -> None:
    """Write a rendered grid to ``stream`` and flush once at the end."""
    stream.write(render_cells(cells))
    stream.flush()


def get_terminal_size(fallback: Tuple[int, int] = (80, 20)) -> Tuple[int, int]:
    """Return (columns, rows) of the attached terminal, or ``fallback``."""
    try:
        size = os.get_terminal_size()
        if size.columns > 0 and size.lines > 0:
            return size.columns, size.lines
    except OSError:
        pass
    return fallback
