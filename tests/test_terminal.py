"""Tests for ANSI rendering of cell grids."""

import os
from unittest.mock import MagicMock, patch

from asciiheat.terminal import (
    RESET,
    Cell,
    bg_escape,
    fg_escape,
    get_terminal_size,
    render_cell,
    render_cells,
    write_cells,
)
from tests.conftest import strip_ansi_codes


def test_escape_sequences():
    assert fg_escape((1, 2, 3)) == "\x1b[38;2;1;2;3m"
    assert bg_escape((255, 0, 128)) == "\x1b[48;2;255;0;128m"
    assert RESET == "\x1b[0m"


def test_cell_with_background():
    cell = Cell(" ", (0, 0, 0), (10, 20, 30))
    assert render_cell(cell) == "\x1b[48;2;10;20;30m\x1b[38;2;0;0;0m \x1b[0m"


def test_cell_without_background():
    cell = Cell("█", (40, 42, 54))
    assert render_cell(cell) == "\x1b[38;2;40;42;54m█\x1b[0m"


def test_rows_end_with_newline():
    cells = [[Cell("a", (1, 1, 1)), Cell("b", (2, 2, 2))], [Cell("c", (3, 3, 3), (0, 0, 0))]]
    output = render_cells(cells)
    assert output.count("\n") == 2
    assert output.endswith("\n")
    assert strip_ansi_codes(output) == "ab\nc\n"


def test_empty_grid():
    assert render_cells([]) == ""


def test_write_cells_flushes():
    stream = MagicMock()
    write_cells([[Cell("x", (9, 9, 9))]], stream)
    stream.write.assert_called_once_with("\x1b[38;2;9;9;9mx\x1b[0m\n")
    stream.flush.assert_called_once()


def test_terminal_size_from_os():
    with patch("asciiheat.terminal.os.get_terminal_size", return_value=os.terminal_size((132, 43))):
        assert get_terminal_size() == (132, 43)


def test_terminal_size_fallback():
    with patch("asciiheat.terminal.os.get_terminal_size", side_effect=OSError):
        assert get_terminal_size() == (80, 20)
        assert get_terminal_size((100, 30)) == (100, 30)
