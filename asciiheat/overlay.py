"""
Block-font text composited over the heatmap.
Glyph strokes darken the heatmap behind them; every position prints a space,
so the text shows up as a color-only silhouette.
"""

import logging
from typing import List, Sequence

import pyfiglet

from .errors import ResourceError
from .gradient import RGB8, luminance
from .terminal import Cell

logger = logging.getLogger(__name__)

BLACK: RGB8 = (0, 0, 0)
WHITE: RGB8 = (255, 255, 255)
DARKEN_FACTOR = 0.4
LUMINANCE_THRESHOLD = 128
# The font leaves blank rows below the glyphs
TRAILING_LINES = 2


def render_glyph_raster(text: str, font: str = "big") -> List[str]:
    """Render ``text`` through a figlet font, minus the trailing blank rows."""
    try:
        fig = pyfiglet.Figlet(font=font, width=1000)
    except pyfiglet.FontNotFound as e:
        raise ResourceError(f"Font not found: {font}") from e
    except pyfiglet.FigletError as e:
        raise ResourceError(f"Could not load font {font}: {e}") from e

    missing = sorted({ch for ch in text if ord(ch) not in fig.Font.chars and ch != '\n'})
    if missing:
        raise ResourceError(
            f"Font {font} cannot render: {''.join(missing)!r}"
        )

    try:
        rendered = fig.renderText(text)
    except pyfiglet.FigletError as e:
        raise ResourceError(f"Could not render {text!r} with font {font}: {e}") from e

    lines = str(rendered).splitlines()
    raster = lines[:-TRAILING_LINES] if len(lines) > TRAILING_LINES else []
    logger.debug("Rendered %r as %d glyph rows (font %s)", text, len(raster), font)
    return raster


def text_color_for(background: RGB8) -> RGB8:
    """Black text on bright backgrounds, white on dark ones."""
    if luminance(background) > LUMINANCE_THRESHOLD:
        return BLACK
    return WHITE


def darken(color: RGB8, factor: float = DARKEN_FACTOR) -> RGB8:
    return tuple(round(factor * channel) for channel in color)


def overlay_text(colors: Sequence[Sequence[RGB8]], raster: Sequence[str]) -> List[List[Cell]]:
    """Composite a glyph raster over a grid of background colors.

    Produces one row per raster line, stopping at the height of ``colors``.
    Each row spans the full width of ``colors``; raster lines shorter than
    that are padded with spaces.
    """
    cells = []
    height = min(len(raster), len(colors))
    for i in range(height):
        line = raster[i]
        row = []
        for j, background in enumerate(colors[i]):
            glyph = line[j] if j < len(line) else ' '
            text_color = text_color_for(background)
            if glyph != ' ':
                background = darken(background)
            row.append(Cell(' ', text_color, background))
        cells.append(row)
    return cells
