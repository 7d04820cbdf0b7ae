#!/usr/bin/env python3
"""
Noise heatmap pipeline.
Builds the fractal field, normalizes it, fades it toward the right edge,
colors it through the gradient and optionally composites block-font text.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from .gradient import RGB8, ColorGradient
from .noise_field import PerlinNoise, generate_field, normalize_field
from .overlay import overlay_text, render_glyph_raster
from .params import GenerationParams
from .terminal import Cell, CellGrid, render_cells

logger = logging.getLogger(__name__)

SEED_BITS = 63


def resolve_seed(seed: Optional[int]) -> int:
    """Return ``seed`` or a fresh random one."""
    if seed is not None:
        return seed
    return int(np.random.default_rng().integers(0, 2 ** SEED_BITS))


def fade_factor(column: int, cols: int, jitter: float) -> float:
    factor = 1.0 - (column / cols) * (1.0 + jitter)
    return min(max(factor, 0.0), 1.0)


def fade_value(value: float, column: int, cols: int, fade_range: float,
               rng: np.random.Generator) -> float:
    """Fade one value by its column position, with one random jitter draw."""
    jitter = rng.uniform(-fade_range, fade_range)
    return value * fade_factor(column, cols, jitter)


def fade_field(grid: np.ndarray, fade_range: float, rng: np.random.Generator) -> np.ndarray:
    """Apply the column fade to every cell of ``grid``.

    Jitter is drawn in one block in row-major order, consuming ``rng`` the
    same way as calling fade_value cell by cell.
    """
    rows, cols = grid.shape
    jitter = rng.uniform(-fade_range, fade_range, size=(rows, cols))
    columns = np.arange(cols, dtype=np.float64) / cols
    factors = np.clip(1.0 - columns[np.newaxis, :] * (1.0 + jitter), 0.0, 1.0)
    return grid * factors


def select_glyph(value: float, charset: str) -> str:
    """Pick a glyph from ``charset`` by value; denser glyphs for higher values."""
    index = int(round(value * (len(charset) - 1)))
    return charset[min(max(index, 0), len(charset) - 1)]


def color_grid(values: np.ndarray, gradient: ColorGradient) -> List[List[RGB8]]:
    return [[gradient.at_rgb8(value) for value in row] for row in values.tolist()]


def block_cells(values: np.ndarray, colors: Sequence[Sequence[RGB8]], charset: str) -> CellGrid:
    """Plain heatmap cells: a glyph in the gradient color, no background."""
    cells = []
    for value_row, color_row in zip(values.tolist(), colors):
        cells.append([Cell(select_glyph(value, charset), color)
                      for value, color in zip(value_row, color_row)])
    return cells


def build_heatmap(params: GenerationParams) -> CellGrid:
    """Run the full pipeline and return the finished cell grid."""
    params.validate()

    # Load the font up front so a bad font or text fails before any work
    raster = None
    if params.overlay_text:
        raster = render_glyph_raster(params.overlay_text, params.font)

    seed = resolve_seed(params.seed)
    logger.debug("Using seed %d", seed)
    rng = np.random.default_rng(seed)

    noise = PerlinNoise(rng)
    field = generate_field(params, noise)
    values = normalize_field(field)
    values = fade_field(values, params.fade_factor_range, rng)

    gradient = ColorGradient(params.palette)
    colors = color_grid(values, gradient)

    if raster is None:
        return block_cells(values, colors, params.charset)
    return overlay_text(colors, raster)


def render_heatmap(params: GenerationParams) -> str:
    """Build the heatmap and render it as ANSI text."""
    return render_cells(build_heatmap(params))


if __name__ == "__main__":
    import sys

    from .terminal import get_terminal_size

    columns, _ = get_terminal_size()
    print("Noise Heatmap Examples")
    print("=" * columns)

    print("\n1. PLAIN HEATMAP:")
    print("-" * columns)
    write = sys.stdout.write
    write(render_heatmap(GenerationParams(rows=10, cols=columns, seed=42)))

    print("\n2. SHADED GLYPHS:")
    print("-" * columns)
    write(render_heatmap(GenerationParams(rows=10, cols=columns, seed=42, charset=" ░▒▓█")))

    print("\n3. TEXT OVERLAY:")
    print("-" * columns)
    write(render_heatmap(GenerationParams(rows=10, cols=columns, seed=42, overlay_text="heat")))
