"""
Fractal noise fields.
Seeded 2D Perlin (gradient) noise summed over octaves, plus min/max normalization.
"""

import logging
from typing import Optional

import numpy as np

from .errors import ConfigurationError, DegenerateInputError
from .params import GenerationParams, amplitude_total

logger = logging.getLogger(__name__)

# Corner gradients: the four diagonals and the four axes
_GRADIENTS = np.array([
    [1, 1], [-1, 1], [1, -1], [-1, -1],
    [1, 0], [-1, 0], [0, 1], [0, -1],
], dtype=np.float64)


def _fade(t):
    """Perlin fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a, b, t):
    return a + t * (b - a)


class PerlinNoise:
    """Deterministic 2D gradient noise.

    The permutation table is shuffled by ``rng``, so two instances built from
    generators with the same seed produce the same field. Output is roughly
    in [-1, 1] and exactly 0 at integer lattice points.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        if rng is None:
            rng = np.random.default_rng(0)
        permutation = rng.permutation(256)
        self._perm = np.concatenate([permutation, permutation])

    def _corner(self, hashed, dx, dy):
        gradient = _GRADIENTS[hashed % len(_GRADIENTS)]
        return gradient[..., 0] * dx + gradient[..., 1] * dy

    def __call__(self, x, y):
        """Sample the noise at coordinates x, y (scalars or same-shape arrays)."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        x0 = np.floor(x)
        y0 = np.floor(y)
        xf = x - x0
        yf = y - y0
        xi = x0.astype(np.int64) & 255
        yi = y0.astype(np.int64) & 255

        perm = self._perm
        aa = perm[perm[xi] + yi]
        ab = perm[perm[xi] + yi + 1]
        ba = perm[perm[xi + 1] + yi]
        bb = perm[perm[xi + 1] + yi + 1]

        u = _fade(xf)
        v = _fade(yf)
        bottom = _lerp(self._corner(aa, xf, yf), self._corner(ba, xf - 1, yf), u)
        top = _lerp(self._corner(ab, xf, yf - 1), self._corner(bb, xf - 1, yf - 1), u)
        return _lerp(bottom, top, v)


def generate_field(params: GenerationParams, noise) -> np.ndarray:
    """Sum ``params.octaves`` octaves of ``noise`` over a rows x cols grid.

    Row index i drives the first noise coordinate and column index j the
    second. Each octave multiplies frequency by lacunarity and amplitude by
    persistence; the sum is divided by the total amplitude.
    """
    if params.octaves < 1:
        raise ConfigurationError(f"octaves must be at least 1, got {params.octaves}")
    if params.scale <= 0:
        raise ConfigurationError(f"scale must be positive, got {params.scale}")
    norm = amplitude_total(params.octaves, params.persistence)
    if norm == 0:
        raise ConfigurationError(
            f"persistence {params.persistence} cancels out over {params.octaves} octaves"
        )

    rows_idx, cols_idx = np.meshgrid(
        np.arange(params.rows, dtype=np.float64),
        np.arange(params.cols, dtype=np.float64),
        indexing='ij',
    )

    value = np.zeros((params.rows, params.cols), dtype=np.float64)
    frequency = 1.0
    amplitude = 1.0
    for _ in range(params.octaves):
        value += noise(rows_idx / params.scale * frequency,
                       cols_idx / params.scale * frequency) * amplitude
        amplitude *= params.persistence
        frequency *= params.lacunarity

    field = value / norm
    logger.debug("Generated %dx%d field over %d octaves", params.rows, params.cols, params.octaves)
    return field


def normalize_field(grid: np.ndarray, fallback: Optional[float] = 0.5) -> np.ndarray:
    """Rescale ``grid`` to [0, 1] by its global min and max.

    A constant grid has no range to rescale; every cell becomes ``fallback``,
    or DegenerateInputError is raised when fallback is None.
    """
    grid = np.asarray(grid, dtype=np.float64)
    if grid.size == 0:
        raise DegenerateInputError("Cannot normalize an empty field")
    if not np.all(np.isfinite(grid)):
        raise DegenerateInputError("Field contains non-finite values")

    min_val = grid.min()
    max_val = grid.max()
    logger.debug("Field range before normalization: %.6f .. %.6f", min_val, max_val)

    if max_val == min_val:
        if fallback is None:
            raise DegenerateInputError(f"Field is constant ({min_val}); nothing to normalize")
        logger.warning("Noise field is constant, using %.2f for every cell", fallback)
        return np.full_like(grid, fallback)

    normalized = (grid - min_val) / (max_val - min_val)
    # guard against rounding drifting a hair outside the range
    return np.clip(normalized, 0.0, 1.0)
