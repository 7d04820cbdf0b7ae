"""Generation parameters for a heatmap run."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ConfigurationError
from .gradient import DEFAULT_PALETTE, RGB

MAX_SEED = 2 ** 64 - 1


@dataclass(frozen=True)
class GenerationParams:
    """Immutable settings for one invocation.

    ``cols`` normally comes from the terminal width. ``seed`` of None means a
    random seed is chosen when the pipeline starts.
    """

    rows: int
    cols: int = 80
    scale: float = 100.0
    octaves: int = 6
    persistence: float = 0.5
    lacunarity: float = 2.0
    fade_factor_range: float = 0.1
    seed: Optional[int] = None
    overlay_text: Optional[str] = None
    font: str = "big"
    charset: str = "█"
    palette: Tuple[RGB, ...] = DEFAULT_PALETTE

    def validate(self) -> "GenerationParams":
        """Raise ConfigurationError for any value the pipeline cannot use."""
        if not isinstance(self.rows, int) or self.rows <= 0:
            raise ConfigurationError(f"rows must be a positive integer, got {self.rows!r}")
        if not isinstance(self.cols, int) or self.cols <= 0:
            raise ConfigurationError(f"cols must be a positive integer, got {self.cols!r}")
        if not isinstance(self.octaves, int) or self.octaves < 1:
            raise ConfigurationError(f"octaves must be at least 1, got {self.octaves!r}")
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ConfigurationError(f"scale must be a positive number, got {self.scale!r}")
        for name in ("persistence", "lacunarity"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite, got {getattr(self, name)!r}")
        if not 0.0 <= self.fade_factor_range <= 1.0:
            raise ConfigurationError(
                f"fade factor range must be between 0 and 1, got {self.fade_factor_range!r}"
            )
        if self.seed is not None and not 0 <= self.seed <= MAX_SEED:
            raise ConfigurationError(f"seed must fit in an unsigned 64-bit integer, got {self.seed!r}")
        if not self.charset:
            raise ConfigurationError("charset must contain at least one character")
        if len(self.palette) < 2:
            raise ConfigurationError("palette needs at least two color stops")
        if amplitude_total(self.octaves, self.persistence) == 0:
            raise ConfigurationError(
                f"persistence {self.persistence} cancels out over {self.octaves} octaves"
            )
        return self


def amplitude_total(octaves: int, persistence: float) -> float:
    """Sum of the per-octave amplitudes, starting at 1."""
    total = 0.0
    amplitude = 1.0
    for _ in range(octaves):
        total += amplitude
        amplitude *= persistence
    return total
