"""
Color gradient over linear RGB control points.
Stops are evenly spaced: stop k of N sits at position k / (N - 1).
"""

from typing import Iterable, List, Sequence, Tuple, Union

from .errors import ConfigurationError

RGB = Tuple[float, float, float]
RGB8 = Tuple[int, int, int]

# Dracula background through light blue and cyan
DEFAULT_PALETTE: Tuple[RGB, ...] = (
    (0.157, 0.165, 0.212),
    (0.0, 0.5, 0.7),
    (0.545, 0.914, 0.992),
    (0.7, 0.85, 0.9),
)


class ColorGradient:
    """Piecewise linear gradient across two or more color stops."""

    def __init__(self, stops: Sequence[RGB] = DEFAULT_PALETTE):
        if len(stops) < 2:
            raise ConfigurationError("A gradient needs at least two color stops")
        self.stops: Tuple[RGB, ...] = tuple(tuple(float(c) for c in stop) for stop in stops)

    @classmethod
    def from_strings(cls, colors: Iterable[Union[str, Sequence[float]]]) -> "ColorGradient":
        """Build a gradient from hex strings or [r, g, b] float triples."""
        return cls([parse_color(color) for color in colors])

    def at(self, t: float) -> RGB:
        """Return the interpolated color at position t (clamped to [0, 1])."""
        t = min(max(float(t), 0.0), 1.0)
        if t == 1.0:
            return self.stops[-1]
        segments = len(self.stops) - 1
        position = t * segments
        index = min(int(position), segments - 1)
        local_t = position - index

        a = self.stops[index]
        b = self.stops[index + 1]
        return (
            a[0] + (b[0] - a[0]) * local_t,
            a[1] + (b[1] - a[1]) * local_t,
            a[2] + (b[2] - a[2]) * local_t,
        )

    def at_rgb8(self, t: float) -> RGB8:
        return to_rgb8(self.at(t))

    def __len__(self) -> int:
        return len(self.stops)

    def __repr__(self) -> str:
        return f"ColorGradient({list(self.stops)!r})"


def to_rgb8(color: RGB) -> RGB8:
    """Convert float channels to 8-bit using round(), clamped to [0, 255]."""
    return tuple(min(max(round(channel * 255), 0), 255) for channel in color)


def luminance(color: RGB8) -> float:
    """Perceptual luminance of an 8-bit color, 0.299R + 0.587G + 0.114B."""
    r, g, b = color
    # integer weights keep greys exact: (128, 128, 128) is 128.0
    return (299 * r + 587 * g + 114 * b) / 1000


def hex_to_rgb(hex_color: str) -> RGB8:
    hex_color = hex_color.lstrip('#')
    if len(hex_color) != 6:
        raise ValueError(f"expected 6 hex digits, got {hex_color!r}")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def parse_color(value: Union[str, Sequence[float]]) -> RGB:
    """Parse one palette entry.

    Accepts "#rrggbb" (8-bit channels scaled to [0, 1]) or a sequence of three
    floats already in [0, 1].
    """
    if isinstance(value, str):
        try:
            r, g, b = hex_to_rgb(value.strip())
        except ValueError as e:
            raise ConfigurationError(f"Invalid hex color {value!r}: {e}") from e
        return (r / 255, g / 255, b / 255)

    try:
        channels = [float(c) for c in value]
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid color {value!r}") from e
    if len(channels) != 3 or not all(0.0 <= c <= 1.0 for c in channels):
        raise ConfigurationError(f"Color must be three channels in [0, 1], got {value!r}")
    return (channels[0], channels[1], channels[2])


def parse_palette(value: str) -> List[RGB]:
    """Parse a comma separated list of hex colors, e.g. "#000000,#ffffff"."""
    colors = [part for part in (p.strip() for p in value.split(',')) if part]
    palette = [parse_color(color) for color in colors]
    if len(palette) < 2:
        raise ConfigurationError("A palette needs at least two colors")
    return palette
