#!/usr/bin/env python3

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml
from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .errors import ConfigurationError, HeatmapError
from .gradient import DEFAULT_PALETTE, ColorGradient, parse_palette, to_rgb8
from .heatmap import build_heatmap
from .params import GenerationParams
from .terminal import get_terminal_size, write_cells

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "scale": 100.0,
    "octaves": 6,
    "persistence": 0.5,
    "lacunarity": 2.0,
    "fade_factor_range": 0.1,
    "font": "big",
    "chars": "█",
}

_CONVERTERS = {
    "scale": float,
    "octaves": int,
    "persistence": float,
    "lacunarity": float,
    "fade_factor_range": float,
    "font": str,
    "chars": str,
    "seed": int,
}


def load_config(config_path: str = "asciiheat.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file, or the built-in defaults if it doesn't exist."""
    config_file = Path(config_path)
    if not config_file.exists():
        return {"defaults": dict(DEFAULT_SETTINGS)}

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    defaults = config.get('defaults') or {}
    if not isinstance(defaults, dict):
        raise ConfigurationError(f"'defaults' in {config_path} must be a mapping")

    unknown = sorted(set(defaults) - set(_CONVERTERS))
    if unknown:
        raise ConfigurationError(f"Unknown settings in {config_path}: {', '.join(unknown)}")

    merged = dict(DEFAULT_SETTINGS)
    for key, value in defaults.items():
        try:
            merged[key] = _CONVERTERS[key](value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid value for {key} in {config_path}: {value!r}") from e
    config['defaults'] = merged

    if 'palette' in config:
        palette = config['palette']
        if not isinstance(palette, list):
            raise ConfigurationError(f"'palette' in {config_path} must be a list of colors")
        config['palette'] = ColorGradient.from_strings(palette).stops

    return config


def build_params(rows: int, cols: int, config: Dict[str, Any], **overrides) -> GenerationParams:
    """Combine command-line overrides with config settings.

    Options left as None on the command line fall back to the config file,
    then to the built-in defaults.
    """
    settings = dict(DEFAULT_SETTINGS)
    settings.update(config.get('defaults') or {})
    settings.update({key: value for key, value in overrides.items() if value is not None})

    palette = settings.get('palette') or config.get('palette') or DEFAULT_PALETTE
    if isinstance(palette, str):
        palette = parse_palette(palette)

    return GenerationParams(
        rows=rows,
        cols=cols,
        scale=settings['scale'],
        octaves=settings['octaves'],
        persistence=settings['persistence'],
        lacunarity=settings['lacunarity'],
        fade_factor_range=settings['fade_factor_range'],
        seed=settings.get('seed'),
        overlay_text=settings.get('text'),
        font=settings['font'],
        charset=settings['chars'],
        palette=tuple(palette),
    ).validate()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def show_params(params: GenerationParams) -> None:
    """Print the effective parameters as a table instead of rendering."""
    console = Console()
    table = Table(title="Heatmap settings", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name in ("rows", "cols", "scale", "octaves", "persistence", "lacunarity",
                 "fade_factor_range", "seed", "overlay_text", "font", "charset"):
        value = getattr(params, name)
        table.add_row(name, "random" if name == "seed" and value is None else str(value))

    for index, stop in enumerate(params.palette):
        r, g, b = to_rgb8(stop)
        table.add_row(f"palette[{index}]", f"[rgb({r},{g},{b})]██[/] #{r:02x}{g:02x}{b:02x}")

    console.print(table)


@click.command()
@click.argument('rows', type=int)
@click.option('--scale', '-s', type=float, help='Noise scale; larger values give smoother fields [default: 100.0]')
@click.option('--octaves', '-o', type=int, help='Number of noise octaves [default: 6]')
@click.option('--persistence', '-p', type=float, help='Amplitude decay per octave [default: 0.5]')
@click.option('--lacunarity', '-l', type=float, help='Frequency growth per octave [default: 2.0]')
@click.option('--fade-factor-range', '-f', type=float, help='Random jitter of the right-edge fade, 0 to 1 [default: 0.1]')
@click.option('--random', '-r', 'seed', type=int, help='Random seed for reproducible output')
@click.option('--text', '-t', help='Text to overlay in a block font')
@click.option('--font', help='Figlet font for the overlay text (e.g., "big", "banner3", "colossal") [default: big]')
@click.option('--chars', help='Glyphs selected by value for the plain heatmap, lightest first (e.g., " ░▒▓█")')
@click.option('--palette', help='Comma separated hex color stops (e.g., "#282a36,#8be9fd")')
@click.option('--config', '-c', default='asciiheat.yaml', help='Config file path')
@click.option('--show-config', is_flag=True, help='Show the effective settings and exit')
@click.option('--verbose', '-v', is_flag=True, help='Log pipeline progress to stderr')
@click.option('--version', is_flag=True, is_eager=True, expose_value=False, callback=lambda ctx, param, value: (click.echo(f"asciiheat, version {__version__}"), ctx.exit()) if value else None, help='Show the version and exit.')
def main(rows: int, scale: Optional[float], octaves: Optional[int], persistence: Optional[float], lacunarity: Optional[float], fade_factor_range: Optional[float], seed: Optional[int], text: Optional[str], font: Optional[str], chars: Optional[str], palette: Optional[str], config: str, show_config: bool, verbose: bool):
    """Render a fractal noise heatmap in the terminal.

    ROWS: Number of rows to draw. The width follows the terminal (80 columns
    when it cannot be detected).

    With --text, the text is drawn in a block font as a darker silhouette on
    top of the heatmap, and only the rows covered by the text are printed.
    """
    setup_logging(verbose)

    try:
        config_data = load_config(config)
        cols, _ = get_terminal_size()
        logger.debug("Drawing %d columns", cols)
        params = build_params(
            rows, cols, config_data,
            scale=scale,
            octaves=octaves,
            persistence=persistence,
            lacunarity=lacunarity,
            fade_factor_range=fade_factor_range,
            seed=seed,
            text=text,
            font=font,
            chars=chars,
            palette=palette,
        )

        if show_config:
            show_params(params)
            return

        cells = build_heatmap(params)
    except HeatmapError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    write_cells(cells, sys.stdout)


if __name__ == '__main__':
    main()
