"""asciiheat - Fractal noise heatmaps with block-font text for the terminal"""

__version__ = "0.1.0"
__author__ = "Ryan Robitaille"
__description__ = "Fractal noise heatmaps rendered in 24-bit terminal color, with optional block-font text overlay"

# Import main entry point
from .main import main

__all__ = ['main']
