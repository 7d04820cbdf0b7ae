"""Error kinds raised by the heatmap pipeline."""


class HeatmapError(Exception):
    """Base class for every error the pipeline raises."""


class ConfigurationError(HeatmapError, ValueError):
    """Invalid generation parameters or configuration file."""


class ResourceError(HeatmapError):
    """The block font is missing, malformed, or cannot render the text."""


class DegenerateInputError(HeatmapError):
    """A field that cannot be normalized (constant or non-finite)."""
