"""Pytest configuration and shared fixtures for asciiheat tests."""

import pytest
import tempfile
from pathlib import Path

from asciiheat.params import GenerationParams


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def small_params():
    """A small, seeded parameter set that renders quickly."""
    return GenerationParams(rows=10, cols=40, seed=42)


@pytest.fixture
def mock_config_file(temp_dir):
    """Create a mock configuration file."""
    config_path = temp_dir / "asciiheat.yaml"
    config = {
        "defaults": {
            "scale": 50.0,
            "octaves": 3,
            "fade_factor_range": 0.2,
            "chars": " ░▒▓█",
        },
        "palette": ["#000000", "#ffffff"],
    }

    import yaml
    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.dump(config, f, allow_unicode=True)

    return str(config_path)


def strip_ansi_codes(text):
    """Remove ANSI escape codes from text for testing."""
    import re
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
    return ansi_escape.sub('', text)
