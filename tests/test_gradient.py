"""Tests for the color gradient and color helpers."""

import pytest

from asciiheat.errors import ConfigurationError
from asciiheat.gradient import (
    DEFAULT_PALETTE,
    ColorGradient,
    hex_to_rgb,
    luminance,
    parse_color,
    parse_palette,
    to_rgb8,
)


def test_endpoints_match_first_and_last_stop():
    gradient = ColorGradient()
    assert gradient.at(0.0) == DEFAULT_PALETTE[0]
    assert gradient.at(1.0) == DEFAULT_PALETTE[-1]
    assert gradient.at_rgb8(0.0) == (40, 42, 54)
    assert gradient.at_rgb8(1.0) == (178, 217, 230)


def test_interior_stops_are_hit_exactly():
    gradient = ColorGradient()
    assert gradient.at(1 / 3) == pytest.approx(DEFAULT_PALETTE[1])
    assert gradient.at(2 / 3) == pytest.approx(DEFAULT_PALETTE[2])


def test_linear_interpolation_between_stops():
    gradient = ColorGradient([(0.0, 0.0, 0.0), (1.0, 0.5, 0.2)])
    assert gradient.at(0.5) == pytest.approx((0.5, 0.25, 0.1))
    assert gradient.at(0.25) == pytest.approx((0.25, 0.125, 0.05))


def test_out_of_range_is_clamped():
    gradient = ColorGradient()
    assert gradient.at(-3.0) == gradient.at(0.0)
    assert gradient.at(7.5) == gradient.at(1.0)


def test_many_stops():
    stops = [(i / 4, 0.0, 1 - i / 4) for i in range(5)]
    gradient = ColorGradient(stops)
    assert len(gradient) == 5
    assert gradient.at(0.5) == pytest.approx((0.5, 0.0, 0.5))
    assert gradient.at(0.625) == pytest.approx((0.625, 0.0, 0.375))


def test_needs_two_stops():
    with pytest.raises(ConfigurationError):
        ColorGradient([(0.0, 0.0, 0.0)])


def test_to_rgb8_rounds_rather_than_truncates():
    # 0.545 * 255 = 138.975 would truncate to 138; 0.5 * 255 = 127.5 rounds half to even
    assert to_rgb8((0.545, 0.5, 0.999)) == (139, 128, 255)
    assert to_rgb8((0.0, 0.002, 0.998)) == (0, 1, 254)


def test_to_rgb8_clamps():
    assert to_rgb8((-0.2, 1.3, 0.5)) == (0, 255, 128)


def test_luminance_of_greys_is_exact():
    assert luminance((128, 128, 128)) == 128.0
    assert luminance((0, 0, 0)) == 0.0
    assert luminance((255, 255, 255)) == 255.0


def test_luminance_weights():
    assert luminance((255, 0, 0)) == pytest.approx(76.245)
    assert luminance((0, 255, 0)) == pytest.approx(149.685)
    assert luminance((0, 0, 255)) == pytest.approx(29.07)


def test_hex_parsing():
    assert hex_to_rgb("#8BE9FD") == (139, 233, 253)
    assert parse_color("#ffffff") == (1.0, 1.0, 1.0)
    assert parse_color([0.1, 0.2, 0.3]) == (0.1, 0.2, 0.3)


@pytest.mark.parametrize("bad", ["#12345", "blue", [0.1, 0.2], [0.1, 2.0, 0.3], None])
def test_invalid_colors(bad):
    with pytest.raises(ConfigurationError):
        parse_color(bad)


def test_parse_palette():
    palette = parse_palette("#000000, #ff0000 ,#ffffff")
    assert palette == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 1.0)]
    with pytest.raises(ConfigurationError):
        parse_palette("#000000")


def test_from_strings():
    gradient = ColorGradient.from_strings(["#000000", [1.0, 1.0, 1.0]])
    assert gradient.at_rgb8(0.5) == (128, 128, 128)
