"""Tests for colour strategies and gradients."""
from __future__ import annotations

import matplotlib
import pytest

from pointgroups.config import ColourStrategy, IngestionConfig
from pointgroups.error_handling import (
    ConfigurationError,
    DegenerateGradientRangeError,
    MissingIntensityFieldError,
)
from pointgroups.loaders import RecordParser
from pointgroups.processors import (
    ColourGradient,
    FlatColouring,
    HeightColouring,
    IntensityColouring,
    RGBColouring,
    build_colour_policy,
)


RED = (1.0, 0.0, 0.0)
GREY = (0.5, 0.5, 0.5)


def parse(line, **kwargs):
    return RecordParser(**kwargs).parse(line)


def test_flat_colour_ignores_record():
    policy = FlatColouring(GREY)

    assert policy.colour_for(parse("1,2,3,255,0,0")) == GREY


def test_rgb_normalizes_channels():
    policy = RGBColouring(GREY)

    assert policy.colour_for(parse("1,2,3,255,0,0")) == RED
    assert policy.colour_for(parse("1,2,3,0,51,255")) == pytest.approx((0.0, 0.2, 1.0))


def test_rgb_falls_back_to_default_colour():
    policy = RGBColouring(GREY)

    assert policy.colour_for(parse("1,2,3")) == GREY


def test_height_evaluates_gradient_at_normalized_height(recording_gradient):
    policy = HeightColouring(0.0, 10.0, recording_gradient)

    policy.colour_for(parse("0,5,3"))

    assert recording_gradient.calls == [pytest.approx(0.5)]


def test_height_uses_third_field_when_axes_swapped(recording_gradient):
    policy = HeightColouring(0.0, 10.0, recording_gradient, invert_yz=True)

    policy.colour_for(parse("0,5,2", invert_yz=True))

    assert recording_gradient.calls == [pytest.approx(0.2)]


def test_height_ignores_scale(recording_gradient):
    policy = HeightColouring(0.0, 10.0, recording_gradient)

    policy.colour_for(parse("0,5,0", scale=100.0))

    assert recording_gradient.calls == [pytest.approx(0.5)]


def test_intensity_evaluates_gradient(recording_gradient):
    policy = IntensityColouring(10.0, 20.0, recording_gradient)

    colour = policy.colour_for(parse("0,0,0,1,2,3,12.5"))

    assert recording_gradient.calls == [pytest.approx(0.25)]
    assert colour == pytest.approx((0.25, 0.25, 0.25))


def test_intensity_requires_seventh_field(recording_gradient):
    policy = IntensityColouring(0.0, 1.0, recording_gradient)

    with pytest.raises(MissingIntensityFieldError):
        policy.colour_for(parse("1,2,3,255,0,0"))


@pytest.mark.parametrize("policy_type", [HeightColouring, IntensityColouring])
def test_zero_range_is_rejected(policy_type, recording_gradient):
    with pytest.raises(DegenerateGradientRangeError):
        policy_type(4.0, 4.0, recording_gradient)


@pytest.mark.parametrize("strategy,expected", [
    (ColourStrategy.DEFAULT, FlatColouring),
    (ColourStrategy.RGB, RGBColouring),
    (ColourStrategy.HEIGHT, HeightColouring),
    (ColourStrategy.INTENSITY, IntensityColouring),
])
def test_build_colour_policy_picks_handler(strategy, expected):
    config = IngestionConfig(colour_points_by=strategy)

    assert isinstance(build_colour_policy(config), expected)


def test_gradient_from_stops_interpolates_and_clamps():
    gradient = ColourGradient.from_stops([(0.0, (0.0, 0.0, 0.0)), (1.0, (1.0, 1.0, 1.0))])

    assert gradient.evaluate(0.0) == pytest.approx((0.0, 0.0, 0.0))
    assert gradient.evaluate(1.0) == pytest.approx((1.0, 1.0, 1.0))
    assert gradient.evaluate(0.5) == pytest.approx((0.5, 0.5, 0.5), abs=1e-2)
    assert gradient.evaluate(-3.0) == pytest.approx((0.0, 0.0, 0.0))
    assert gradient.evaluate(7.0) == pytest.approx((1.0, 1.0, 1.0))


def test_gradient_stops_hold_end_colours():
    gradient = ColourGradient.from_stops([(0.25, "red"), (0.75, "blue")])

    assert gradient.evaluate(0.1) == pytest.approx(RED)
    assert gradient.evaluate(0.9) == pytest.approx((0.0, 0.0, 1.0))


def test_gradient_from_colormap_name():
    gradient = ColourGradient.from_value("viridis")

    assert gradient.evaluate(0.0) == pytest.approx(matplotlib.colormaps["viridis"](0.0)[:3])
    assert gradient.evaluate(2.0) == pytest.approx(gradient.evaluate(1.0))


def test_unknown_gradient_name_is_configuration_error():
    with pytest.raises(ConfigurationError):
        ColourGradient.from_name("not-a-colormap")


def test_gradient_stop_outside_unit_range_is_rejected():
    with pytest.raises(ConfigurationError):
        ColourGradient.from_stops([(0.0, "red"), (1.5, "blue")])
