"""Tests for ingestion configuration."""
from __future__ import annotations

import json

import pytest

from pointgroups.config import ColourStrategy, IngestionConfig, load_config
from pointgroups.error_handling import ConfigurationError, DegenerateGradientRangeError


def test_defaults():
    config = IngestionConfig()

    assert config.scale == 1.0
    assert config.invert_yz is False
    assert config.relocate_to_origin is False
    assert config.batch_capacity == 65000
    assert config.colour_points_by is ColourStrategy.RGB
    config.validate()


def test_strategy_by_name():
    assert IngestionConfig(colour_points_by="Height").colour_points_by is ColourStrategy.HEIGHT


def test_unknown_strategy():
    with pytest.raises(ConfigurationError):
        IngestionConfig(colour_points_by="rainbow")


def test_degenerate_height_range():
    config = IngestionConfig(colour_points_by="height", min_height=2.0, max_height=2.0)

    with pytest.raises(DegenerateGradientRangeError):
        config.validate()


def test_degenerate_intensity_range():
    config = IngestionConfig(colour_points_by="intensity", min_intensity=1.0, max_intensity=1.0)

    with pytest.raises(DegenerateGradientRangeError):
        config.validate()


def test_degenerate_range_of_inactive_strategy_is_ignored():
    IngestionConfig(colour_points_by="rgb", min_height=2.0, max_height=2.0).validate()


@pytest.mark.parametrize("options", [
    {'batch_capacity': 0},
    {'scale': 0.0},
    {'scale': float('inf')},
    {'default_colour': (2.0, 0.0, 0.0)},
    {'on_malformed': 'ignore'},
    {'delimiter': ''},
    {'progress_interval': 0},
])
def test_invalid_options(options):
    with pytest.raises(ConfigurationError):
        IngestionConfig(**options).validate()


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError):
        IngestionConfig.from_dict({'scale': 2.0, 'colour': 'red'})


def test_load_config_with_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        'scale': 0.5,
        'invert_yz': True,
        'colour_points_by': 'intensity',
        'gradient': [[0.0, [0, 0, 0]], [1.0, [1, 1, 1]]],
    }))

    config = load_config(path, scale=2.0)

    assert config.scale == 2.0
    assert config.invert_yz is True
    assert config.colour_points_by is ColourStrategy.INTENSITY
    assert IngestionConfig.from_dict(config.to_dict()) == config


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.json")


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ConfigurationError):
        load_config(path)
