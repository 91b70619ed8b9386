"""
===============================================================================
COSMORISK - Configuration and Units Test Suite
===============================================================================
Tests for the YAML-backed RiskConfig (packaged defaults, overrides, type
checking, validation) and for unit conversions and distance formatting.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging

import pytest
import yaml
from numpy.testing import assert_allclose

from cosmorisk.core.config import RiskConfig, load_config, DEFAULT_CONFIG_PATH
from cosmorisk.core.exceptions import ConfigError, CosmoRiskError, InvalidInputError
from cosmorisk.core.units import (
    DistanceUnit, au_to_km, au_to_ld, joules_to_megatons,
    au_per_day_to_km_s, mps_to_au_per_day, au_per_day_to_mps, format_distance,
)


# =============================================================================
# Test: Configuration
# =============================================================================

class TestRiskConfig:

    def test_packaged_file_matches_builtin_defaults(self):
        assert DEFAULT_CONFIG_PATH.exists()
        assert load_config() == RiskConfig()

    def test_builtin_defaults(self):
        config = RiskConfig()
        assert config.default_sma_au == 1.5
        assert config.default_eccentricity == 0.2
        assert config.default_earth_distance_au == 1.0
        assert config.moid_samples == 72
        assert config.moid_floor_au == 1e-4
        assert config.visual_samples == 128
        assert config.preview_steps == 200
        assert config.delta_v_scale == 1e-5
        assert config.moid_refine is False

    def test_partial_override(self):
        config = RiskConfig.from_dict({'moid': {'samples': 144}, 'display': {'distance_unit': 'LD'}})
        assert config.moid_samples == 144
        assert config.distance_unit == 'ld'
        assert config.preview_steps == 200

    def test_empty_mapping_gives_defaults(self):
        assert RiskConfig.from_dict(None) == RiskConfig()
        assert RiskConfig.from_dict({}) == RiskConfig()

    def test_integer_accepted_for_float(self):
        config = RiskConfig.from_dict({'defaults': {'semi_major_axis_au': 2}})
        assert config.default_sma_au == 2.0
        assert isinstance(config.default_sma_au, float)

    def test_unknown_keys_warn(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = RiskConfig.from_dict({'moid': {'samplez': 10}, 'render': {'fps': 60}})
        assert config == RiskConfig()
        assert "moid.samplez" in caplog.text
        assert "render" in caplog.text

    @pytest.mark.parametrize("data", [
        {'moid': {'samples': 'many'}},
        {'moid': {'samples': 2.5}},
        {'moid': {'refine': 'yes'}},
        {'preview': {'dt_days': True}},
        {'display': {'distance_unit': 3}},
        {'defaults': ['not', 'a', 'mapping']},
    ])
    def test_wrong_types_rejected(self, data):
        with pytest.raises(ConfigError):
            RiskConfig.from_dict(data)

    @pytest.mark.parametrize("data", [
        {'defaults': {'eccentricity': 1.0}},
        {'defaults': {'semi_major_axis_au': -1.0}},
        {'moid': {'samples': 2}},
        {'preview': {'steps': 0}},
        {'display': {'distance_unit': 'parsec'}},
    ])
    def test_invalid_values_rejected(self, data):
        with pytest.raises(ConfigError):
            RiskConfig.from_dict(data)

    def test_from_yaml(self, tmp_path):
        path = tmp_path / 'risk.yaml'
        path.write_text("moid:\n  refine: true\npreview:\n  steps: 50\n")
        config = RiskConfig.from_yaml(path)
        assert config.moid_refine is True
        assert config.preview_steps == 50

    def test_as_dict_round_trip(self, tmp_path):
        config = RiskConfig(moid_samples=36, distance_unit='km', default_sma_au=2.5)
        path = tmp_path / 'dump.yaml'
        path.write_text(yaml.safe_dump(config.as_dict()))
        assert load_config(path) == config

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / 'absent.yaml')

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("moid: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_config_error_hierarchy(self):
        assert issubclass(ConfigError, CosmoRiskError)
        assert issubclass(ConfigError, ValueError)

    def test_immutable(self):
        with pytest.raises(AttributeError):
            RiskConfig().moid_samples = 10


# =============================================================================
# Test: Units
# =============================================================================

class TestUnits:

    def test_au_to_km(self):
        assert au_to_km(1.0) == 149597870.7

    def test_au_to_ld(self):
        assert_allclose(au_to_ld(1.0), 389.17)

    def test_megatons(self):
        assert_allclose(joules_to_megatons(4.184e15), 1.0)

    def test_speed_conversions_are_inverse(self):
        assert_allclose(mps_to_au_per_day(au_per_day_to_mps(0.0172)), 0.0172)
        assert_allclose(au_per_day_to_km_s(0.0172), 29.78, rtol=1e-3)

    @pytest.mark.parametrize("value,unit,text", [
        (1.0, 'au', '1.000000 AU'),
        (1.0, 'ld', '389.17 LD'),
        (1.0, 'km', '149.60 M km'),
        (0.002, 'km', '299.2 K km'),
        (5e-6, 'km', '748 km'),
        (0.1, DistanceUnit.LD, '38.92 LD'),
    ])
    def test_format_distance(self, value, unit, text):
        assert format_distance(value, unit) == text

    def test_format_distance_default_unit(self):
        assert format_distance(0.123456) == '0.123456 AU'

    def test_unknown_unit(self):
        with pytest.raises(InvalidInputError):
            format_distance(1.0, 'parsec')
