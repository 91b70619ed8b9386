"""
===============================================================================
COSMORISK - Kernel Configuration
===============================================================================
Every "use the field if present, else a constant" fallback in the kernel
reads its constant from a single RiskConfig instance, so default values are
centralised and testable.

Configuration files are YAML with four sections:

    defaults:   stand-in orbital elements and Earth distance
    moid:       MOID sampling parameters
    preview:    trajectory projector constants
    display:    visual path resolution and distance unit

Any key may be omitted; omitted keys keep the built-in value.
===============================================================================
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from cosmorisk.core.constants import (
    GM_SUN, GM_JUPITER,
    JUPITER_SMA_AU, JUPITER_PERIOD_DAYS, JUPITER_GUARD_AU,
    SRP_COEFFICIENT,
    MOID_SAMPLES, VISUAL_SAMPLES, MOID_FLOOR_AU,
    PREVIEW_STEPS, PREVIEW_DT_DAYS, DELTA_V_SCALE,
)
from cosmorisk.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / 'config' / 'risk_config.yaml'


@dataclass(frozen=True)
class RiskConfig:
    """
    Immutable bundle of kernel defaults and tuning constants.

    Attributes
    ----------
    default_sma_au, default_eccentricity, default_inclination,
    default_raan, default_arg_perihelion : float
        Orbital elements substituted when a snapshot carries none.
    default_earth_distance_au : float
        Distance to Earth assumed when no Earth snapshot is available.
    moid_samples : int
        Points per orbit for the MOID grid scan.
    moid_floor_au : float
        Lower clamp on MOID results.
    moid_refine : bool
        Polish the grid MOID with a continuous minimisation.
    visual_samples : int
        Segments in a reconstructed orbit path.
    preview_steps, preview_dt_days : int, float
        Length and step size of a deflection preview.
    delta_v_scale : float
        Factor converting a m/s impulse into the preview's AU/day velocity.
    gm_sun, gm_jupiter : float
        Gravitational parameters (AU^3/day^2).
    jupiter_sma_au, jupiter_period_days, jupiter_guard_au : float
        Circular Jupiter model and its singularity guard radius.
    srp_coefficient : float
        Solar-radiation-pressure strength (AU^3/day^2).
    distance_unit : str
        Preferred display unit ('au', 'km' or 'ld').
    """
    default_sma_au: float = 1.5
    default_eccentricity: float = 0.2
    default_inclination: float = 0.0
    default_raan: float = 0.0
    default_arg_perihelion: float = 0.0
    default_earth_distance_au: float = 1.0

    moid_samples: int = MOID_SAMPLES
    moid_floor_au: float = MOID_FLOOR_AU
    moid_refine: bool = False

    visual_samples: int = VISUAL_SAMPLES

    preview_steps: int = PREVIEW_STEPS
    preview_dt_days: float = PREVIEW_DT_DAYS
    delta_v_scale: float = DELTA_V_SCALE
    gm_sun: float = GM_SUN
    gm_jupiter: float = GM_JUPITER
    jupiter_sma_au: float = JUPITER_SMA_AU
    jupiter_period_days: float = JUPITER_PERIOD_DAYS
    jupiter_guard_au: float = JUPITER_GUARD_AU
    srp_coefficient: float = SRP_COEFFICIENT

    distance_unit: str = 'au'

    # ------------------------------------------------------------------ #
    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'RiskConfig':
        """
        Build a configuration from a nested mapping (the parsed YAML).

        Parameters
        ----------
        data : mapping or None
            Sections 'defaults', 'moid', 'preview', 'display'.

        Returns
        -------
        RiskConfig

        Raises
        ------
        ConfigError
            If a section is not a mapping or a value has the wrong type.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration root must be a mapping, got {type(data).__name__}")

        updates: Dict[str, Any] = {}
        for section, values in data.items():
            key_map = _SECTION_KEYS.get(section)
            if key_map is None:
                logger.warning("Ignoring unknown configuration section '%s'", section)
                continue
            if values is None:
                continue
            if not isinstance(values, Mapping):
                raise ConfigError(f"Section '{section}' must be a mapping")
            for key, value in values.items():
                attr = key_map.get(key)
                if attr is None:
                    logger.warning("Ignoring unknown key '%s.%s'", section, key)
                    continue
                updates[attr] = _coerce(attr, value)

        config = replace(cls(), **updates)
        config.validate()
        return config

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'RiskConfig':
        """Load a configuration from a YAML file."""
        path = Path(path)
        logger.info("Loading configuration from: %s", path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
        return cls.from_dict(data)

    # ------------------------------------------------------------------ #
    def validate(self) -> None:
        """Reject values no kernel component can work with."""
        if self.default_sma_au <= 0.0:
            raise ConfigError("defaults.semi_major_axis_au must be positive")
        if not 0.0 <= self.default_eccentricity < 1.0:
            raise ConfigError("defaults.eccentricity must lie in [0, 1)")
        if self.default_earth_distance_au <= 0.0:
            raise ConfigError("defaults.earth_distance_au must be positive")
        if self.moid_samples < 3 or self.visual_samples < 3:
            raise ConfigError("sample counts must be at least 3")
        if self.moid_floor_au < 0.0:
            raise ConfigError("moid.floor_au must be non-negative")
        if self.preview_steps <= 0 or self.preview_dt_days <= 0.0:
            raise ConfigError("preview.steps and preview.dt_days must be positive")
        if self.distance_unit not in ('au', 'km', 'ld'):
            raise ConfigError(f"display.distance_unit must be au, km or ld, not {self.distance_unit!r}")

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        """Inverse of :meth:`from_dict`; suitable for ``yaml.safe_dump``."""
        out: Dict[str, Dict[str, Any]] = {}
        for section, key_map in _SECTION_KEYS.items():
            out[section] = {key: getattr(self, attr) for key, attr in key_map.items()}
        return out


# YAML section/key -> RiskConfig attribute
_SECTION_KEYS: Dict[str, Dict[str, str]] = {
    'defaults': {
        'semi_major_axis_au': 'default_sma_au',
        'eccentricity': 'default_eccentricity',
        'inclination_rad': 'default_inclination',
        'longitude_ascending_node_rad': 'default_raan',
        'argument_perihelion_rad': 'default_arg_perihelion',
        'earth_distance_au': 'default_earth_distance_au',
    },
    'moid': {
        'samples': 'moid_samples',
        'floor_au': 'moid_floor_au',
        'refine': 'moid_refine',
    },
    'preview': {
        'steps': 'preview_steps',
        'dt_days': 'preview_dt_days',
        'delta_v_scale': 'delta_v_scale',
        'gm_sun': 'gm_sun',
        'gm_jupiter': 'gm_jupiter',
        'jupiter_sma_au': 'jupiter_sma_au',
        'jupiter_period_days': 'jupiter_period_days',
        'jupiter_guard_au': 'jupiter_guard_au',
        'srp_coefficient': 'srp_coefficient',
    },
    'display': {
        'visual_samples': 'visual_samples',
        'distance_unit': 'distance_unit',
    },
}

_FIELD_TYPES = {f.name: f.type for f in fields(RiskConfig)}


def _coerce(attr: str, value: Any) -> Any:
    """Convert a parsed YAML scalar to the declared field type."""
    expected = _FIELD_TYPES[attr]
    # Annotations may be strings under postponed evaluation
    name = expected if isinstance(expected, str) else expected.__name__

    if name == 'bool':
        if isinstance(value, bool):
            return value
        raise ConfigError(f"'{attr}' expects true/false, got {value!r}")
    if name == 'int':
        if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
            raise ConfigError(f"'{attr}' expects an integer, got {value!r}")
        return int(value)
    if name == 'float':
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{attr}' expects a number, got {value!r}")
        return float(value)
    if not isinstance(value, str):
        raise ConfigError(f"'{attr}' expects a string, got {value!r}")
    return value.lower()


def load_config(path: Optional[Union[str, Path]] = None) -> RiskConfig:
    """
    Load the kernel configuration.

    Args:
        path: YAML file to read. Defaults to the packaged
            config/risk_config.yaml.

    Returns:
        RiskConfig instance
    """
    return RiskConfig.from_yaml(path if path is not None else DEFAULT_CONFIG_PATH)
