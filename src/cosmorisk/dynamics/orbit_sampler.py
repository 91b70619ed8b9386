"""
===============================================================================
COSMORISK - Orbit Sampler
===============================================================================
Reconstructs the 3D shape of an elliptical heliocentric orbit from its
Keplerian elements as an ordered sequence of points.

For each true anomaly on a uniform grid the polar conic equation

    r(theta) = a (1 - e^2) / (1 + e cos(theta))

gives the heliocentric distance; the point (r cos(theta), r sin(theta), 0)
in the perifocal frame is rotated into the ecliptic frame by a single matrix
computed once per orbit (see core.frames.perifocal_rotation).  The whole grid
is evaluated as one vectorised NumPy expression.

Only elliptical orbits (0 <= e < 1) are supported.  Parabolic and
hyperbolic elements are rejected with InvalidInputError.
===============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import numpy as np

from cosmorisk.core.config import RiskConfig
from cosmorisk.core.constants import (
    TWO_PI, GM_SUN,
    EARTH_SMA_AU, EARTH_ECCENTRICITY, EARTH_INCLINATION, EARTH_RAAN,
    EARTH_ARG_PERIHELION,
    MOID_SAMPLES, VISUAL_SAMPLES,
)
from cosmorisk.core.exceptions import InvalidInputError
from cosmorisk.core.frames import perifocal_rotation, perifocal_to_ecliptic

logger = logging.getLogger(__name__)


# =============================================================================
# ORBITAL ELEMENT SET
# =============================================================================

@dataclass(frozen=True)
class OrbitalElementSet:
    """
    Size, shape and orientation of one elliptical heliocentric orbit.

    Attributes
    ----------
    a : float
        Semi-major axis (AU), > 0.
    e : float
        Eccentricity, in [0, 1).
    i : float
        Inclination to the ecliptic (rad).
    raan : float
        Longitude of the ascending node, Omega (rad).
    arg_perihelion : float
        Argument of perihelion, omega (rad).
    """
    a: float
    e: float
    i: float = 0.0
    raan: float = 0.0
    arg_perihelion: float = 0.0

    # Snapshot key for each field
    SNAPSHOT_KEYS = (
        ('a', 'semi_major_axis_au'),
        ('e', 'eccentricity'),
        ('i', 'inclination_rad'),
        ('raan', 'longitude_ascending_node_rad'),
        ('arg_perihelion', 'argument_perihelion_rad'),
    )

    def validate(self) -> 'OrbitalElementSet':
        """Raise InvalidInputError unless the elements describe an ellipse."""
        values = (self.a, self.e, self.i, self.raan, self.arg_perihelion)
        if not all(np.isfinite(v) for v in values):
            raise InvalidInputError(f"Non-finite orbital elements: {self}")
        if self.a <= 0.0:
            raise InvalidInputError(f"Semi-major axis must be positive, got {self.a}")
        if not 0.0 <= self.e < 1.0:
            raise InvalidInputError(
                f"Only elliptical orbits are supported (0 <= e < 1), got e={self.e}"
            )
        return self

    # ------------------------------------------------------------------ #
    @classmethod
    def earth(cls) -> 'OrbitalElementSet':
        """Fixed Earth orbit used as the MOID reference."""
        return cls(
            a=EARTH_SMA_AU,
            e=EARTH_ECCENTRICITY,
            i=EARTH_INCLINATION,
            raan=EARTH_RAAN,
            arg_perihelion=EARTH_ARG_PERIHELION,
        )

    @classmethod
    def defaults(cls, config: Optional[RiskConfig] = None) -> 'OrbitalElementSet':
        """Stand-in elements for bodies whose snapshot has none."""
        config = config or RiskConfig()
        return cls(
            a=config.default_sma_au,
            e=config.default_eccentricity,
            i=config.default_inclination,
            raan=config.default_raan,
            arg_perihelion=config.default_arg_perihelion,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  config: Optional[RiskConfig] = None) -> 'OrbitalElementSet':
        """
        Build an element set from host snapshot keys.

        A key that is absent, None or zero falls back to the configured
        default for that element, field by field.
        """
        fallback = cls.defaults(config)
        values = {}
        for attr, key in cls.SNAPSHOT_KEYS:
            raw = data.get(key)
            values[attr] = float(raw) if raw else getattr(fallback, attr)
        return cls(**values)

    # ------------------------------------------------------------------ #
    @property
    def semi_latus_rectum(self) -> float:
        return self.a * (1.0 - self.e ** 2)

    @property
    def perihelion(self) -> float:
        """Perihelion distance q = a(1 - e) (AU)."""
        return self.a * (1.0 - self.e)

    @property
    def aphelion(self) -> float:
        """Aphelion distance Q = a(1 + e) (AU)."""
        return self.a * (1.0 + self.e)

    @property
    def period_days(self) -> float:
        """Orbital period from Kepler's third law (days)."""
        return TWO_PI * np.sqrt(self.a ** 3 / GM_SUN)


# =============================================================================
# SAMPLING FUNCTIONS
# =============================================================================

def _anomaly_grid(sample_count: int, closed: bool) -> np.ndarray:
    if sample_count < 3:
        raise InvalidInputError(f"sample_count must be >= 3, got {sample_count}")
    stop = sample_count + 1 if closed else sample_count
    return TWO_PI * np.arange(stop, dtype=np.float64) / sample_count


def sample_orbit(elements: OrbitalElementSet, sample_count: int = VISUAL_SAMPLES,
                 closed: bool = True) -> np.ndarray:
    """
    Sample an orbit uniformly in true anomaly.

    Parameters
    ----------
    elements : OrbitalElementSet
        Orbit to sample.  Validated before use.
    sample_count : int
        Number of angular steps around the orbit (>= 3).
    closed : bool
        If True the grid runs over j = 0..sample_count inclusive so the
        last point repeats the first and the curve closes
        (sample_count + 1 points).  If False the grid stops one step short
        (sample_count points), which is what the MOID scan uses.

    Returns
    -------
    np.ndarray, shape (n, 3)
        Heliocentric ecliptic positions (AU).
    """
    elements.validate()
    theta = _anomaly_grid(sample_count, closed)

    r = elements.semi_latus_rectum / (1.0 + elements.e * np.cos(theta))
    pqw = np.column_stack([r * np.cos(theta), r * np.sin(theta), np.zeros_like(theta)])

    R = perifocal_rotation(elements.raan, elements.i, elements.arg_perihelion)
    return perifocal_to_ecliptic(pqw, R)


def sample_planar_orbit(a: float, e: float = 0.0,
                        sample_count: int = VISUAL_SAMPLES) -> np.ndarray:
    """
    Decorative orbit outline from (a, e) alone, lying in the ecliptic with
    perihelion on the +x axis.

    Uses the parametric (eccentric-anomaly) ellipse shifted so the Sun sits
    at the focus:

        x = a cos(E) - a e,   y = b sin(E),   b = a sqrt(1 - e^2)

    Not used for MOID.  The curve is always closed.
    """
    OrbitalElementSet(a=a, e=e).validate()
    angle = _anomaly_grid(sample_count, closed=True)

    b = a * np.sqrt(1.0 - e * e)
    focus_offset = a * e
    return np.column_stack([
        a * np.cos(angle) - focus_offset,
        b * np.sin(angle),
        np.zeros_like(angle),
    ])


# =============================================================================
# SAMPLER OBJECT
# =============================================================================

class OrbitSampler:
    """
    Orbit sampler bound to a pair of resolutions: a coarse one for the
    MOID grid and a finer closed one for visual paths.

    Stateless between calls; the same instance may be shared freely.
    """

    def __init__(self, visual_samples: int = VISUAL_SAMPLES,
                 moid_samples: int = MOID_SAMPLES) -> None:
        self.visual_samples = visual_samples
        self.moid_samples = moid_samples

    @classmethod
    def from_config(cls, config: RiskConfig) -> 'OrbitSampler':
        return cls(visual_samples=config.visual_samples, moid_samples=config.moid_samples)

    def path(self, elements: OrbitalElementSet) -> np.ndarray:
        """Closed 3D path for display."""
        return sample_orbit(elements, self.visual_samples, closed=True)

    def planar_path(self, a: float, e: float = 0.0) -> np.ndarray:
        return sample_planar_orbit(a, e, self.visual_samples)

    def moid_grid(self, elements: OrbitalElementSet,
                  sample_count: Optional[int] = None) -> np.ndarray:
        """Open grid of orbit points for the MOID scan."""
        n = sample_count if sample_count is not None else self.moid_samples
        return sample_orbit(elements, n, closed=False)
