"""
===============================================================================
COSMORISK - Risk Assessment Facade
===============================================================================
The single entry point the host application talks to.  Given a body
snapshot (and optionally an Earth snapshot) it coordinates:

    OrbitSampler      -> 3D orbit path for display
    MOIDEstimator     -> orbit-to-orbit proximity
    composition       -> spectral class, mass, kinetic energy, probability
    HazardClassifier  -> Torino-like level
    TrajectoryProjector -> post-deflection preview

Snapshots are owned by the host and only read here.  Every call runs to
completion and returns plain data; a newer call simply supersedes an older
result.  Missing data is replaced by the defaults in RiskConfig and logged,
never raised.
===============================================================================
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from cosmorisk.core.config import RiskConfig
from cosmorisk.core.exceptions import InvalidInputError
from cosmorisk.assessment.composition import (
    SpectralProfile, spectral_profile, estimate_mass, kinetic_energy,
    impact_probability,
)
from cosmorisk.assessment.hazard import HazardAssessment, HazardClassifier
from cosmorisk.assessment.moid import MOIDEstimator, MOIDResult
from cosmorisk.dynamics.orbit_sampler import OrbitalElementSet, OrbitSampler
from cosmorisk.dynamics.trajectory import DeflectionPreview, TrajectoryProjector

logger = logging.getLogger(__name__)


# =============================================================================
# SNAPSHOT TYPES
# =============================================================================

class BodyKind(str, Enum):
    """Host body classification."""
    STAR = "Star"
    PLANET = "Planet"
    MOON = "Moon"
    ASTEROID = "Asteroid"

    @classmethod
    def parse(cls, value: Any) -> 'BodyKind':
        if isinstance(value, cls):
            return value
        for kind in cls:
            if str(value).lower() == kind.value.lower():
                return kind
        raise InvalidInputError(f"Unknown body type: {value!r}")


@dataclass(frozen=True, eq=False)
class BodySnapshot:
    """
    Read-only view of one body as reported by the host.

    Attributes
    ----------
    id, name : str
    kind : BodyKind
    position : np.ndarray, shape (3,)
        Heliocentric ecliptic position (AU).
    velocity : np.ndarray, shape (3,)
        Velocity (AU/day).
    radius_km : float
    is_hazardous : bool
    elements : OrbitalElementSet or None
        None when the host supplied no orbital elements.
    """
    id: str
    name: str
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius_km: float = 0.0
    is_hazardous: bool = False
    kind: BodyKind = BodyKind.ASTEROID
    elements: Optional[OrbitalElementSet] = None

    def __post_init__(self):
        object.__setattr__(self, 'position', _vector3(self.position, 'position'))
        object.__setattr__(self, 'velocity', _vector3(self.velocity, 'velocity'))

    @property
    def speed(self) -> float:
        """Speed (AU/day)."""
        return float(np.linalg.norm(self.velocity))

    @property
    def heliocentric_distance(self) -> float:
        return float(np.linalg.norm(self.position))

    def distance_to(self, other: 'BodySnapshot') -> float:
        return float(np.linalg.norm(self.position - other.position))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  config: Optional[RiskConfig] = None) -> 'BodySnapshot':
        """
        Parse the host's body dictionary.

        Expected keys: id, name, body_type, position, velocity, radius,
        is_hazardous and optionally the five element keys
        (semi_major_axis_au, eccentricity, inclination_rad,
        longitude_ascending_node_rad, argument_perihelion_rad).
        Absent velocity components are taken as zero.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Body entry must be a mapping, got {type(data).__name__}"
            )
        if 'position' not in data or data['position'] is None:
            raise InvalidInputError(f"Body {data.get('id')!r} has no position")

        velocity = list(data.get('velocity') or [])
        velocity = [float(v) if v is not None else 0.0 for v in velocity]
        velocity += [0.0] * (3 - len(velocity))

        has_elements = any(data.get(key) for _, key in OrbitalElementSet.SNAPSHOT_KEYS)
        elements = OrbitalElementSet.from_dict(data, config) if has_elements else None

        body_id = str(data.get('id', data.get('name', '')))
        return cls(
            id=body_id,
            name=str(data.get('name', body_id)),
            kind=BodyKind.parse(data.get('body_type', BodyKind.ASTEROID.value)),
            position=data['position'],
            velocity=velocity[:3],
            radius_km=float(data.get('radius', 0.0) or 0.0),
            is_hazardous=bool(data.get('is_hazardous', False)),
            elements=elements,
        )


def _vector3(values, name: str) -> np.ndarray:
    vec = np.asarray(values, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise InvalidInputError(f"{name} must have 3 components, got {vec.shape}")
    return vec


# =============================================================================
# RESULT TYPE
# =============================================================================

@dataclass(frozen=True, eq=False)
class RiskAssessment:
    """Everything the host displays for the selected body."""
    body_id: str
    elements: OrbitalElementSet
    elements_defaulted: bool
    distance_to_earth_au: float
    moid: MOIDResult
    profile: SpectralProfile
    mass_kg: float
    kinetic_energy_j: float
    probability: float
    hazard: HazardAssessment
    orbit_path: np.ndarray


# =============================================================================
# FACADE
# =============================================================================

class RiskAssessmentFacade:
    """
    Coordinates the numeric kernel for one selected body at a time.

    Parameters
    ----------
    config : RiskConfig, optional
        Defaults and tuning constants; the built-in values when omitted.
    """

    def __init__(self, config: Optional[RiskConfig] = None) -> None:
        self.config = config or RiskConfig()
        self.sampler = OrbitSampler.from_config(self.config)
        self.moid_estimator = MOIDEstimator.from_config(self.config)
        self.classifier = HazardClassifier()
        self.projector = TrajectoryProjector(self.config)

    # ------------------------------------------------------------------ #
    def elements_for(self, body: BodySnapshot) -> OrbitalElementSet:
        """The body's elements, or the configured stand-in orbit."""
        if body.elements is not None:
            return body.elements
        logger.warning("Body %s has no orbital elements; using defaults", body.id)
        return OrbitalElementSet.defaults(self.config)

    def distance_to_earth(self, body: BodySnapshot,
                          earth: Optional[BodySnapshot] = None) -> float:
        """Live distance between the two snapshots (AU)."""
        if earth is None:
            logger.warning("No Earth snapshot; assuming %.3f AU",
                           self.config.default_earth_distance_au)
            return self.config.default_earth_distance_au
        return body.distance_to(earth)

    def orbit_path(self, body: BodySnapshot) -> np.ndarray:
        """
        Closed orbit path for display.

        Bodies with elements get the full 3D reconstruction; others get the
        planar (a, e) outline with a taken from the current heliocentric
        distance.
        """
        if body.elements is not None:
            return self.sampler.path(body.elements)
        a = body.heliocentric_distance or self.config.default_sma_au
        return self.sampler.planar_path(a, 0.0)

    def assess(self, body: BodySnapshot,
               earth: Optional[BodySnapshot] = None) -> RiskAssessment:
        """
        Full risk assessment for the selected body.

        Parameters
        ----------
        body : BodySnapshot
            Selected body.
        earth : BodySnapshot, optional
            Live Earth snapshot; only its position is used.

        Returns
        -------
        RiskAssessment
        """
        elements = self.elements_for(body)
        distance = self.distance_to_earth(body, earth)

        if self.config.moid_refine:
            moid = self.moid_estimator.refine(elements)
        else:
            moid = self.moid_estimator.estimate(elements)

        profile = spectral_profile(body.name)
        mass = estimate_mass(body.radius_km, profile.density_kg_m3)
        energy = kinetic_energy(mass, body.speed)
        probability = impact_probability(distance, body.radius_km, body.is_hazardous)

        hazard = self.classifier.classify(
            probability=probability,
            kinetic_energy_j=energy,
            distance_au=max(distance, np.finfo(float).tiny),
            radius_km=max(body.radius_km, np.finfo(float).tiny),
        )

        logger.info("Assessed %s: MOID=%.6f AU, distance=%.6f AU, level=%d",
                    body.id, moid.distance_au, distance, hazard.level)

        return RiskAssessment(
            body_id=body.id,
            elements=elements,
            elements_defaulted=body.elements is None,
            distance_to_earth_au=distance,
            moid=moid,
            profile=profile,
            mass_kg=mass,
            kinetic_energy_j=energy,
            probability=probability,
            hazard=hazard,
            orbit_path=self.orbit_path(body),
        )

    def preview_deflection(self, body: BodySnapshot,
                           delta_v_mps: Sequence[float]) -> DeflectionPreview:
        """Nominal and deflected preview paths for an impulse in m/s."""
        logger.info("Previewing deflection of %s by %s m/s", body.id, list(delta_v_mps))
        return self.projector.compare(body.position, body.velocity, delta_v_mps)

    # ------------------------------------------------------------------ #
    def rank_bodies(
        self,
        bodies: Iterable[BodySnapshot],
        earth: Optional[BodySnapshot] = None,
        sort_by: str = 'distance',
        hazardous_only: bool = False,
    ) -> pd.DataFrame:
        """
        Tabulate tracked asteroids for a list view.

        Parameters
        ----------
        bodies : iterable of BodySnapshot
            Reference bodies (planets, moons, the Sun) are skipped.
        earth : BodySnapshot, optional
        sort_by : {'distance', 'size', 'hazard', 'name'}
            'size' is largest first; 'hazard' lists flagged bodies first,
            then by distance.
        hazardous_only : bool
            Keep only flagged bodies.

        Returns
        -------
        pandas.DataFrame
            Columns: id, name, distance_au, radius_km, is_hazardous.
        """
        if sort_by not in _SORT_ORDERS:
            raise InvalidInputError(
                f"sort_by must be one of {sorted(_SORT_ORDERS)}, got {sort_by!r}"
            )

        rows = [
            {
                'id': b.id,
                'name': b.name,
                'distance_au': self.distance_to_earth(b, earth),
                'radius_km': b.radius_km,
                'is_hazardous': b.is_hazardous,
            }
            for b in bodies
            if b.kind is BodyKind.ASTEROID and (b.is_hazardous or not hazardous_only)
        ]
        df = pd.DataFrame(rows, columns=['id', 'name', 'distance_au', 'radius_km', 'is_hazardous'])
        if df.empty:
            return df

        columns, ascending = _SORT_ORDERS[sort_by]
        return df.sort_values(list(columns), ascending=list(ascending),
                              kind='mergesort').reset_index(drop=True)


_SORT_ORDERS = {
    'distance': (('distance_au',), (True,)),
    'size': (('radius_km',), (False,)),
    'hazard': (('is_hazardous', 'distance_au'), (False, True)),
    'name': (('name',), (True,)),
}
