"""
===============================================================================
COSMORISK - Near-Earth Object Risk Kernel
===============================================================================
Numeric kernel behind the CosmoRisk NEO tracker: orbit reconstruction from
Keplerian elements, grid-sampled MOID against Earth's orbit, a Torino-like
hazard classifier, and a short-horizon deflection preview.

Subpackages:
    core        -- Constants, reference frames, units, configuration, errors
    dynamics    -- Orbit sampling, heliocentric force models, projector
    assessment  -- MOID, hazard classification, composition heuristics,
                   and the RiskAssessmentFacade used by host applications
===============================================================================
"""

__version__ = "0.3.0"

from cosmorisk.core.config import RiskConfig, load_config
from cosmorisk.core.exceptions import CosmoRiskError, InvalidInputError, ConfigError
from cosmorisk.dynamics.orbit_sampler import OrbitalElementSet, OrbitSampler
from cosmorisk.assessment.facade import (
    BodyKind, BodySnapshot, RiskAssessment, RiskAssessmentFacade,
)

__all__ = [
    "RiskConfig", "load_config",
    "CosmoRiskError", "InvalidInputError", "ConfigError",
    "OrbitalElementSet", "OrbitSampler",
    "BodyKind", "BodySnapshot", "RiskAssessment", "RiskAssessmentFacade",
]
