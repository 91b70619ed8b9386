"""
===============================================================================
COSMORISK - Heliocentric Force Models
===============================================================================
Accelerations acting on a small body in the deflection preview:

    - SolarGravity         : Point-mass solar gravity
    - JupiterPerturbation  : Direct pull of Jupiter on a circular orbit
    - RadiationPressure    : Radial solar-radiation-pressure push

Every model exposes ``acceleration(position, t_days)`` returning a 3-vector
in AU/day^2, so the projector can sum any list of them.  Positions are
heliocentric ecliptic (AU); time is days since the start of the preview.
===============================================================================
"""

import numpy as np
from numpy.typing import NDArray

from cosmorisk.core.constants import (
    GM_SUN, GM_JUPITER,
    JUPITER_SMA_AU, JUPITER_PERIOD_DAYS, JUPITER_GUARD_AU,
    SRP_COEFFICIENT, TWO_PI,
)


# ============================================================================
#  SOLAR GRAVITY
# ============================================================================

class SolarGravity:
    """
    Point-mass gravity of the Sun at the origin:

        a = -GM_sun * r / |r|^3

    Parameters
    ----------
    mu : float, optional
        Solar gravitational parameter (AU^3/day^2).
    """

    def __init__(self, mu: float = GM_SUN) -> None:
        self.mu = mu

    def acceleration(self, position: NDArray, t_days: float = 0.0) -> NDArray:
        r = np.linalg.norm(position)
        if r == 0.0:
            # Body at the Sun's centre; acceleration undefined
            return np.zeros(3)
        return -self.mu / r ** 3 * position


# ============================================================================
#  JUPITER PERTURBATION
# ============================================================================

class JupiterPerturbation:
    """
    Direct gravitational attraction of Jupiter, modelled on a circular
    orbit in the ecliptic:

        theta(t) = 2 pi t / P
        r_J(t)   = a_J (cos theta, sin theta, 0)
        a        = GM_J * (r_J - r) / |r_J - r|^3

    Only the direct term is kept (no indirect term for the Sun's own
    acceleration toward Jupiter).  When the body passes within
    ``guard_radius`` of Jupiter the term is switched off to avoid the
    1/d^2 singularity.

    Parameters
    ----------
    mu : float
        Jupiter gravitational parameter (AU^3/day^2).
    sma : float
        Radius of Jupiter's circular orbit (AU).
    period : float
        Jupiter orbital period (days).
    guard_radius : float
        Separation below which the perturbation is disabled (AU).
    """

    def __init__(
        self,
        mu: float = GM_JUPITER,
        sma: float = JUPITER_SMA_AU,
        period: float = JUPITER_PERIOD_DAYS,
        guard_radius: float = JUPITER_GUARD_AU,
    ) -> None:
        self.mu = mu
        self.sma = sma
        self.period = period
        self.guard_radius = guard_radius

    # ------------------------------------------------------------------ #
    def position(self, t_days: float) -> NDArray:
        """Heliocentric position of Jupiter at *t_days* (AU)."""
        angle = TWO_PI * t_days / self.period
        return self.sma * np.array([np.cos(angle), np.sin(angle), 0.0])

    def acceleration(self, position: NDArray, t_days: float = 0.0) -> NDArray:
        r_to_jupiter = self.position(t_days) - position
        d = np.linalg.norm(r_to_jupiter)
        if d <= self.guard_radius:
            return np.zeros(3)
        return self.mu * r_to_jupiter / d ** 3


# ============================================================================
#  SOLAR RADIATION PRESSURE
# ============================================================================

class RadiationPressure:
    """
    Simplified radial SRP model for a small body:

        a = k / |r|^2 * r_hat       (pointing away from the Sun)

    The coefficient folds together solar flux, area-to-mass ratio and
    reflectivity into a single small constant.

    Parameters
    ----------
    coefficient : float
        SRP strength k (AU^3/day^2).
    """

    def __init__(self, coefficient: float = SRP_COEFFICIENT) -> None:
        self.coefficient = coefficient

    def acceleration(self, position: NDArray, t_days: float = 0.0) -> NDArray:
        r = np.linalg.norm(position)
        if r == 0.0:
            return np.zeros(3)
        return self.coefficient / r ** 2 * (position / r)
