"""
===============================================================================
COSMORISK - Trajectory Projector
===============================================================================
Short-horizon forward projection of a small body's heliocentric motion,
used to preview where a deflection impulse would send it.

Equations of motion (heliocentric ecliptic, AU and days):

    dr/dt = v
    dv/dt = a_sun(r) + a_jupiter(r, t) + a_srp(r)

integrated with explicit (forward) Euler at a fixed step:

    v_{k+1} = v_k + a(r_k, t_k) dt
    r_{k+1} = r_k + v_{k+1} dt

The position is recorded *before* each update, so a run of N steps returns
N positions, the first of which is the initial state.

Euler is first order and does not conserve energy; the preview is a cheap
visual aid, not the authoritative propagator.
===============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from cosmorisk.core.config import RiskConfig
from cosmorisk.core.exceptions import InvalidInputError
from cosmorisk.dynamics.environment import (
    SolarGravity, JupiterPerturbation, RadiationPressure,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DeflectionPreview:
    """
    Nominal and deflected preview paths for the same initial state.

    Attributes
    ----------
    nominal : np.ndarray, shape (N, 3)
        Path without the impulse (AU).
    deflected : np.ndarray, shape (N, 3)
        Path with the impulse applied at t = 0 (AU).
    delta_v_mps : np.ndarray, shape (3,)
        Impulse that was applied (m/s).
    dt_days : float
        Step size used for both runs.
    """
    nominal: np.ndarray
    deflected: np.ndarray
    delta_v_mps: np.ndarray
    dt_days: float

    @property
    def separation_au(self) -> np.ndarray:
        """Per-step distance between the two paths (AU)."""
        return np.linalg.norm(self.deflected - self.nominal, axis=1)

    @property
    def max_separation_au(self) -> float:
        return float(self.separation_au.max())

    @property
    def final_separation_au(self) -> float:
        return float(self.separation_au[-1])


class TrajectoryProjector:
    """
    Explicit-Euler projector under solar gravity, a circular-orbit Jupiter
    and radial SRP.

    Parameters
    ----------
    config : RiskConfig, optional
        Source of the force-model constants and the impulse scale factor.
    """

    def __init__(self, config: Optional[RiskConfig] = None) -> None:
        config = config or RiskConfig()
        self.delta_v_scale = config.delta_v_scale
        self.default_steps = config.preview_steps
        self.default_dt = config.preview_dt_days
        self.force_models = [
            SolarGravity(mu=config.gm_sun),
            JupiterPerturbation(
                mu=config.gm_jupiter,
                sma=config.jupiter_sma_au,
                period=config.jupiter_period_days,
                guard_radius=config.jupiter_guard_au,
            ),
            RadiationPressure(coefficient=config.srp_coefficient),
        ]

    # ------------------------------------------------------------------ #
    def acceleration(self, position: NDArray, t_days: float) -> NDArray:
        """Sum of all force models at *position* and time *t_days* (AU/day^2)."""
        total = np.zeros(3)
        for model in self.force_models:
            total += model.acceleration(position, t_days)
        return total

    def project(
        self,
        position: Sequence[float],
        velocity: Sequence[float],
        delta_v: Optional[Sequence[float]] = None,
        step_count: Optional[int] = None,
        dt_days: Optional[float] = None,
    ) -> np.ndarray:
        """
        Integrate forward and return the sequence of positions.

        Parameters
        ----------
        position : array_like, shape (3,)
            Initial heliocentric position (AU).  Must not be the origin.
        velocity : array_like, shape (3,)
            Initial velocity (AU/day).
        delta_v : array_like, shape (3,), optional
            Impulse in m/s, converted to AU/day by the configured scale
            factor and added to the initial velocity.
        step_count : int, optional
            Number of positions to produce (default from config, 200).
        dt_days : float, optional
            Step size in days (default from config, 1.0).

        Returns
        -------
        np.ndarray, shape (step_count, 3)
            Recorded positions (AU).
        """
        n = self.default_steps if step_count is None else step_count
        dt = self.default_dt if dt_days is None else dt_days
        if n <= 0:
            raise InvalidInputError(f"step_count must be positive, got {n}")
        if not dt > 0.0:
            raise InvalidInputError(f"dt_days must be positive, got {dt}")

        r = _as_vector(position, 'position')
        v = _as_vector(velocity, 'velocity')
        if np.linalg.norm(r) == 0.0:
            raise InvalidInputError("position must not coincide with the Sun")
        if delta_v is not None:
            v = v + _as_vector(delta_v, 'delta_v') * self.delta_v_scale

        path = np.empty((n, 3))
        for k in range(n):
            path[k] = r
            a = self.acceleration(r, k * dt)
            v = v + a * dt
            r = r + v * dt

        logger.debug("Projected %d steps of %.3f d; final r=%.4f AU",
                     n, dt, float(np.linalg.norm(path[-1])))
        return path

    def compare(
        self,
        position: Sequence[float],
        velocity: Sequence[float],
        delta_v: Sequence[float],
        step_count: Optional[int] = None,
        dt_days: Optional[float] = None,
    ) -> DeflectionPreview:
        """Project with and without *delta_v* from the same initial state."""
        dt = self.default_dt if dt_days is None else dt_days
        nominal = self.project(position, velocity, None, step_count, dt)
        deflected = self.project(position, velocity, delta_v, step_count, dt)
        return DeflectionPreview(
            nominal=nominal,
            deflected=deflected,
            delta_v_mps=_as_vector(delta_v, 'delta_v'),
            dt_days=dt,
        )


def _as_vector(values: Sequence[float], name: str) -> np.ndarray:
    vec = np.asarray(values, dtype=np.float64)
    if vec.shape != (3,):
        raise InvalidInputError(f"{name} must have 3 components, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise InvalidInputError(f"{name} contains non-finite values: {vec}")
    return vec
