"""
===============================================================================
COSMORISK - Performance Test Suite
===============================================================================
Timing checks for the interactive paths: a MOID estimate and a deflection
preview are recomputed whenever the host selection changes, so both must
stay well inside one display frame.  Ceilings are generous to tolerate slow CI
machines.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import time

import numpy as np

from cosmorisk.dynamics.orbit_sampler import OrbitalElementSet, sample_orbit
from cosmorisk.dynamics.trajectory import TrajectoryProjector
from cosmorisk.assessment.moid import MOIDEstimator


class Timer:
    """Context manager for wall-clock timing."""

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed = time.perf_counter() - self.start


ELEMENTS = OrbitalElementSet(a=1.46, e=0.22, i=0.19, raan=5.31, arg_perihelion=3.12)


class TestPerformance:

    def test_moid_grid_speed(self):
        estimator = MOIDEstimator()
        estimator.estimate(ELEMENTS)
        runs = 20
        with Timer() as t:
            for _ in range(runs):
                estimator.estimate(ELEMENTS)
        assert t.elapsed / runs < 0.05, f"MOID took {t.elapsed / runs * 1e3:.2f} ms"

    def test_preview_speed(self):
        projector = TrajectoryProjector()
        r0 = np.array([1.0, 0.2, 0.0])
        v0 = np.array([-0.003, 0.017, 0.0])
        with Timer() as t:
            projector.compare(r0, v0, [1.0, 0.0, 0.0])
        assert t.elapsed < 0.5, f"Preview took {t.elapsed * 1e3:.1f} ms"

    def test_visual_path_speed(self):
        with Timer() as t:
            for _ in range(100):
                sample_orbit(ELEMENTS, 128)
        assert t.elapsed / 100 < 0.01
