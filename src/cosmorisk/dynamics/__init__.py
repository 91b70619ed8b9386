"""
===============================================================================
COSMORISK - Dynamics Module
===============================================================================
Orbit geometry and short-horizon motion of small bodies.

Submodules:
    orbit_sampler -- Keplerian element set and orbit path sampling
    environment   -- Solar gravity, Jupiter perturbation, radiation pressure
    trajectory    -- Explicit-Euler deflection preview
===============================================================================
"""
