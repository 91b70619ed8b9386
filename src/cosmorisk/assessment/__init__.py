"""
===============================================================================
COSMORISK - Assessment Module
===============================================================================
Risk figures derived from a body snapshot.

Submodules:
    moid        -- Grid-sampled Minimum Orbit Intersection Distance
    hazard      -- Torino-like hazard classifier
    composition -- Spectral class, mass, energy and probability heuristics
    facade      -- RiskAssessmentFacade, the host-facing entry point
===============================================================================
"""
