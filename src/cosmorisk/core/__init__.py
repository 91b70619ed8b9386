"""
===============================================================================
COSMORISK - Core Module
===============================================================================
Shared foundations for the kernel.

Submodules:
    constants   -- Unit conversions, gravitational parameters, tuning values
    frames      -- Perifocal -> ecliptic rotation
    units       -- Display conversions and distance formatting
    config      -- RiskConfig defaults and YAML loading
    exceptions  -- Error hierarchy
===============================================================================
"""
