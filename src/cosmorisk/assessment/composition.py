"""
===============================================================================
COSMORISK - Composition Heuristics
===============================================================================
Physical-property heuristics for tracked bodies.

No spectral data is available in a snapshot, so composition is assigned by a
deterministic hash of the display name: the sum of the character code points
modulo five indexes a table of spectral classes and bulk densities.  The
same name always yields the same class; the assignment itself carries no
physical meaning.
===============================================================================
"""

import math
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from cosmorisk.core.units import au_per_day_to_mps

SPECTRAL_TYPES = (
    'C-type (carbonaceous)',
    'S-type (siliceous)',
    'M-type (metallic)',
    'X-type (unknown)',
    'V-type (basaltic)',
)
DENSITIES_KG_M3 = (1300.0, 2700.0, 5300.0, 2000.0, 3200.0)

# Impact-probability heuristic
HIGH_RISK_ZONE_AU = 0.1
SIZE_REFERENCE_KM = 100.0
HAZARDOUS_FACTOR = 10.0
PROBABILITY_SCALE = 0.01
PROBABILITY_CAP = 0.5

# Unreserved punctuation left as-is in article names (URI component rules)
_URI_COMPONENT_SAFE = "!'()*"


@dataclass(frozen=True)
class SpectralProfile:
    spectral_type: str
    density_kg_m3: float
    index: int


def spectral_index(name: str) -> int:
    return sum(ord(ch) for ch in name) % len(SPECTRAL_TYPES)


def spectral_profile(name: str) -> SpectralProfile:
    idx = spectral_index(name)
    return SpectralProfile(SPECTRAL_TYPES[idx], DENSITIES_KG_M3[idx], idx)


def estimate_mass(radius_km: float, density_kg_m3: float) -> float:
    """Mass of a homogeneous sphere (kg)."""
    radius_m = radius_km * 1000.0
    return 4.0 / 3.0 * math.pi * radius_m ** 3 * density_kg_m3


def kinetic_energy(mass_kg: float, speed_au_per_day: float) -> float:
    """Kinetic energy in joules for a speed given in AU/day."""
    v = au_per_day_to_mps(speed_au_per_day)
    return 0.5 * mass_kg * v * v


def impact_probability(distance_au: float, radius_km: float, is_hazardous: bool) -> float:
    """
    Heuristic impact probability from proximity, size and the hazard flag:

        p = min(0.5, max(0, 1 - d/0.1) * min(1, r/100) * h * 0.01)

    with h = 10 for flagged bodies, else 1.
    """
    proximity = max(0.0, 1.0 - distance_au / HIGH_RISK_ZONE_AU)
    size = min(1.0, radius_km / SIZE_REFERENCE_KM)
    hazard = HAZARDOUS_FACTOR if is_hazardous else 1.0
    return min(PROBABILITY_CAP, proximity * size * hazard * PROBABILITY_SCALE)


def wiki_reference(name: str) -> Optional[str]:
    """Wikipedia article URL for a named body, or None for bare numbers."""
    clean = re.sub(r'\s*\(.*\)', '', name).strip()
    if not clean or clean.isdigit():
        return None
    return f"https://en.wikipedia.org/wiki/{quote(clean, safe=_URI_COMPONENT_SAFE)}_(asteroid)"
