"""
===============================================================================
COSMORISK - Unit Conversions and Display Formatting
===============================================================================
The kernel computes in AU and AU/day.  Hosts display distances in AU,
kilometres or lunar distances, energies in megatons of TNT, and speeds in
km/s; every conversion goes through this module so the boundary stays
explicit.
===============================================================================
"""

from enum import Enum
from typing import Union

from cosmorisk.core.constants import (
    AU_KM, AU_M, AU_TO_LD, SECONDS_PER_DAY, JOULES_PER_MEGATON,
)
from cosmorisk.core.exceptions import InvalidInputError


class DistanceUnit(str, Enum):
    """Distance units understood by :func:`format_distance`."""
    AU = "au"
    KM = "km"
    LD = "ld"


def au_to_km(value_au: float) -> float:
    return value_au * AU_KM


def au_to_ld(value_au: float) -> float:
    return value_au * AU_TO_LD


def joules_to_megatons(energy_j: float) -> float:
    return energy_j / JOULES_PER_MEGATON


def au_per_day_to_mps(speed: float) -> float:
    """Convert a speed from AU/day to m/s."""
    return speed * AU_M / SECONDS_PER_DAY


def au_per_day_to_km_s(speed: float) -> float:
    """Convert a speed from AU/day to km/s."""
    return au_per_day_to_mps(speed) / 1000.0


def mps_to_au_per_day(speed: float) -> float:
    """Physical conversion from m/s to AU/day (the preview uses its own scale)."""
    return speed * SECONDS_PER_DAY / AU_M


def format_distance(value_au: float, unit: Union[str, DistanceUnit] = DistanceUnit.AU) -> str:
    """
    Format a distance given in AU in the requested display unit.

        au -> '0.123456 AU'
        ld -> '48.05 LD'
        km -> '18.47 M km' above a million km, '384.4 K km' above a
              thousand km, otherwise whole kilometres

    Raises
    ------
    InvalidInputError
        If *unit* is not one of 'au', 'km', 'ld'.
    """
    try:
        unit = DistanceUnit(unit)
    except ValueError:
        raise InvalidInputError(f"Unknown distance unit: {unit!r}") from None

    if unit is DistanceUnit.KM:
        km = au_to_km(value_au)
        if km > 1e6:
            return f"{km / 1e6:.2f} M km"
        if km > 1000:
            return f"{km / 1000:.1f} K km"
        return f"{km:.0f} km"
    if unit is DistanceUnit.LD:
        return f"{au_to_ld(value_au):.2f} LD"
    return f"{value_au:.6f} AU"
