"""
===============================================================================
COSMORISK - Hazard Classifier (Torino-like scale)
===============================================================================
Maps an impact probability, kinetic energy, current distance and size onto
an integer hazard level 0-10 with a fixed description and a colour band.

The level comes from an ordered decision chain; the first matching branch
wins.  Branch order encodes precedence for overlapping flag combinations
(e.g. a very close, massive body is rated before the generic probability
buckets are consulted):

    1. p < 1e-6 and not very close        -> 0
    2. p < 1e-4 and not close             -> 1
    3. very close and massive             -> min(10, 7 + floor(6p))
    4. very close and very large          -> min(8,  5 + floor(6p))
    5. close and large                    -> min(6,  3 + floor(log10(E+1)/4))
    6. p < 1e-2                           -> min(4,  floor(2 + log10(E+1)/5))
    7. p < 0.5                            -> min(7,  floor(4 + log10(E+1)/5))
    8. otherwise                          -> min(10, floor(7 + 6p))

Flags:
    close       distance < 0.05 AU
    very close  distance < 0.01 AU
    large       radius   > 0.05 km   (local damage)
    very large  radius   > 0.5 km    (regional damage)
    massive     radius   > 1 km      (global effects)
===============================================================================
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from cosmorisk.core.constants import JOULES_PER_MEGATON
from cosmorisk.core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


# =============================================================================
# THRESHOLDS
# =============================================================================
CLOSE_AU = 0.05
VERY_CLOSE_AU = 0.01
LARGE_KM = 0.05
VERY_LARGE_KM = 0.5
MASSIVE_KM = 1.0


class TorinoBand(str, Enum):
    """Display grouping of hazard levels."""
    WHITE = "white"
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


LEVEL_DESCRIPTIONS: Dict[int, str] = {
    0: 'No hazard - Likelihood of collision is zero',
    1: 'Normal - A routine discovery with no unusual concern',
    2: 'Meriting attention - A somewhat close but not unusual encounter',
    3: 'Meriting attention - Close encounter deserving attention',
    4: 'Meriting attention - Close encounter with 1%+ chance of collision',
    5: 'Threatening - Close encounter posing a serious threat',
    6: 'Threatening - Close encounter with large object, significant threat',
    7: 'Threatening - Extremely close encounter with large object',
    8: 'Certain collision - Localized destruction expected',
    9: 'Certain collision - Regional devastation expected',
    10: 'Certain collision - Global climatic catastrophe',
}


def band_for_level(level: int) -> TorinoBand:
    """0 white, 1 green, 2-4 yellow, 5-7 orange, 8-10 red."""
    if level <= 0:
        return TorinoBand.WHITE
    if level == 1:
        return TorinoBand.GREEN
    if level <= 4:
        return TorinoBand.YELLOW
    if level <= 7:
        return TorinoBand.ORANGE
    return TorinoBand.RED


def describe_level(level: int) -> str:
    return LEVEL_DESCRIPTIONS.get(level, 'Unknown')


@dataclass(frozen=True)
class HazardAssessment:
    """Hazard level together with the inputs that produced it."""
    level: int
    description: str
    band: TorinoBand
    probability: float
    kinetic_energy_j: float
    distance_au: float
    radius_km: float

    @property
    def energy_megatons(self) -> float:
        """Kinetic energy in megatons of TNT."""
        return self.kinetic_energy_j / JOULES_PER_MEGATON


class HazardClassifier:
    """Stateless Torino-like classifier; see module docstring for the rules."""

    def classify(
        self,
        probability: float,
        kinetic_energy_j: float,
        distance_au: float,
        radius_km: float,
    ) -> HazardAssessment:
        """
        Classify one body.

        Parameters
        ----------
        probability : float
            Impact probability in [0, 1].
        kinetic_energy_j : float
            Kinetic energy (J), >= 0.
        distance_au : float
            Current distance to Earth (AU), > 0.
        radius_km : float
            Physical radius (km), > 0.

        Returns
        -------
        HazardAssessment

        Raises
        ------
        InvalidInputError
            If any input lies outside its domain.
        """
        _check_inputs(probability, kinetic_energy_j, distance_au, radius_km)
        level = self.level(probability, kinetic_energy_j, distance_au, radius_km)
        assessment = HazardAssessment(
            level=level,
            description=describe_level(level),
            band=band_for_level(level),
            probability=probability,
            kinetic_energy_j=kinetic_energy_j,
            distance_au=distance_au,
            radius_km=radius_km,
        )
        logger.debug("Hazard level %d (%s): p=%.3g E=%.3g J d=%.4f AU r=%.3f km",
                     level, assessment.band.value, probability, kinetic_energy_j,
                     distance_au, radius_km)
        return assessment

    @staticmethod
    def level(probability: float, kinetic_energy_j: float,
              distance_au: float, radius_km: float) -> int:
        """Raw decision chain, without input validation."""
        p = probability
        log_energy = math.log10(kinetic_energy_j + 1.0)

        is_close = distance_au < CLOSE_AU
        is_very_close = distance_au < VERY_CLOSE_AU
        is_large = radius_km > LARGE_KM
        is_very_large = radius_km > VERY_LARGE_KM
        is_massive = radius_km > MASSIVE_KM

        if p < 1e-6 and not is_very_close:
            level = 0
        elif p < 1e-4 and not is_close:
            level = 1
        elif is_very_close and is_massive:
            level = min(10, 7 + math.floor(p * 6))
        elif is_very_close and is_very_large:
            level = min(8, 5 + math.floor(p * 6))
        elif is_close and is_large:
            level = min(6, 3 + math.floor(log_energy / 4))
        elif p < 1e-2:
            level = min(4, math.floor(2 + log_energy / 5))
        elif p < 0.5:
            level = min(7, math.floor(4 + log_energy / 5))
        else:
            level = min(10, math.floor(7 + p * 6))

        return max(0, min(10, int(level)))


def _check_inputs(probability, kinetic_energy_j, distance_au, radius_km) -> None:
    values = (probability, kinetic_energy_j, distance_au, radius_km)
    if not all(math.isfinite(v) for v in values):
        raise InvalidInputError(f"Hazard inputs must be finite, got {values}")
    if not 0.0 <= probability <= 1.0:
        raise InvalidInputError(f"probability must lie in [0, 1], got {probability}")
    if kinetic_energy_j < 0.0:
        raise InvalidInputError(f"kinetic energy must be non-negative, got {kinetic_energy_j}")
    if distance_au <= 0.0:
        raise InvalidInputError(f"distance must be positive, got {distance_au}")
    if radius_km <= 0.0:
        raise InvalidInputError(f"radius must be positive, got {radius_km}")
