"""
===============================================================================
COSMORISK - Hazard Classifier Test Suite
===============================================================================
Tests for the Torino-like decision chain: every branch, branch precedence,
colour bands, descriptions and input validation.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math

import pytest
from numpy.testing import assert_allclose

from cosmorisk.core.exceptions import InvalidInputError
from cosmorisk.assessment.hazard import (
    HazardClassifier, TorinoBand, LEVEL_DESCRIPTIONS,
    band_for_level, describe_level,
)


@pytest.fixture
def classifier():
    return HazardClassifier()


# =============================================================================
# Test: Decision chain
# =============================================================================

class TestHazardLevel:
    """One case per branch of the chain, in order."""

    def test_negligible_far_body_is_zero(self, classifier):
        result = classifier.classify(probability=1e-7, kinetic_energy_j=1e15,
                                     distance_au=0.5, radius_km=0.1)
        assert result.level == 0
        assert result.band is TorinoBand.WHITE

    def test_very_close_massive_body(self, classifier):
        result = classifier.classify(probability=0.3, kinetic_energy_j=1e20,
                                     distance_au=0.005, radius_km=2.0)
        assert result.level == 8
        assert result.band is TorinoBand.RED

    def test_reference_cases(self, classifier):
        assert classifier.classify(1e-7, 0.0, 1.0, 0.01).level == 0
        assert classifier.classify(0.6, 1e20, 0.005, 2.0).level == 10

    def test_unlikely_distant_body_is_one(self, classifier):
        assert classifier.classify(1e-5, 1e12, 0.5, 0.2).level == 1

    def test_very_close_very_large(self, classifier):
        """min(8, 5 + floor(6 * 0.3)) = 6."""
        assert classifier.classify(0.3, 1e18, 0.005, 0.8).level == 6

    @pytest.mark.parametrize("energy,expected", [
        (1e8, 5),     # 3 + floor(8 / 4)
        (1e16, 6),    # 3 + floor(16 / 4) = 7, capped at 6
        (0.0, 3),     # log10(1) = 0
    ])
    def test_close_and_large(self, classifier, energy, expected):
        assert classifier.classify(0.001, energy, 0.03, 0.1).level == expected

    @pytest.mark.parametrize("energy,expected", [
        (1e5, 3),     # floor(2 + 5 / 5)
        (1e10, 4),    # floor(2 + 10 / 5)
        (1e30, 4),    # capped at 4
    ])
    def test_low_probability_bucket(self, classifier, energy, expected):
        assert classifier.classify(0.005, energy, 0.5, 0.01).level == expected

    @pytest.mark.parametrize("energy,expected", [
        (1e10, 6),    # floor(4 + 10 / 5)
        (1e20, 7),    # capped at 7
    ])
    def test_moderate_probability_bucket(self, classifier, energy, expected):
        assert classifier.classify(0.1, energy, 0.5, 0.01).level == expected

    @pytest.mark.parametrize("p", [0.5, 0.75, 1.0])
    def test_high_probability_is_certain_collision(self, classifier, p):
        assert classifier.classify(p, 1e15, 0.5, 0.01).level == 10

    def test_low_probability_very_close_small(self, classifier):
        """Very close blocks the first two branches; falls to the p < 1e-2 bucket."""
        assert classifier.classify(1e-7, 0.0, 0.005, 0.01).level == 2

    def test_proximity_precedes_probability_bucket(self, classifier):
        """A very close massive body outranks its tiny probability."""
        assert classifier.classify(1e-5, 1e10, 0.005, 2.0).level == 7

    def test_level_always_in_range(self, classifier):
        for p in (0.0, 1e-7, 1e-5, 1e-3, 0.2, 0.9):
            for d in (0.001, 0.03, 0.5):
                for r in (0.01, 0.1, 0.8, 5.0):
                    for energy in (0.0, 1e9, 1e25):
                        level = classifier.classify(p, energy, d, r).level
                        assert 0 <= level <= 10

    def test_static_level_matches_classify(self, classifier):
        result = classifier.classify(0.1, 1e10, 0.5, 0.01)
        assert HazardClassifier.level(0.1, 1e10, 0.5, 0.01) == result.level


# =============================================================================
# Test: Result metadata
# =============================================================================

class TestHazardAssessment:

    def test_carries_inputs_and_description(self, classifier):
        result = classifier.classify(0.1, 4.184e15, 0.5, 0.01)
        assert result.description == LEVEL_DESCRIPTIONS[result.level]
        assert result.probability == 0.1
        assert result.distance_au == 0.5
        assert_allclose(result.energy_megatons, 1.0)

    @pytest.mark.parametrize("level,band", [
        (0, TorinoBand.WHITE),
        (1, TorinoBand.GREEN),
        (2, TorinoBand.YELLOW),
        (4, TorinoBand.YELLOW),
        (5, TorinoBand.ORANGE),
        (7, TorinoBand.ORANGE),
        (8, TorinoBand.RED),
        (10, TorinoBand.RED),
    ])
    def test_band_mapping(self, level, band):
        assert band_for_level(level) is band

    def test_eleven_descriptions(self):
        assert sorted(LEVEL_DESCRIPTIONS) == list(range(11))
        assert describe_level(0).startswith('No hazard')
        assert describe_level(10).startswith('Certain collision')

    def test_unknown_level_description(self):
        assert describe_level(11) == 'Unknown'


# =============================================================================
# Test: Validation
# =============================================================================

class TestHazardValidation:

    @pytest.mark.parametrize("p,energy,d,r", [
        (-0.1, 1.0, 0.5, 0.1),
        (1.5, 1.0, 0.5, 0.1),
        (0.1, -1.0, 0.5, 0.1),
        (0.1, 1.0, 0.0, 0.1),
        (0.1, 1.0, -0.2, 0.1),
        (0.1, 1.0, 0.5, 0.0),
        (math.nan, 1.0, 0.5, 0.1),
        (0.1, math.inf, 0.5, 0.1),
    ])
    def test_rejects_out_of_domain(self, classifier, p, energy, d, r):
        with pytest.raises(InvalidInputError):
            classifier.classify(p, energy, d, r)

    def test_invalid_input_is_value_error(self, classifier):
        with pytest.raises(ValueError):
            classifier.classify(2.0, 1.0, 0.5, 0.1)
