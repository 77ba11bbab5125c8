"""Significance Filter — tests for the flat-threshold coordinate comparison.

Tests cover:
    - First location is always significant
    - Sub-threshold drift on both axes is ignored
    - Either axis crossing the threshold is enough
    - Threshold itself is not significant (strictly greater)
"""

import pytest

from shiptrack.core.domain_types import Location
from shiptrack.core.significance import (
    SIGNIFICANCE_THRESHOLD_DEGREES, is_significant,
)


BASE = Location("49.0041951", "-122.7322901")


def test_threshold_value():
    assert SIGNIFICANCE_THRESHOLD_DEGREES == 0.0001


@pytest.mark.parametrize("new", [
    Location("0", "0"),
    Location("49.0041951", "-122.7322901"),
    Location("-90", "180"),
])
def test_no_previous_location_is_always_significant(new):
    assert is_significant(None, new) is True


def test_tiny_drift_is_not_significant():
    assert is_significant(BASE, Location("49.0041960", "-122.7322910")) is False


def test_large_move_is_significant():
    assert is_significant(BASE, Location("49.1041951", "-122.8322901")) is True


def test_identical_location_is_not_significant():
    assert is_significant(BASE, BASE) is False


def test_latitude_alone_crossing_threshold_is_significant():
    assert is_significant(BASE, Location("49.0043951", "-122.7322901")) is True


def test_longitude_alone_crossing_threshold_is_significant():
    assert is_significant(BASE, Location("49.0041951", "-122.7320901")) is True


def test_delta_equal_to_threshold_is_not_significant():
    assert is_significant(Location("0", "0"), Location("0.0001", "0")) is False
    assert is_significant(Location("0", "0"), Location("0", "-0.0001")) is False


def test_longitude_threshold_not_scaled_by_latitude():
    # Same angular move at the equator and near the pole gives the same answer
    equator = is_significant(Location("0", "10"), Location("0", "10.00005"))
    polar = is_significant(Location("89.9", "10"), Location("89.9", "10.00005"))
    assert equator is polar is False
