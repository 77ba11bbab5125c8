"""Identifier & Coordinate Rules — pure shape checks for webhook fields.

Invariants:
    - Every check returns a violation message (str) or None, never raises
    - Checks operate on already-trimmed strings
    - Patterns are anchored: trailing characters always fail
    - Coordinates longer than COORDINATE_MAX_LENGTH fail, so every accepted
      value fits its storage column

Design Decisions:
    - Coordinates accepted only as plain decimal degrees (no exponent, no
      underscores, no nan/inf) so the stored string is what the client sent
"""

import re

from shiptrack.core.domain_types import ShipmentStatus


JOB_ID_PATTERN = re.compile(r"^B\d{8}$", re.ASCII)
SHIPMENT_ID_PATTERN = re.compile(r"^[A-Z]{4}\d{8}$", re.ASCII)
DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$", re.ASCII)

# Matches the latitude/longitude column width
COORDINATE_MAX_LENGTH = 32

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

JOB_ID_MESSAGE = "Job ID must match pattern B00000000"
SHIPMENT_ID_MESSAGE = "Shipment ID must match pattern ABCD12345678"
STATUS_MESSAGE = "Invalid status"
LATITUDE_MESSAGE = "Invalid latitude: must be between -90 and 90"
LONGITUDE_MESSAGE = "Invalid longitude: must be between -180 and 180"


def check_job_id(value: str) -> str | None:
    if not JOB_ID_PATTERN.fullmatch(value):
        return JOB_ID_MESSAGE
    return None


def check_shipment_id(value: str) -> str | None:
    if not SHIPMENT_ID_PATTERN.fullmatch(value):
        return SHIPMENT_ID_MESSAGE
    return None


def check_status(value: str) -> str | None:
    """Exact, case-sensitive enum membership."""
    if value not in {s.value for s in ShipmentStatus}:
        return STATUS_MESSAGE
    return None


def check_latitude(value: str) -> str | None:
    return _check_degrees(value, LATITUDE_RANGE, LATITUDE_MESSAGE)


def check_longitude(value: str) -> str | None:
    return _check_degrees(value, LONGITUDE_RANGE, LONGITUDE_MESSAGE)


def _check_degrees(
    value: str, bounds: tuple[float, float], message: str,
) -> str | None:
    if len(value) > COORDINATE_MAX_LENGTH or not DECIMAL_PATTERN.fullmatch(value):
        return message
    low, high = bounds
    if not low <= float(value) <= high:
        return message
    return None
