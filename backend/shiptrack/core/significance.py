"""Significance Filter — decides whether a GPS fix is worth persisting.

Invariants:
    - is_significant is PURE: no IO, no state
    - No previous location → always significant
    - Each axis compared independently against the same angular threshold;
      the delta must strictly exceed it

Design Decisions:
    - Flat threshold in degrees on both axes. Longitude is not scaled by
      cos(latitude), so near the poles a smaller physical move passes the filter
"""

from shiptrack.core.domain_types import Location


SIGNIFICANCE_THRESHOLD_DEGREES: float = 0.0001  # ~11 m of latitude


def is_significant(old: Location | None, new: Location) -> bool:
    """True when `new` differs enough from `old` to warrant a write."""
    if old is None:
        return True

    lat_diff = abs(float(old.latitude) - float(new.latitude))
    lng_diff = abs(float(old.longitude) - float(new.longitude))

    return (
        lat_diff > SIGNIFICANCE_THRESHOLD_DEGREES
        or lng_diff > SIGNIFICANCE_THRESHOLD_DEGREES
    )
