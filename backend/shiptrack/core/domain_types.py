"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - JobId and ShipmentId wrap str — never pass unvalidated strings as identifiers
    - All valid shipment states encoded as ShipmentStatus — no raw string matching
    - DELIVERED and CANCELLED are the only terminal states
    - Coordinates stay strings end to end (stored and returned verbatim)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - ShipmentRecord is a frozen dataclass so ORM rows never leak past the repository
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

JobId = NewType("JobId", str)                # B00000000
ShipmentId = NewType("ShipmentId", str)      # ABCD12345678


# ─── Enums ───────────────────────────────────────────────────────

class ShipmentStatus(str, Enum):
    """Shipment lifecycle states — maps to DB `status` column."""
    ADDED = "ADDED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES: frozenset[ShipmentStatus] = frozenset({
    ShipmentStatus.DELIVERED,
    ShipmentStatus.CANCELLED,
})


def is_terminal(status: ShipmentStatus | str) -> bool:
    """True when no further location or status change is allowed."""
    return ShipmentStatus(status) in TERMINAL_STATUSES


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Location:
    """Latest known position, decimal degrees as received."""
    latitude: str
    longitude: str

    def to_dict(self) -> dict[str, str]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class ShipmentRecord:
    """Read-only snapshot of a persisted shipment."""
    job_id: JobId
    shipment_id: ShipmentId
    status: ShipmentStatus
    location: Location | None
    created_at: datetime
    updated_at: datetime
