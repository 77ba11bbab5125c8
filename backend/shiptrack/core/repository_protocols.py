"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Lookup criteria carry exactly one key: "job_id" or "shipment_id"

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO; the pure rules that consume
      the returned records stay synchronous
"""

from collections.abc import Mapping
from typing import Protocol

from shiptrack.core.domain_types import ShipmentRecord, ShipmentStatus


LOOKUP_KEYS: frozenset[str] = frozenset({"job_id", "shipment_id"})


class ShipmentRepository(Protocol):
    """Contract for shipment persistence — implemented by shell."""

    async def insert(
        self, job_id: str, shipment_id: str, status: ShipmentStatus,
    ) -> ShipmentRecord:
        """Persist a new shipment. Raises DuplicateKeyError on a unique index hit."""
        ...

    async def find_one(
        self, criteria: Mapping[str, str],
    ) -> ShipmentRecord | None: ...

    async def update_one(
        self, criteria: Mapping[str, str], fields: Mapping[str, object],
    ) -> ShipmentRecord | None:
        """Apply `fields` to the first match, validated, and return the updated record."""
        ...
