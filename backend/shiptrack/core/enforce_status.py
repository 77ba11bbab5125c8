"""Status Transition Enforcement — guards status changes on terminal shipments.

Invariants:
    - DELIVERED and CANCELLED never change to a different value
    - Re-applying the current status is always allowed (idempotent)
    - Non-terminal statuses may move to any status

Design Decisions:
    - Raises ShipmentConflictError directly: the only caller is the service,
      which propagates it unchanged
"""

from shiptrack.core.domain_types import ShipmentStatus, is_terminal
from shiptrack.core.errors import ErrorContext, ShipmentConflictError


def check_status_change(
    current: ShipmentStatus,
    requested: ShipmentStatus,
    shipment_id: str | None = None,
) -> None:
    """Raise if `current` is terminal and `requested` differs from it."""
    current = ShipmentStatus(current)
    requested = ShipmentStatus(requested)
    if is_terminal(current) and requested != current:
        raise ShipmentConflictError(
            f"Cannot change status of shipment in {current.value} status",
            ErrorContext(shipment_id=shipment_id),
        )


def check_location_mutable(status: ShipmentStatus, shipment_id: str) -> None:
    """Terminal shipments accept no location writes at all."""
    status = ShipmentStatus(status)
    if is_terminal(status):
        raise ShipmentConflictError(
            f"Cannot update location for shipment in {status.value} status",
            ErrorContext(shipment_id=shipment_id),
        )
