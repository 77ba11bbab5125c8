"""Shipment ORM — persists the job/shipment binding and its latest position.

Invariants:
    - id is UUID primary key, never exposed outside the repository
    - job_id is unique (storage-level backstop for concurrent job creation)
    - shipment_id is indexed but not unique: the one-job binding is a service rule
    - latitude/longitude are both NULL or both set; stored as received strings
    - created_at set on insert; updated_at refreshed on every UPDATE
    - status, latitude, longitude pass @validates hooks on every assignment

Design Decisions:
    - Two nullable columns instead of a JSON location document: both are
      written together by the only mutating operation
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy.dialects.postgresql import UUID

from shiptrack.core.domain_types import (
    Location, ShipmentRecord, ShipmentStatus, JobId, ShipmentId,
)
from shiptrack.core.identifiers import (
    COORDINATE_MAX_LENGTH, check_latitude, check_longitude,
)
from shiptrack.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Shipment(Base):
    """Shipment row — one per job."""
    __tablename__ = "shipments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    job_id: Mapped[str] = mapped_column(
        String(9), nullable=False, unique=True, index=True,
    )
    shipment_id: Mapped[str] = mapped_column(
        String(12), nullable=False, index=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    latitude: Mapped[str | None] = mapped_column(
        String(COORDINATE_MAX_LENGTH), nullable=True,
    )
    longitude: Mapped[str | None] = mapped_column(
        String(COORDINATE_MAX_LENGTH), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    @validates("status")
    def validate_status(self, key: str, value: str) -> str:
        return ShipmentStatus(value).value

    @validates("latitude", "longitude")
    def validate_coordinate(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        rule = check_latitude if key == "latitude" else check_longitude
        violation = rule(value)
        if violation:
            raise ValueError(violation)
        return value

    def to_record(self) -> ShipmentRecord:
        location = None
        if self.latitude is not None and self.longitude is not None:
            location = Location(latitude=self.latitude, longitude=self.longitude)
        return ShipmentRecord(
            job_id=JobId(self.job_id),
            shipment_id=ShipmentId(self.shipment_id),
            status=ShipmentStatus(self.status),
            location=location,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
