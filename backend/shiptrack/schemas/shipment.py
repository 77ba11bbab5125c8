"""Shipment Response Schemas — public-facing shapes for the three webhook/query routes.

Invariants:
    - Field names are camelCase on the wire (jobId, createdAt, ...)
    - JobLocationResponse omits latitude/longitude entirely when no location exists
    - Coordinates returned as the exact strings that were stored

Design Decisions:
    - from_record() classmethods keep response shaping out of the routes
"""

from datetime import datetime

from pydantic import BaseModel, Field

from shiptrack.core.domain_types import ShipmentRecord, ShipmentStatus


class LocationOut(BaseModel):
    latitude: str = Field(examples=["49.0041951"])
    longitude: str = Field(examples=["-122.7322901"])


# --- POST job-webhook ---------------------------------------------------------

class JobCreatedData(BaseModel):
    jobId: str = Field(examples=["B00001234"])
    shipmentId: str = Field(examples=["ABCD12345678"])
    status: ShipmentStatus
    createdAt: datetime
    updatedAt: datetime


class JobCreatedResponse(BaseModel):
    """Job creation response."""
    message: str = "Job created successfully"
    data: JobCreatedData

    @classmethod
    def from_record(cls, record: ShipmentRecord) -> "JobCreatedResponse":
        return cls(data=JobCreatedData(
            jobId=record.job_id,
            shipmentId=record.shipment_id,
            status=record.status,
            createdAt=record.created_at,
            updatedAt=record.updated_at,
        ))


# --- POST location-webhook ----------------------------------------------------

class LocationUpdatedData(BaseModel):
    shipmentId: str
    jobId: str
    location: LocationOut | None
    status: ShipmentStatus
    createdAt: datetime
    updatedAt: datetime


class LocationUpdatedResponse(BaseModel):
    """Location update response — returned for written and skipped updates alike."""
    message: str = "Location updated successfully"
    data: LocationUpdatedData

    @classmethod
    def from_record(cls, record: ShipmentRecord) -> "LocationUpdatedResponse":
        location = (
            LocationOut(**record.location.to_dict()) if record.location else None
        )
        return cls(data=LocationUpdatedData(
            shipmentId=record.shipment_id,
            jobId=record.job_id,
            location=location,
            status=record.status,
            createdAt=record.created_at,
            updatedAt=record.updated_at,
        ))


# --- GET location/{job_id} ----------------------------------------------------

class JobLocationResponse(BaseModel):
    """Current status and position of a job."""
    job: str = Field(examples=["B00001234"])
    shipment: str = Field(examples=["ABCD12345678"])
    status: ShipmentStatus
    latitude: str | None = Field(None, examples=["49.0041951"])
    longitude: str | None = Field(None, examples=["-122.7322901"])
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_record(cls, record: ShipmentRecord) -> "JobLocationResponse":
        coordinates = record.location.to_dict() if record.location else {}
        return cls(
            job=record.job_id,
            shipment=record.shipment_id,
            status=record.status,
            createdAt=record.created_at,
            updatedAt=record.updated_at,
            **coordinates,
        )
