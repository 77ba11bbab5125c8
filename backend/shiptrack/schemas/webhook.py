"""Webhook Payload Schemas — Pydantic models with field-level validation for inbound webhooks.

Invariants:
    - All string fields are trimmed before any rule runs
    - Every violated rule is reported, not just the first
    - Permissive models drop unknown fields; strict models reject each one
    - validate_* never touch storage: failures surface as PayloadValidationError

Design Decisions:
    - Field rules live in core/identifiers.py; models only wire them to fields
    - Field names mirror the wire format (job, shipment, ...); services map them
      to job_id/shipment_id
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from shiptrack.core.domain_types import JobId, ShipmentStatus
from shiptrack.core.errors import PayloadValidationError
from shiptrack.core.identifiers import (
    check_job_id,
    check_latitude,
    check_longitude,
    check_shipment_id,
    check_status,
)


FIELD_LABELS: dict[str, str] = {
    "job": "Job ID",
    "shipment": "Shipment ID",
    "status": "Status",
    "latitude": "Latitude",
    "longitude": "Longitude",
}


def _apply_rule(value: str, rule: Callable[[str], str | None], label: str) -> str:
    if not value:
        raise ValueError(f"{label} is required")
    violation = rule(value)
    if violation:
        raise ValueError(violation)
    return value


def _coerce_status(value: Any, required: bool) -> str | None:
    if value is None:
        if required:
            raise ValueError("Status is required")
        return None
    if not isinstance(value, str):
        raise ValueError("Status must be a string")
    value = value.strip()
    if required:
        return _apply_rule(value, check_status, "Status")
    # optional status: present but blank is an invalid value
    violation = check_status(value)
    if violation:
        raise ValueError(violation)
    return value


# --- Job webhook --------------------------------------------------------------

class JobWebhookPayload(BaseModel):
    """Job creation — binds a shipment to a new job."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    job: str
    shipment: str
    status: ShipmentStatus

    @field_validator("job")
    @classmethod
    def check_job(cls, v: str) -> str:
        return _apply_rule(v, check_job_id, FIELD_LABELS["job"])

    @field_validator("shipment")
    @classmethod
    def check_shipment(cls, v: str) -> str:
        return _apply_rule(v, check_shipment_id, FIELD_LABELS["shipment"])

    @field_validator("status", mode="before")
    @classmethod
    def check_status_value(cls, v: Any) -> str | None:
        return _coerce_status(v, required=True)


class StrictJobWebhookPayload(JobWebhookPayload):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


# --- Location webhook ---------------------------------------------------------

class LocationWebhookPayload(BaseModel):
    """GPS fix for a shipment, optionally carrying a status change."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    shipment: str
    latitude: str
    longitude: str
    status: ShipmentStatus | None = None

    @field_validator("shipment")
    @classmethod
    def check_shipment(cls, v: str) -> str:
        return _apply_rule(v, check_shipment_id, FIELD_LABELS["shipment"])

    @field_validator("latitude")
    @classmethod
    def check_lat(cls, v: str) -> str:
        return _apply_rule(v, check_latitude, FIELD_LABELS["latitude"])

    @field_validator("longitude")
    @classmethod
    def check_lng(cls, v: str) -> str:
        return _apply_rule(v, check_longitude, FIELD_LABELS["longitude"])

    @field_validator("status", mode="before")
    @classmethod
    def check_status_value(cls, v: Any) -> str | None:
        return _coerce_status(v, required=False)


class StrictLocationWebhookPayload(LocationWebhookPayload):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


# --- Entry points -------------------------------------------------------------

def validate_job_payload(
    raw: Any, strip_unknown: bool = True,
) -> JobWebhookPayload:
    """Validate a job webhook body. Raises PayloadValidationError with every violation."""
    model = JobWebhookPayload if strip_unknown else StrictJobWebhookPayload
    return _validate(model, raw)


def validate_location_payload(
    raw: Any, strip_unknown: bool = True,
) -> LocationWebhookPayload:
    """Validate a location webhook body. Raises PayloadValidationError with every violation."""
    model = LocationWebhookPayload if strip_unknown else StrictLocationWebhookPayload
    return _validate(model, raw)


def validate_job_id(value: Any) -> JobId:
    """Validate a job ID taken from a path parameter."""
    job_id = value.strip() if isinstance(value, str) else ""
    violation = check_job_id(job_id)
    if violation:
        raise PayloadValidationError([violation], message="Invalid job ID format")
    return JobId(job_id)


def _validate(model: type[BaseModel], raw: Any):
    try:
        return model.model_validate({} if raw is None else raw)
    except ValidationError as exc:
        raise PayloadValidationError(_collect_violations(exc)) from None


def _collect_violations(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into human-readable rule violations."""
    details: list[str] = []
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else ""
        label = FIELD_LABELS.get(name, name)
        kind = error["type"]
        if kind == "missing":
            details.append(f"{label} is required")
        elif kind == "extra_forbidden":
            details.append(f"Unknown field '{name}' is not allowed")
        elif kind == "value_error":
            details.append(str(error.get("ctx", {}).get("error", error["msg"])))
        elif kind == "string_type":
            details.append(f"{label} must be a string")
        elif kind in ("model_type", "model_attributes_type", "dict_type"):
            details.append("Payload must be an object")
        else:
            details.append(f"{label}: {error['msg']}")
    return details
