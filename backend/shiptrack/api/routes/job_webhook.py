"""Job Webhook — binds a shipment to a new job.

Invariants:
    - Payload validated before the DB dependency is resolved: invalid input never touches storage
    - Unknown payload fields are dropped silently
    - 201 on success; 400/409/500 come from the global error handlers
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from shiptrack.api.dependencies import get_shipment_service
from shiptrack.schemas.shipment import JobCreatedResponse
from shiptrack.schemas.webhook import JobWebhookPayload, validate_job_payload
from shiptrack.services.shipment_service import ShipmentService

router = APIRouter(prefix="/api/v1", tags=["webhooks"])


def job_payload(payload: Any = Body(None)) -> JobWebhookPayload:
    return validate_job_payload(payload, strip_unknown=True)


@router.post(
    "/job-webhook", response_model=JobCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def job_webhook(
    data: JobWebhookPayload = Depends(job_payload),
    service: ShipmentService = Depends(get_shipment_service),
):
    """Create a job/shipment pairing."""
    shipment = await service.create_job(data.job, data.shipment, data.status)
    return JobCreatedResponse.from_record(shipment)
