"""Location Query — current status and position of a job.

Invariants:
    - Malformed job IDs rejected with 400 before any lookup
    - Absence is a 404, not a server error
    - latitude/longitude omitted (not null) until the first location update
"""

from fastapi import APIRouter, Depends

from shiptrack.api.dependencies import get_shipment_service
from shiptrack.core.domain_types import JobId
from shiptrack.core.errors import JobNotFoundError
from shiptrack.schemas.shipment import JobLocationResponse
from shiptrack.schemas.webhook import validate_job_id
from shiptrack.services.shipment_service import ShipmentService

router = APIRouter(prefix="/api/v1/location", tags=["query"])


def path_job_id(job_id: str) -> JobId:
    return validate_job_id(job_id)


@router.get(
    "/{job_id}", response_model=JobLocationResponse,
    response_model_exclude_none=True,
)
async def query_location(
    job_id: JobId = Depends(path_job_id),
    service: ShipmentService = Depends(get_shipment_service),
):
    """Look up a job by ID."""
    shipment = await service.get_job_location(job_id)
    if shipment is None:
        raise JobNotFoundError(job_id)
    return JobLocationResponse.from_record(shipment)
