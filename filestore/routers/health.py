"""Health check: bucket readiness."""

from fastapi import APIRouter, Depends

from filestore.errors import BucketValidationError
from filestore.schemas.responses import HealthResponse
from filestore.services.file_service import FileService, get_file_service

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns status and whether the configured bucket passed validation.",
    operation_id="getHealth",
)
async def health(service: FileService = Depends(get_file_service)) -> HealthResponse:
    try:
        await service.ready()
    except BucketValidationError as e:
        return HealthResponse(status="unavailable", bucket=service.bucket_name, ready=False, detail=str(e))
    return HealthResponse(status="healthy", bucket=service.bucket_name, ready=True)
