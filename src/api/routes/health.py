from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_database
from src.api.schemas.product_responses import HealthResponse
from src.infrastructure.database.connection import Database

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health_check(database: Database = Depends(get_database)) -> JSONResponse:
    """Liveness + database connectivity check."""
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        await database.ping()
    except Exception as exc:
        logger.error("database_health_check_failed", error=str(exc))
        body = HealthResponse(status="error", timestamp=timestamp, database="disconnected")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )

    body = HealthResponse(status="ok", timestamp=timestamp, database="connected")
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())
