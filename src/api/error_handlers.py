"""Maps exceptions raised below the route layer onto JSON error responses."""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.application.interfaces.product_repository import StorageUnavailableError
from src.domain.entities.page_request import InvalidPageRequestError

logger = structlog.get_logger(__name__)


def _error(status_code: int, message: str, details: list[dict] | None = None) -> JSONResponse:  # type: ignore[type-arg]
    body: dict = {"error": message}  # type: ignore[type-arg]
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def _invalid_page_request_handler(request: Request, exc: InvalidPageRequestError) -> JSONResponse:
    return _error(
        status.HTTP_400_BAD_REQUEST,
        "Validation error",
        [{"field": e.field, "message": e.message} for e in exc.errors],
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        loc = err.get("loc", ())
        details.append(
            {
                "field": str(loc[-1]) if loc else "",
                "message": err.get("msg", ""),
            }
        )
    return _error(status.HTTP_400_BAD_REQUEST, "Validation error", details)


async def _storage_unavailable_handler(request: Request, exc: StorageUnavailableError) -> JSONResponse:
    logger.error("storage_unavailable", path=request.url.path, error=str(exc))
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return _error(exc.status_code, f"Route not found: {request.url.path}")
    return _error(exc.status_code, str(exc.detail))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidPageRequestError, _invalid_page_request_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageUnavailableError, _storage_unavailable_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)
