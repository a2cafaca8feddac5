"""Map domain errors onto HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from subway.core.errors import ChainConflictError, NotFoundError, StationInUseError
from subway.helpers.section_chain import SectionChainError

# Most specific first; the first matching class wins
ERROR_STATUS_CODES: dict[type[Exception], int] = {
    SectionChainError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StationInUseError: status.HTTP_409_CONFLICT,
    ChainConflictError: status.HTTP_409_CONFLICT,
}


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as ``{"detail": ..., "code": ...}``."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": getattr(exc, "code", type(exc).__name__)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handler for every mapped error type."""
    for error_type in ERROR_STATUS_CODES:
        app.add_exception_handler(error_type, domain_error_handler)
