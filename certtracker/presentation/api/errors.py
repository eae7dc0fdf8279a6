"""Maps domain errors onto HTTP responses."""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ...domain.errors import (
    BonusNotClaimable,
    BountyClaimRejected,
    CertTrackerError,
    DuplicateClaim,
    InvalidTransition,
    NotFound,
    PersistenceFailure,
)

logger = structlog.get_logger()

STATUS_CODES: dict[type[CertTrackerError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateClaim: status.HTTP_409_CONFLICT,
    InvalidTransition: status.HTTP_409_CONFLICT,
    BountyClaimRejected: status.HTTP_400_BAD_REQUEST,
    BonusNotClaimable: status.HTTP_400_BAD_REQUEST,
    PersistenceFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(error: CertTrackerError) -> int:
    for error_type, code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, exc: CertTrackerError) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        logger.error("Request failed", error=exc.message, error_type=type(exc).__name__)
    else:
        logger.info("Request rejected", error=exc.message, status_code=code)
    return JSONResponse(status_code=code, content={"detail": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CertTrackerError, handle_domain_error)
