"""
Health Check Endpoints.

Liveness, readiness and version information for monitoring and deployment
verification.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from snapsolve.core.database.entities.usage import Usage
from snapsolve.core.logging_config import get_logger
from snapsolve.server.core import constant
from snapsolve.server.services.deps import EntitlementsDep, SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", summary="Liveness Check", response_description="Status object.")
async def health_check():
    """The process is up and serving requests."""
    return {"status": "ok"}


@router.get(
    "/ready",
    summary="Readiness Check",
    description="Check the database and the entitlement listener. Returns 503 when the database is unreachable.",
)
async def readiness_check(session: SessionDep, entitlements: EntitlementsDep):
    checks = {"database": "ok", "entitlement_listener": "running" if entitlements.listening else "stopped"}
    try:
        await session.exec(select(Usage.id).limit(1))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        checks["database"] = "unavailable"
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "error", **checks})
    return {"status": "ok", **checks}


@router.get("/version", summary="Get Version", response_description="Version object.")
async def version():
    """Current API version and schema version."""
    return {"name": constant.PROJECT_NAME, "version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
