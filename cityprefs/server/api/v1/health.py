"""
Health Check Endpoints.

``/health`` reports whether the server can reach its database; ``/version``
reports the API and schema versions. Both are used by deployment health checks.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cityprefs.core.database import get_session
from cityprefs.core.logging_config import get_logger
from cityprefs.server.core import constant

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check that the server is up and its database answers a trivial query.",
    response_description="Status of the server and of its database.",
    responses={503: {"description": "The database is unreachable"}},
)
async def health_check(response: Response, session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Health check could not reach the database: {e}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "ok", "database": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve the API version and the version of the persisted schema.",
    response_description="Version object.",
)
async def version():
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
