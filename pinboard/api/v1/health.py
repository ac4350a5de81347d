"""Health check and system endpoints."""

from fastapi import APIRouter

from pinboard import __version__
from pinboard.config import settings

router = APIRouter()


@router.get("/version")
async def get_version() -> dict[str, str]:
    """Get API version information.

    Returns:
        Version information including API version and environment.
    """
    return {
        "version": __version__,
        "environment": settings.environment,
    }
