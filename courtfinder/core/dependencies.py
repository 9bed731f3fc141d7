"""FastAPI dependencies for injection into route handlers."""

from fastapi import Depends, Header, HTTPException, Request, status

from courtfinder.core.auth import is_super_admin_secret
from courtfinder.core.config import Settings
from courtfinder.core.database import Database, get_database
from courtfinder.services.image_host import ImageHost


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_image_host(request: Request) -> ImageHost:
    return request.app.state.image_host


async def is_super_admin(
    x_admin_secret: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> bool:
    """True when the request carries the super-admin secret in ``X-Admin-Secret``.

    Never rejects: callers use the flag to decide what to reveal.
    """
    return is_super_admin_secret(x_admin_secret, settings)


async def sports_enabled(database: Database = Depends(get_database)) -> bool:
    return database.has_sports


async def require_sports(has_sports: bool = Depends(sports_enabled)) -> None:
    """Reject sport writes when the sports tables were not found at start-up."""
    if not has_sports:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Sports tables are not installed",
        )
