"""Admin login: exchange a venue admin password for the set of venues it unlocks."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from courtfinder.core.auth import is_super_admin_secret
from courtfinder.core.config import Settings
from courtfinder.core.database import get_db
from courtfinder.core.dependencies import get_settings
from courtfinder.schemas import LoginRequest, LoginResponse
from courtfinder.services.venues import all_venue_ids, find_venue_ids_for_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    """Return every venue id the password unlocks.

    Venue passwords are shared secrets: one password may unlock several
    venues. The super-admin secret unlocks all of them.
    """
    if not body.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password required")

    if is_super_admin_secret(body.password, settings):
        return LoginResponse(allowed_venue_ids=await all_venue_ids(db), is_super_admin=True)

    venue_ids = await find_venue_ids_for_password(db, body.password)
    if not venue_ids:
        logger.info("Admin login rejected")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    return LoginResponse(allowed_venue_ids=venue_ids)
