"""Venue routes: list, read, create, update, delete and display order."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courtfinder.core.database import get_db
from courtfinder.core.dependencies import get_image_host, is_super_admin, sports_enabled
from courtfinder.models import Venue
from courtfinder.schemas import ReorderRequest, SportLinkOut, VenueAdminOut, VenueIn, VenueOut
from courtfinder.services import venues as venue_service
from courtfinder.services.image_host import ImageHost
from courtfinder.services.venues import SportsUnavailable, VenueNotFound

router = APIRouter(prefix="/venues", tags=["venues"])
stations_router = APIRouter(tags=["venues"])


def _venue_out(venue: Venue, sport_data: list[SportLinkOut], include_admin: bool) -> VenueOut:
    """Serialise a venue. The admin password only goes to the super admin."""
    schema = VenueAdminOut if include_admin else VenueOut
    return schema.model_validate(venue).model_copy(update={"sport_data": sport_data})


async def _render(
    db: AsyncSession, venues: list[Venue], has_sports: bool, include_admin: bool
) -> list[VenueOut]:
    sport_data = await venue_service.load_sport_data(db, [v.id for v in venues]) if has_sports else {}
    return [_venue_out(v, sport_data.get(v.id, []), include_admin) for v in venues]


def _not_found(exc: VenueNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


# response_model is left unset on reads and writes: the payload shape depends
# on whether the caller is the super admin.


@router.get("", response_model=None)
async def list_venues(
    q: str | None = Query(None, description="Search name, station and address"),
    station: str | None = Query(None, description="Transit station name contains"),
    max_walking_distance: int | None = Query(None, ge=0, description="Minutes from the station"),
    sport: str | None = Query(None, description="Sport slug; uses the per-sport order"),
    super_admin: bool = Depends(is_super_admin),
    has_sports: bool = Depends(sports_enabled),
    db: AsyncSession = Depends(get_db),
):
    venues = await venue_service.list_venues(
        db,
        has_sports=has_sports,
        query=q,
        station=station,
        max_walking_distance=max_walking_distance,
        sport_slug=sport,
    )
    return await _render(db, venues, has_sports, super_admin)


@router.patch("/order", status_code=status.HTTP_204_NO_CONTENT)
async def reorder_venues(
    body: ReorderRequest,
    has_sports: bool = Depends(sports_enabled),
    db: AsyncSession = Depends(get_db),
):
    """Set sort_order from list position, globally or within ``sportId``. All or nothing."""
    try:
        await venue_service.reorder_venues(db, body.ordered_ids, body.sport_id, has_sports=has_sports)
        await db.commit()
    except VenueNotFound as exc:
        raise _not_found(exc) from None
    except SportsUnavailable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Sports tables are not installed"
        ) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{venue_id}", response_model=None)
async def get_venue(
    venue_id: int,
    super_admin: bool = Depends(is_super_admin),
    has_sports: bool = Depends(sports_enabled),
    db: AsyncSession = Depends(get_db),
):
    try:
        venue = await venue_service.get_venue(db, venue_id)
    except VenueNotFound as exc:
        raise _not_found(exc) from None
    return (await _render(db, [venue], has_sports, super_admin))[0]


@router.post("", response_model=None, status_code=status.HTTP_201_CREATED)
async def create_venue(
    body: VenueIn,
    super_admin: bool = Depends(is_super_admin),
    has_sports: bool = Depends(sports_enabled),
    image_host: ImageHost = Depends(get_image_host),
    db: AsyncSession = Depends(get_db),
):
    values = await venue_service.prepare_venue_values(body, image_host)
    venue = await venue_service.create_venue(db, values, body.sport_data, has_sports=has_sports)
    await db.commit()
    return (await _render(db, [venue], has_sports, super_admin))[0]


@router.put("/{venue_id}", response_model=None)
async def update_venue(
    venue_id: int,
    body: VenueIn,
    super_admin: bool = Depends(is_super_admin),
    has_sports: bool = Depends(sports_enabled),
    image_host: ImageHost = Depends(get_image_host),
    db: AsyncSession = Depends(get_db),
):
    """Partial update: only fields present in the body are written."""
    try:
        # Check existence before uploading any images
        await venue_service.get_venue(db, venue_id)
        values = await venue_service.prepare_venue_values(body, image_host)
        venue = await venue_service.update_venue(db, venue_id, values, body.sport_data, has_sports=has_sports)
        await db.commit()
    except VenueNotFound as exc:
        raise _not_found(exc) from None
    return (await _render(db, [venue], has_sports, super_admin))[0]


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(
    venue_id: int,
    has_sports: bool = Depends(sports_enabled),
    db: AsyncSession = Depends(get_db),
):
    try:
        await venue_service.delete_venue(db, venue_id, has_sports=has_sports)
        await db.commit()
    except VenueNotFound as exc:
        raise _not_found(exc) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@stations_router.get("/stations", response_model=list[str])
async def list_stations(db: AsyncSession = Depends(get_db)):
    """Distinct transit stations, for the station filter."""
    return await venue_service.list_stations(db)
