"""Venue persistence: listing, CRUD, sport associations and display order.

Functions here take the request session and never commit; the route commits
once the service call returns, so multi-statement operations (reorder,
replacing sport links alongside an insert or update) are applied
all-or-nothing.
"""

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import Select, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courtfinder.core.auth import check_admin_password, hash_password
from courtfinder.models import Sport, Venue, VenueSport
from courtfinder.schemas import SportLinkIn, SportLinkOut, VenueIn
from courtfinder.services.image_host import ImageHost


class VenueNotFound(Exception):
    """Raised when an operation targets a venue (or venue-sport link) that doesn't exist."""

    def __init__(self, venue_id: int):
        self.venue_id = venue_id
        super().__init__(f"Venue {venue_id} not found")


class SportsUnavailable(Exception):
    """Raised when a sport-scoped operation runs against a schema without sports tables."""


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def _display_order(stmt: Select) -> Select:
    return stmt.order_by(Venue.sort_order.is_(None), Venue.sort_order, Venue.name, Venue.id)


async def list_venues(
    db: AsyncSession,
    *,
    has_sports: bool,
    query: str | None = None,
    station: str | None = None,
    max_walking_distance: int | None = None,
    sport_slug: str | None = None,
) -> list[Venue]:
    """Venues in display order, optionally filtered.

    With ``sport_slug`` the per-sport order from ``venue_sports`` applies
    instead of the global one.
    """
    stmt = select(Venue)

    if query:
        stmt = stmt.where(
            or_(
                Venue.name.icontains(query, autoescape=True),
                Venue.mtr_station.icontains(query, autoescape=True),
                Venue.address.icontains(query, autoescape=True),
            )
        )
    if station:
        stmt = stmt.where(Venue.mtr_station.icontains(station, autoescape=True))
    if max_walking_distance is not None:
        stmt = stmt.where(Venue.walking_distance <= max_walking_distance)

    if sport_slug:
        if not has_sports:
            return []
        stmt = (
            stmt.join(VenueSport, VenueSport.venue_id == Venue.id)
            .join(Sport, Sport.id == VenueSport.sport_id)
            .where(Sport.slug == sport_slug)
            .order_by(VenueSport.sort_order.is_(None), VenueSport.sort_order, Venue.name, Venue.id)
        )
    else:
        stmt = _display_order(stmt)

    result = await db.execute(stmt)
    return list(result.scalars().unique().all())


async def get_venue(db: AsyncSession, venue_id: int) -> Venue:
    venue = await db.get(Venue, venue_id)
    if venue is None:
        raise VenueNotFound(venue_id)
    return venue


async def load_sport_data(db: AsyncSession, venue_ids: list[int]) -> dict[int, list[SportLinkOut]]:
    """Sport links for the given venues, keyed by venue id, each list in per-venue order."""
    if not venue_ids:
        return {}

    result = await db.execute(
        select(VenueSport.venue_id, VenueSport.sort_order, Sport.id, Sport.name, Sport.name_zh, Sport.slug)
        .join(Sport, Sport.id == VenueSport.sport_id)
        .where(VenueSport.venue_id.in_(venue_ids))
        .order_by(VenueSport.venue_id, VenueSport.sort_order.is_(None), VenueSport.sort_order, Sport.name)
    )
    by_venue: dict[int, list[SportLinkOut]] = {vid: [] for vid in venue_ids}
    for venue_id, sort_order, sport_id, name, name_zh, slug in result.all():
        by_venue[venue_id].append(
            SportLinkOut(sport_id=sport_id, name=name, name_zh=name_zh, slug=slug, sort_order=sort_order)
        )
    return by_venue


async def list_stations(db: AsyncSession) -> list[str]:
    """Distinct non-empty transit station names, sorted."""
    result = await db.execute(
        select(Venue.mtr_station)
        .where(Venue.mtr_station.is_not(None), Venue.mtr_station != "")
        .distinct()
        .order_by(Venue.mtr_station)
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


async def prepare_venue_values(body: VenueIn, image_host: ImageHost) -> dict:
    """Turn a request payload into column values.

    Only keys present in the request survive. Inline images are uploaded,
    the admin password is hashed (empty clears it).
    """
    values = body.model_dump(exclude_unset=True, exclude={"sport_data"})

    if values.get("images") is not None:
        values["images"] = await image_host.process_images(values["images"])
    if "org_icon" in values:
        values["org_icon"] = await image_host.process_org_icon(values["org_icon"])
    if "admin_password" in values:
        password = values["admin_password"]
        values["admin_password"] = await run_in_threadpool(hash_password, password) if password else None
    if "membership_enabled" in values and values["membership_enabled"] is None:
        values["membership_enabled"] = False

    return values


async def replace_sport_links(db: AsyncSession, venue_id: int, links: list[SportLinkIn]) -> None:
    """Delete a venue's sport links and insert ``links`` in their place.

    A link without an explicit sort_order takes its list position. Repeated
    sport ids keep the first occurrence.
    """
    await db.execute(delete(VenueSport).where(VenueSport.venue_id == venue_id))

    seen: set[int] = set()
    for position, link in enumerate(links):
        if link.sport_id in seen:
            continue
        seen.add(link.sport_id)
        sort_order = link.sort_order if link.sort_order is not None else position
        db.add(VenueSport(venue_id=venue_id, sport_id=link.sport_id, sort_order=sort_order))
    await db.flush()


async def create_venue(
    db: AsyncSession,
    values: dict,
    sport_links: list[SportLinkIn] | None,
    *,
    has_sports: bool,
) -> Venue:
    venue = Venue(**values)
    venue.images = venue.images or []
    db.add(venue)
    await db.flush()

    if has_sports and sport_links:
        await replace_sport_links(db, venue.id, sport_links)
    return venue


async def update_venue(
    db: AsyncSession,
    venue_id: int,
    values: dict,
    sport_links: list[SportLinkIn] | None,
    *,
    has_sports: bool,
) -> Venue:
    """Overwrite the given columns; an empty ``values`` with no links is a plain read."""
    venue = await get_venue(db, venue_id)

    for column, value in values.items():
        setattr(venue, column, value)
    if values:
        await db.flush()

    if has_sports and sport_links is not None:
        await replace_sport_links(db, venue_id, sport_links)
    return venue


async def delete_venue(db: AsyncSession, venue_id: int, *, has_sports: bool) -> None:
    if has_sports:
        await db.execute(delete(VenueSport).where(VenueSport.venue_id == venue_id))
    result = await db.execute(
        delete(Venue).where(Venue.id == venue_id).execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise VenueNotFound(venue_id)


async def reorder_venues(
    db: AsyncSession,
    ordered_ids: list[int],
    sport_id: int | None = None,
    *,
    has_sports: bool,
) -> None:
    """Give each id its list position as sort_order, globally or within one sport.

    Raises VenueNotFound at the first id with nothing to update; the caller's
    transaction must then be rolled back so no position is applied.
    """
    if sport_id is not None and not has_sports:
        raise SportsUnavailable()

    for position, venue_id in enumerate(ordered_ids):
        if sport_id is None:
            stmt = update(Venue).where(Venue.id == venue_id).values(sort_order=position)
        else:
            stmt = (
                update(VenueSport)
                .where(VenueSport.venue_id == venue_id, VenueSport.sport_id == sport_id)
                .values(sort_order=position)
            )
        result = await db.execute(stmt.execution_options(synchronize_session=False))
        if result.rowcount == 0:
            raise VenueNotFound(venue_id)


# ---------------------------------------------------------------------------
# Admin access
# ---------------------------------------------------------------------------


def _matching_ids(password: str, rows: list) -> list[int]:
    return [venue_id for venue_id, stored in rows if check_admin_password(password, stored)]


async def find_venue_ids_for_password(db: AsyncSession, password: str) -> list[int]:
    """Ids of every venue whose admin password matches. Several venues may share one."""
    result = await db.execute(
        select(Venue.id, Venue.admin_password)
        .where(Venue.admin_password.is_not(None), Venue.admin_password != "")
        .order_by(Venue.id)
    )
    rows = result.all()
    # bcrypt is CPU-bound; keep it off the event loop
    return await run_in_threadpool(_matching_ids, password, rows)


async def all_venue_ids(db: AsyncSession) -> list[int]:
    result = await db.execute(select(Venue.id).order_by(Venue.id))
    return list(result.scalars().all())
