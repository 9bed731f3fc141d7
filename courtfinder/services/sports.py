"""Sport taxonomy persistence."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from courtfinder.models import Sport, VenueSport
from courtfinder.services.slug import sport_slug


class SportNotFound(Exception):
    def __init__(self, sport_id: int):
        self.sport_id = sport_id
        super().__init__(f"Sport {sport_id} not found")


def clean_names(name: str | None, name_zh: str | None) -> tuple[str, str | None]:
    """Strip both names; an empty Chinese name is stored as NULL."""
    return (name or "").strip(), (name_zh or "").strip() or None


async def list_sports(db: AsyncSession) -> list[Sport]:
    result = await db.execute(select(Sport).order_by(Sport.name, Sport.id))
    return list(result.scalars().all())


async def create_sport(db: AsyncSession, name: str, name_zh: str | None) -> Sport:
    sport = Sport(name=name, name_zh=name_zh, slug=sport_slug(name))
    db.add(sport)
    await db.flush()
    return sport


async def update_sport(db: AsyncSession, sport_id: int, name: str, name_zh: str | None) -> Sport:
    sport = await db.get(Sport, sport_id)
    if sport is None:
        raise SportNotFound(sport_id)

    sport.name = name
    sport.name_zh = name_zh
    sport.slug = sport_slug(name)
    await db.flush()
    return sport


async def delete_sport(db: AsyncSession, sport_id: int) -> None:
    """Remove the sport's venue links, then the sport. Venues are left untouched."""
    await db.execute(delete(VenueSport).where(VenueSport.sport_id == sport_id))
    result = await db.execute(
        delete(Sport).where(Sport.id == sport_id).execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise SportNotFound(sport_id)
