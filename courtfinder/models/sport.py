"""Sport taxonomy and the venue/sport association.

Sport = a tag such as Pickleball or Badminton, with an optional Chinese name.
VenueSport = a venue's membership in a sport, carrying its own display order
for sport-scoped listings.
"""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from courtfinder.models.base import Base, TimestampMixin


class Sport(TimestampMixin, Base):
    __tablename__ = "sports"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_zh: Mapped[str | None] = mapped_column(String(100))
    # Not unique: two sports may slugify to the same value
    slug: Mapped[str] = mapped_column(String(120), nullable=False, index=True)

    __mapper_args__ = {"eager_defaults": True}

    def __repr__(self) -> str:
        return f"<Sport {self.slug}>"


class VenueSport(Base):
    __tablename__ = "venue_sports"

    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id", ondelete="CASCADE"), primary_key=True)
    sport_id: Mapped[int] = mapped_column(ForeignKey("sports.id", ondelete="CASCADE"), primary_key=True)
    sort_order: Mapped[int | None] = mapped_column()

    __table_args__ = (Index("ix_venue_sports_sport_order", "sport_id", "sort_order"),)

    def __repr__(self) -> str:
        return f"<VenueSport venue={self.venue_id} sport={self.sport_id}>"
