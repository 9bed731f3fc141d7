"""Venue model.

A venue is one bookable court listing: where it is, how to get there, what it
costs and who to contact. Sub-structures (pricing, images, coordinates) are
stored as JSON columns and validated by the API schemas.
"""

from sqlalchemy import Boolean, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from courtfinder.models.base import Base, JSONType, TimestampMixin


class Venue(TimestampMixin, Base):
    __tablename__ = "venues"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(Text)

    # Getting there
    mtr_station: Mapped[str | None] = mapped_column(String(255))
    mtr_exit: Mapped[str | None] = mapped_column(String(50))
    walking_distance: Mapped[int | None] = mapped_column()  # minutes
    coordinates: Mapped[dict | None] = mapped_column(JSONType)  # {"lat": ..., "lng": ...}

    # Facility
    ceiling_height: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False))  # metres
    amenities: Mapped[list | None] = mapped_column(JSONType, default=list)
    images: Mapped[list | None] = mapped_column(JSONType, default=list)

    # Pricing
    starting_price: Mapped[int | None] = mapped_column()
    pricing: Mapped[dict | None] = mapped_column(JSONType)

    # Contact
    whatsapp: Mapped[str | None] = mapped_column(String(50))
    social_link: Mapped[str | None] = mapped_column(String(2048))
    org_icon: Mapped[str | None] = mapped_column(String(2048))

    # Display ordering; NULL sorts last
    sort_order: Mapped[int | None] = mapped_column()

    # Per-venue admin secret (hashed). Several venues may share one.
    admin_password: Mapped[str | None] = mapped_column(String(255))

    # Membership
    membership_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    membership_description: Mapped[str | None] = mapped_column(Text)
    membership_join_link: Mapped[str | None] = mapped_column(String(2048))

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_venues_sort_order_name", "sort_order", "name"),
        # Ids are never reused, even after the newest venue is deleted
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Venue {self.id} {self.name!r}>"
