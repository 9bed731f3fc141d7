"""Seed the database with demo sports and venues.

Run with: python -m scripts.seed
Creates all tables, then inserts the sports taxonomy and a few Kowloon
venues if the venues table is empty.
"""

import asyncio

from sqlalchemy import func, select

from courtfinder.core.auth import hash_password
from courtfinder.core.config import settings
from courtfinder.core.database import Database
from courtfinder.models import Sport, Venue, VenueSport
from courtfinder.services.slug import sport_slug

SPORTS = [
    {"name": "Pickleball", "name_zh": "匹克球"},
    {"name": "Badminton", "name_zh": "羽毛球"},
    {"name": "Table Tennis", "name_zh": "乒乓球"},
    {"name": "Basketball", "name_zh": "籃球"},
]

VENUES = [
    {
        "name": "Green Court Sports Club 綠球場體育會",
        "description": (
            "One of the most popular indoor pickleball facilities in Kwun Tong. "
            "High-quality surfaces and professional lighting suitable for competitive play."
        ),
        "mtr_station": "Kwun Tong 觀塘",
        "mtr_exit": "A1",
        "walking_distance": 3,
        "address": "Unit 1205, 12/F, Block A, Yip On Factory Building, 1 Hoi Yuen Road, Kwun Tong",
        "ceiling_height": 4.5,
        "starting_price": 150,
        "pricing": {
            "type": "text",
            "content": "Peak (Mon-Fri 6pm-10pm): $200/hour\nOff-Peak: $150/hour\nWeekend: $180/hour",
        },
        "images": ["https://picsum.photos/seed/pickle1/800/600", "https://picsum.photos/seed/pickle2/800/600"],
        "amenities": ["AC", "Showers", "Rental", "Parking"],
        "whatsapp": "+85291234567",
        "coordinates": {"lat": 22.3129, "lng": 114.2256},
        "sports": ["Pickleball", "Badminton"],
    },
    {
        "name": "Kowloon Bay Rally Hall 九龍灣對打館",
        "description": "Two full-size courts on an industrial-building rooftop, walk-ins welcome on weekdays.",
        "mtr_station": "Kowloon Bay 九龍灣",
        "mtr_exit": "B",
        "walking_distance": 8,
        "address": "Rooftop, Kai Fuk Industrial Centre, 1 Wang Tung Street, Kowloon Bay",
        "ceiling_height": 6.0,
        "starting_price": 120,
        "pricing": {"type": "image", "content": "", "imageUrl": "https://picsum.photos/seed/price2/800/600"},
        "images": ["https://picsum.photos/seed/pickle3/800/600"],
        "amenities": ["Rental", "Lockers"],
        "whatsapp": "+85298765432",
        "coordinates": {"lat": 22.3233, "lng": 114.2139},
        "sports": ["Pickleball"],
    },
    {
        "name": "San Po Kong Paddle House 新蒲崗球館",
        "description": "Compact single court with coaching sessions every evening.",
        "mtr_station": "Diamond Hill 鑽石山",
        "mtr_exit": "A2",
        "walking_distance": 10,
        "address": "8/F, Ming Pao Industrial Centre, 18 Ka Yip Street, San Po Kong",
        "ceiling_height": 4.2,
        "starting_price": 100,
        "pricing": {"type": "text", "content": "$100/hour all day"},
        "images": [],
        "amenities": ["AC"],
        "whatsapp": "+85295551234",
        "coordinates": {"lat": 22.3355, "lng": 114.1980},
        "sports": ["Pickleball", "Table Tennis"],
    },
]

DEMO_ADMIN_PASSWORD = "court-admin"


async def seed() -> None:
    database = Database(settings)
    await database.create_all()

    async with database.session_factory() as db:
        count = await db.scalar(select(func.count()).select_from(Venue))
        if count:
            print("Database already seeded - skipping.")
            await database.dispose()
            return

        sport_map: dict[str, Sport] = {}
        for data in SPORTS:
            sport = Sport(name=data["name"], name_zh=data["name_zh"], slug=sport_slug(data["name"]))
            db.add(sport)
            sport_map[data["name"]] = sport
        await db.flush()

        admin_hash = hash_password(DEMO_ADMIN_PASSWORD)
        for position, data in enumerate(VENUES):
            data = dict(data)
            sport_names = data.pop("sports")
            venue = Venue(**data, sort_order=position, admin_password=admin_hash)
            db.add(venue)
            await db.flush()
            for sport_name in sport_names:
                db.add(VenueSport(venue_id=venue.id, sport_id=sport_map[sport_name].id, sort_order=position))

        await db.commit()

    await database.dispose()

    print(f"Seeded: {len(VENUES)} venues, {len(SPORTS)} sports")
    print(f"  venue admin password: {DEMO_ADMIN_PASSWORD}")


if __name__ == "__main__":
    asyncio.run(seed())
