"""Move inline base64 venue images to the image host.

Usage:
    python -m scripts.migrate_images [--dry-run]

Older rows stored photos as data URIs inside the ``images`` column. Each
one is uploaded and replaced by its hosted URL; images that fail to upload
are kept as they are so nothing is lost.
"""

import argparse
import asyncio
import logging

from sqlalchemy import select

from courtfinder.core.config import settings
from courtfinder.core.database import Database
from courtfinder.models import Venue
from courtfinder.schemas import decode_json_field
from courtfinder.services.image_host import ImageHost, is_data_uri

logger = logging.getLogger(__name__)


async def migrate_venue_images(venue: Venue, image_host: ImageHost) -> bool:
    """Rewrite one venue's images in place. Returns True if anything changed."""
    images = decode_json_field(venue.images, fallback=None)
    if not isinstance(images, list):
        return False

    migrated: list[str] = []
    changed = False
    for image in images:
        if isinstance(image, str) and is_data_uri(image):
            url = await image_host.upload(image)
            if url:
                migrated.append(url)
                changed = True
                continue
        migrated.append(image)

    if changed:
        venue.images = migrated
    return changed


async def migrate(dry_run: bool = False) -> None:
    if not settings.image_host_api_key:
        raise SystemExit("CF_IMAGE_HOST_API_KEY is not set")

    database = Database(settings)
    image_host = ImageHost(settings)
    updated = 0

    try:
        async with database.session_factory() as db:
            venues = (await db.execute(select(Venue).order_by(Venue.id))).scalars().all()
            print(f"Checking {len(venues)} venues")

            for venue in venues:
                if await migrate_venue_images(venue, image_host):
                    updated += 1
                    print(f"  [{venue.id}] {venue.name}: images migrated")

            if dry_run:
                await db.rollback()
                print(f"Dry run: {updated} venues would be updated")
            else:
                await db.commit()
                print(f"Updated {updated} venues")
    finally:
        await image_host.aclose()
        await database.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="Upload and report, but don't write rows")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    asyncio.run(migrate(dry_run=args.dry_run))


if __name__ == "__main__":
    main()
