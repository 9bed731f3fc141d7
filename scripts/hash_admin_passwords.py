"""Replace plaintext venue admin passwords with hashes.

Usage:
    python -m scripts.hash_admin_passwords [--dry-run]

Login keeps accepting plaintext rows until this has run. Rows that already
hold a hash are skipped, so the script is safe to re-run.
"""

import argparse
import asyncio

from sqlalchemy import select

from courtfinder.core.auth import hash_password, is_password_hash
from courtfinder.core.config import settings
from courtfinder.core.database import Database
from courtfinder.models import Venue


async def rehash(dry_run: bool = False) -> int:
    database = Database(settings)
    updated = 0

    try:
        async with database.session_factory() as db:
            result = await db.execute(
                select(Venue).where(Venue.admin_password.is_not(None), Venue.admin_password != "")
            )
            # Venues sharing a password get independently salted hashes
            for venue in result.scalars().all():
                if is_password_hash(venue.admin_password):
                    continue
                venue.admin_password = hash_password(venue.admin_password)
                updated += 1

            if dry_run:
                await db.rollback()
            else:
                await db.commit()
    finally:
        await database.dispose()

    return updated


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="Count rows without writing")
    args = parser.parse_args()

    updated = asyncio.run(rehash(dry_run=args.dry_run))
    verb = "would be" if args.dry_run else "were"
    print(f"{updated} admin passwords {verb} hashed")


if __name__ == "__main__":
    main()
