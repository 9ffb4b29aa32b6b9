"""Local cache initialization script.

Creates the cache table and seeds every collection (and the document store,
when one is configured) with the initial portal data.
"""
import asyncio
from portal.database import init_db, AsyncSessionLocal
from portal.services.seed_data import seed_all
from portal.stores import ALL_COLLECTIONS


async def init_database():
    """Create all tables and seed initial data."""
    print("Creating local cache tables...")
    await init_db()
    print("Tables created successfully!")

    async with AsyncSessionLocal() as db:
        await seed_all(db)
    print(f"Seeded collections: {', '.join(spec.name for spec in ALL_COLLECTIONS)}")

    print("Local cache initialization complete!")


if __name__ == "__main__":
    asyncio.run(init_database())
