import asyncio
import sys
from pathlib import Path

# Add the parent directory to sys.path to allow importing from healthconnect
backend_dir = Path(__file__).parent.parent
sys.path.append(str(backend_dir))

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from healthconnect.config.settings import settings
from healthconnect.db.base import create_tables
from healthconnect.db.seed import seed_doctors


async def main() -> None:
    print("Connecting to database at:", settings.database_url)
    engine = create_async_engine(settings.database_url)
    if settings.database_url.startswith("sqlite"):
        await create_tables(engine)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as db:
        added = await seed_doctors(db)

    for doctor in added:
        print(f"Added doctor: {doctor.name} ({doctor.specialty}), region: {doctor.region}, fee: {doctor.consultation_fee}")
    print(f"{len(added)} doctors added to the database.")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(main())
