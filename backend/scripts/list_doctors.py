import argparse
import asyncio
import sys
from pathlib import Path

# Add the parent directory to sys.path to allow importing from healthconnect
backend_dir = Path(__file__).parent.parent
sys.path.append(str(backend_dir))

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from healthconnect.config.settings import settings
from healthconnect.db.crud.doctor import find_doctors
from healthconnect.schemas.doctor import DoctorQuery


async def main(params: DoctorQuery) -> None:
    print("Connecting to database at:", settings.database_url)
    engine = create_async_engine(settings.database_url)
    async_session = sessionmaker(engine, class_=AsyncSession)

    async with async_session() as db:
        doctors = await find_doctors(db, params)

        if not doctors:
            print("No doctors found in the database.")
        else:
            print(f"Found {len(doctors)} doctors in the database:")
            print("-" * 96)
            print(f"{'Name':<25} {'Specialty':<20} {'Region':<12} {'Rating':<7} {'Exp':<5} {'Fee':<6} ID")
            print("-" * 96)

            for d in doctors:
                print(f"{d.name:<25} {d.specialty:<20} {d.region:<12} {d.rating:<7} {d.experience:<5} {d.consultation_fee:<6} {d.id}")

    await engine.dispose()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List directory doctors")
    parser.add_argument("-q", "--search", help="specialty or name fragment")
    parser.add_argument("-r", "--region", help="region code or 'all'")
    parser.add_argument("-s", "--sort", help="rating | experience | fee-low | fee-high")
    args = parser.parse_args()
    asyncio.run(main(DoctorQuery(search_text=args.search, region=args.region, sort=args.sort)))
