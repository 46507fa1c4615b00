from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

# Async engine and session factory
async def get_engine(database_url: str, **engine_kwargs):
    return create_async_engine(database_url, **engine_kwargs)

async def get_session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autocommit=False, autoflush=False
    )

async def create_tables(engine) -> None:
    """Create every mapped table; used for local SQLite runs and tests."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
