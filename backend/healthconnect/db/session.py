from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from typing import AsyncGenerator, Optional
from fastapi import Request
from contextlib import asynccontextmanager
import logging

logger = logging.getLogger(__name__)

# Session factory shared with code that runs outside a request (websocket
# query controllers, scripts)
_global_session_factory: Optional[sessionmaker] = None


def set_global_session_factory(factory) -> None:
    """Sets the globally accessible session factory. Called once at startup."""
    global _global_session_factory
    _global_session_factory = factory
    logger.info("Global SQLAlchemy session factory has been set.")


def clear_global_session_factory() -> None:
    global _global_session_factory
    _global_session_factory = None


# Session dependency for FastAPI routes
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the factory stored on app state during lifespan."""
    async_session = request.app.state.session_factory

    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def store_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a DB session for work that is not bound to a request, using the
    globally set factory.
    """
    if _global_session_factory is None:
        logger.error("Global session factory accessed before being set.")
        raise RuntimeError("Database session factory not initialized globally.")

    async with _global_session_factory() as session:
        try:
            yield session
        except Exception:
            logger.exception("Error occurred within store_session context")
            raise
