from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging

from healthconnect.config.constants import ALL_REGIONS, SPECIALTIES, TIME_SLOTS, Region, SortKey
from healthconnect.config.settings import settings
from healthconnect.core.errors import register_exception_handlers
from healthconnect.core.middleware import verify_token_middleware
from healthconnect.db.base import create_tables, get_engine, get_session_factory
from healthconnect.db.session import clear_global_session_factory, set_global_session_factory

# -------------------------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------------------------
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application start-up & shutdown hooks."""
    # ------------------------------------------------------------------ start‑up -----
    logger.info("Application startup …")

    engine = None
    try:
        logger.info("Initializing Database Engine...")
        engine = await get_engine(settings.database_url)
        app.state.engine = engine

        if settings.database_url.startswith("sqlite"):
            # no migrations for local SQLite files
            await create_tables(engine)
            logger.info("SQLite schema created.")

        session_factory = await get_session_factory(engine)
        app.state.session_factory = session_factory
        set_global_session_factory(session_factory)
        logger.info("DB session factory ready (globally accessible).")
    except Exception as e:
        logger.critical(f"CRITICAL ERROR DURING STARTUP INITIALIZATIONS: {e}", exc_info=True)
        if engine:
            await engine.dispose()
        raise  # stop Uvicorn from serving with a broken store

    # ------------------------------------------------ give control back
    yield

    # ------------------------------------------------ shutdown --------
    logger.info("Application shutdown …")
    clear_global_session_factory()
    try:
        await engine.dispose()
        logger.info("DB engine disposed")
    except Exception:
        logger.exception("Error disposing DB engine")

    logger.info("Shutdown complete")


# -------------------------------------------------------------------------------------
# FastAPI application instance
# -------------------------------------------------------------------------------------
app = FastAPI(title="HealthConnect", lifespan=lifespan)

# CORS -------------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(o) for o in settings.cors_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(verify_token_middleware)
register_exception_handlers(app)


# ------------------------------------------------------------------- catalogue ------
@app.get("/")
async def home():
    """Vocabulary the search, registration and booking forms offer."""
    return {
        "regions": [ALL_REGIONS] + [r.value for r in Region],
        "sort_keys": [s.value for s in SortKey],
        "specialties": SPECIALTIES,
        "time_slots": TIME_SLOTS,
    }


# ----------------------------------------------------------------- health‑check -----
@app.get("/health")
async def health_check(request: Request):
    store = "ok"
    try:
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the store")
        store = "unavailable"

    return {"status": "ok", "store": store}


# ------------------------------------------------------------------- routes ---------
from healthconnect.routes.auth.router import router as auth_router  # noqa: E402  (after app creation)
from healthconnect.routes.doctors.router import router as doctors_router  # noqa: E402
from healthconnect.routes.appointment.router import router as appointment_router  # noqa: E402

app.include_router(auth_router)
app.include_router(doctors_router)
app.include_router(appointment_router)
