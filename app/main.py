"""
Plantly Care API - Main application entry point.

Plant collection, watering schedules and watering reminders.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import Database
from app.core.dependencies import build_collection_store
from app.core.middleware import MaxBodySizeMiddleware
from app.plants.service import PlantCollectionStore
from app.plants.views import router as plants_router
from app.notifications.views import router as notifications_router

settings = get_settings()
API_PREFIX = "/api/v1"

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(store: Optional[PlantCollectionStore] = None) -> FastAPI:
    """
    Build the FastAPI app.

    With no store, the lifespan connects to MongoDB and builds one from
    settings; tests pass a store wired to in-memory collaborators.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown events."""
        # Startup
        owns_database = store is None
        if owns_database:
            await Database.connect()
            app.state.store = build_collection_store(settings)
            await app.state.store.load()
        else:
            app.state.store = store
        yield
        # Shutdown: let queued reminder / save work finish first
        await app.state.store.executor.drain()
        if owns_database:
            await Database.disconnect()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Plantly Care API

Keeps track of your plants and reminds you to water them.

### Features

- 🌱 **Plant Collection**: Add, edit and remove plants with their care details
- 💧 **Watering Schedule**: Next watering date from each plant's watering frequency
- 🔔 **Reminders**: Day-before, day-of and overdue reminders at times you choose
        """,
        lifespan=lifespan,
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(MaxBodySizeMiddleware)

    for router in (plants_router, notifications_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        current = getattr(app.state, "store", None)
        return {
            "status": "healthy",
            "database": "connected" if Database.client else "disconnected",
            "plants": len(current.list_plants()) if current else 0,
            "pending_tasks": current.executor.pending if current else 0,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
