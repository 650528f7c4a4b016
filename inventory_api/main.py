"""
Inventory API

Registers devices with an optional photo and lets clients list, search,
update and delete them. Records live either in process memory or in a
relational table; photos are files in a cache directory.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from inventory_api.config import Settings
from inventory_api.errors import register_error_handlers
from inventory_api.photos import PhotoStore
from inventory_api.routers import inventory_router, pages_router, search_router
from inventory_api.store import InventoryStore, MemoryInventoryStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> InventoryStore:
    """Instantiate the configured storage backend."""
    if settings.storage == "sql":
        from inventory_api.database import build_engine
        from inventory_api.db_store import SqlInventoryStore

        return SqlInventoryStore(
            build_engine(settings),
            retry_interval=settings.db_retry_interval,
            retry_attempts=settings.db_retry_attempts,
        )
    return MemoryInventoryStore()


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[InventoryStore] = None,
    photos: Optional[PhotoStore] = None,
) -> FastAPI:
    """Create the FastAPI application wired to its storage components."""
    settings = settings or Settings.from_env()
    store = store or build_store(settings)
    photos = photos or PhotoStore(settings.cache_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup: photo directory and storage must be ready before serving
        photos.ensure_directory()
        store.startup()
        logger.info(
            f"Inventory API ready ({settings.storage} storage, "
            f"photos in {photos.directory})"
        )
        yield

    app = FastAPI(
        title="Inventory API",
        version="1.0.0",
        description="""
Register devices with a name, a description and an optional photo,
then list, search, update and delete them.
        """,
        servers=[{"url": f"http://localhost:{settings.port}"}],
        docs_url="/docs",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.photos = photos

    register_error_handlers(app)

    # Include routers
    app.include_router(inventory_router)
    app.include_router(search_router)
    if settings.storage == "memory":
        app.include_router(pages_router)

    return app
