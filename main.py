from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.documents import reconcile_storage
from app.config import Settings, get_settings
from app.infrastructure.database import Database
from app.infrastructure.storage import DocumentStorage
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the storage directory on startup, release connections on shutdown."""

    settings: Settings = app.state.settings
    database: Database = app.state.database
    storage: DocumentStorage = app.state.storage

    database.create_all()
    storage.ensure_directory()
    if settings.reconcile_on_startup:
        with database.session() as session:
            reconcile_storage(session, storage)
    logger.info("Document portal ready, storing files in %s", storage.root)
    yield
    database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the main FastAPI application."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(title="Document Portal", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.storage = DocumentStorage(settings.base_dir, settings.storage_dir)

    # Any origin may call the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
