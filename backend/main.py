# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from config import Settings, settings as default_settings
from database import SessionLocal, init_db
from populate_db import seed_database
from storage import DatabaseStorage, ProductStorage
from utils.errors import register_exception_handlers

# Routers
from routes.products import router as products_router
from routes.stats import router as stats_router
from routes.logs import router as logs_router

logger = logging.getLogger(__name__)


def create_app(storage: Optional[ProductStorage] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around an explicit storage handle.

    Without one, the default SQLAlchemy database is initialised and used.
    """
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if storage is None:
        init_db()
        storage = DatabaseStorage(SessionLocal, log_retention=settings.AUDIT_LOG_RETENTION)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting with {type(app.state.storage).__name__}")
        if settings.SEED_ON_STARTUP:
            # Another worker may be seeding the same table; keep serving either way
            try:
                seed_database(app.state.storage)
            except Exception:
                logger.exception("Seeding the database failed")
        yield

    app = FastAPI(title="Stockify Inventory API", version="1.0.0", lifespan=lifespan)
    app.state.storage = storage

    # CORS Configuration
    origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173"
    ]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(products_router)
    app.include_router(stats_router)
    app.include_router(logs_router)

    @app.get("/")
    def read_root():
        return {"message": "Stockify Inventory API is running"}

    return app


app = create_app()
