# app/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient

from app.core.config import Settings, get_settings
from app.core.database import connect, ensure_indexes, get_database
from app.core.errors import register_exception_handlers
from app.core.logger import get_logger, set_level
from app.routes.marks_routes import router as marks_router
from app.routes.root import router as root_router
from app.routes.student_routes import router as student_router

logger = get_logger()


def create_app(settings: Optional[Settings] = None, client: Optional[MongoClient] = None) -> FastAPI:
    """
    Build the application. `client` lets callers hand in an already
    constructed MongoClient (tests use mongomock); otherwise one is opened
    from settings at startup and closed at shutdown.
    """
    settings = settings or get_settings()
    set_level(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        mongo = client if client is not None else connect(settings)
        app.state.db = get_database(mongo, settings)
        ensure_indexes(app.state.db)
        logger.info("Storage ready (db=%s)", settings.MONGO_DB_NAME)
        try:
            yield
        finally:
            mongo.close()
            logger.info("Storage connection closed")

    app = FastAPI(
        title="Student Records",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    register_exception_handlers(app)

    # Browser UI + health
    app.include_router(root_router)

    app.include_router(student_router, prefix=settings.API_PREFIX)
    app.include_router(marks_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
