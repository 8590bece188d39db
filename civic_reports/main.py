# File: civic_reports\main.py
# Project: civic-reports-backend
# Auto-added for reference

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler

from civic_reports.core.config import Settings, cors_origins_list, settings as default_settings
from civic_reports.core.errors import register_exception_handlers
from civic_reports.core.logging_config import setup_logging
from civic_reports.core.ratelimit import limiter
from civic_reports.db.session import Database
from civic_reports.routers import reports, reports_stats, community
from civic_reports.services.geocoding import Geocoder
from civic_reports.services.storage import ImageStorage

logger = logging.getLogger(__name__)


def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    cfg = cfg or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        os.makedirs(cfg.upload_dir, exist_ok=True)
        database = Database(cfg.database_url)
        try:
            database.connect()
            if cfg.auto_create_tables:
                database.create_all()
        except Exception:
            # no store, no service
            logger.critical("Database startup failed", exc_info=True)
            database.dispose()
            raise
        app.state.database = database
        try:
            yield
        finally:
            database.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title="Civic Reports API", lifespan=lifespan)
    app.state.settings = cfg
    limiter.enabled = cfg.rate_limit_enabled
    app.state.limiter = limiter
    app.state.geocoder = Geocoder.from_settings(cfg)
    app.state.image_storage = ImageStorage(cfg)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins_list(cfg),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"ok": True}

    # stats before reports so /reports/stats/* is not taken for a report id
    app.include_router(reports_stats.router)
    app.include_router(reports.router)
    app.include_router(community.router)
    app.mount("/uploads", StaticFiles(directory=cfg.upload_dir, check_dir=False), name="uploads")
    return app


setup_logging(default_settings.log_level, default_settings.log_format)
app = create_app()
