# File: civic_reports\db\session.py
# Project: civic-reports-backend
# Auto-added for reference

import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from civic_reports.core.errors import UpstreamError
from civic_reports.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Store handle: one engine plus its session factory.

    Built once at startup and handed to request handlers through ``get_db``.
    """

    def __init__(self, url: str):
        self.url = url
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # every session must see the same in-memory database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_pre_ping": True,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_recycle": 3600,
                "pool_timeout": 30,
            }
        self.engine = create_engine(url, **kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def connect(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.scalar(text("select 1"))
        except SQLAlchemyError as e:
            raise UpstreamError(f"Cannot reach database: {e}") from e
        logger.info("Connected to %s", self.engine.url.render_as_string(hide_password=True))

    def create_all(self) -> None:
        # models register their tables on Base.metadata at import
        from civic_reports.models import community, report  # noqa: F401
        Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
