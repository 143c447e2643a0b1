# app/db/session.py
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across FastAPI's threadpool
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

logger.info("database engine created", backend=engine.url.get_backend_name())

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
