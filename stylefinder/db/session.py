from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from stylefinder.core.config import settings


def _connect_args(database_url: str) -> dict:
    # Sync dependencies run on the threadpool, not the thread that opened the connection.
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    future=True,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url),
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def get_db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
