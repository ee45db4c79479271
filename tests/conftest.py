from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from stylefinder.core.config import settings
from stylefinder.db.base import Base


@pytest.fixture()
def db_session(tmp_path: Path):
    db_path = tmp_path / "test.db"
    # The TestClient runs the app in a worker thread.
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    Base.metadata.create_all(bind=engine)

    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def sample_image() -> Image.Image:
    return Image.new("RGB", (800, 1000), color=(170, 160, 150))


@pytest.fixture()
def sample_image_bytes(sample_image: Image.Image) -> bytes:
    out = BytesIO()
    sample_image.save(out, "JPEG")
    return out.getvalue()


@pytest.fixture(autouse=True)
def configure_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "app_env", "development")
    monkeypatch.setattr(settings, "roboflow_api_key", "rf-test-key")
    monkeypatch.setattr(settings, "serpapi_api_key", "serp-test-key")
    monkeypatch.setattr(settings, "secret_key", "test-secret")
