from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from stylefinder.db.base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Style(Base):
    __tablename__ = "styles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    designer: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    occasion: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    body_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    gender: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    # Absolute URL or a path relative to the serving host (e.g. "/uploads/styles/x.jpg").
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
