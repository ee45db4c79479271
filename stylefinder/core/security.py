from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from .config import settings


def create_access_token(subject: str) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {"sub": subject, "exp": exp}
    return jwt.encode(payload, settings.secret_key, algorithm="HS256")


def decode_access_token(token: str) -> str:
    payload = jwt.decode(token, settings.secret_key, algorithms=["HS256"])
    sub = payload.get("sub")
    if not isinstance(sub, str):
        raise ValueError("Invalid token subject")
    return sub
