from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from stylefinder.core.config import settings
from stylefinder.core.security import decode_access_token
from stylefinder.db.session import get_db_session
from stylefinder.services.product_search import ProductSearchPipeline, build_pipeline

bearer_scheme = HTTPBearer(auto_error=False)

DEV_USER_ID = "dev-user"


def get_db() -> Session:
    yield from get_db_session()


def get_current_user_id(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if cred is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing auth token")

    token = cred.credentials
    if token == "dev" and settings.app_env == "development":
        return DEV_USER_ID

    try:
        return decode_access_token(token)
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def get_product_search_pipeline() -> ProductSearchPipeline:
    # Built per request so a missing key is reported per request, not at startup.
    return build_pipeline()
