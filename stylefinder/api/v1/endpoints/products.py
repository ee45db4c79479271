from __future__ import annotations

import logging
from urllib.parse import urljoin, urlsplit

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from stylefinder.api.deps import get_current_user_id, get_db, get_product_search_pipeline
from stylefinder.core.context import style_id_ctx
from stylefinder.services.style_catalog import get_style
from stylefinder.schemas.product import ProductSearchRequest, ProductSearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_image_url(image: str, base_url: str) -> str:
    if image.startswith("http://") or image.startswith("https://"):
        return image
    if image.startswith("//"):
        # Protocol-relative: keep the host, borrow the request's scheme.
        return f"{urlsplit(base_url).scheme or 'https'}:{image}"
    return urljoin(base_url.rstrip("/") + "/", image.lstrip("/"))


@router.post(
    "/search-products",
    response_model=ProductSearchResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def search_products(
    payload: ProductSearchRequest,
    request: Request,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ProductSearchResponse:
    style_id = (payload.style_id or "").strip()
    if not style_id:
        raise HTTPException(status_code=400, detail="styleId is required")

    style = get_style(db, style_id)
    if style is None:
        raise HTTPException(status_code=404, detail="Style not found")

    token = style_id_ctx.set(style.id)
    try:
        # Resolved after the style lookup so a bad styleId never trips the key check.
        pipeline = get_product_search_pipeline()
        image_url = resolve_image_url(style.image, str(request.base_url))
        logger.info("product_search_start user_id=%s image_url=%s", user_id, image_url)
        return await pipeline.run(image_url)
    finally:
        style_id_ctx.reset(token)
