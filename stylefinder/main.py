from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException

from stylefinder.api.v1.router import api_router
from stylefinder.core.config import settings
from stylefinder.core.logging import configure_logging
from stylefinder.db.base import Base
from stylefinder.db.session import engine
from stylefinder.middleware.request_context import RequestContextMiddleware
from stylefinder.services.product_search import ConfigurationError

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="StyleFinder API", version="0.1.0")
app.add_middleware(RequestContextMiddleware)
cors_origins = {
    settings.base_dashboard_url.rstrip("/"),
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}
extra_origins = [
    origin.strip().rstrip("/")
    for origin in settings.cors_extra_origins.split(",")
    if origin.strip()
]
cors_origins.update(extra_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=sorted(cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": "Invalid request body", "errors": jsonable_encoder(exc.errors())})


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("configuration_error %s", exc)
    return JSONResponse(status_code=500, content={"message": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s", request.url.path)
    return JSONResponse(status_code=500, content={"message": str(exc) or "Internal Server Error"})


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("startup_complete")


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


@app.get("/readyz")
def readyz() -> dict:
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_ok = True
    except Exception:
        db_ok = False

    return {
        "ready": db_ok,
        "db": db_ok,
        "detector_configured": bool(settings.roboflow_api_key),
        "search_configured": bool(settings.serpapi_api_key),
    }
