"""
Water Polo Practice Planner API.

One in-process coaching session behind the /v1 planner router, plus a
health probe.
"""
import logging
import time
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.logging import setup_logging
from core.exceptions import APIException
from routers import planner

setup_logging()
logger = logging.getLogger(__name__)


LOCAL_FRONTEND_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def _cors_origins() -> List[str]:
    """Wildcard in DEBUG, CORS_ORIGINS when set, the local dev server otherwise."""
    if settings.DEBUG:
        return ["*"]
    if settings.CORS_ORIGINS:
        return [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    return list(LOCAL_FRONTEND_ORIGINS)


def _request_fields(request: Request) -> Dict[str, Any]:
    return {"method": request.method, "path": request.url.path}


app = FastAPI(
    title="Water Polo Practice Planner API",
    description="Roster assessments and AI-generated practice, conditioning and recovery plans",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Time every request. Generation calls log at INFO, the rest at DEBUG."""
    started = time.monotonic()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            f"{request.method} {request.url.path} raised",
            extra={"extra_fields": _request_fields(request)},
        )
        raise

    elapsed_ms = round((time.monotonic() - started) * 1000, 2)
    fields = _request_fields(request)
    fields.update(status_code=response.status_code, process_time_ms=elapsed_ms)
    level = logging.INFO if "/planner/generate/" in request.url.path else logging.DEBUG
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {response.status_code} in {elapsed_ms}ms",
        extra={"extra_fields": fields},
    )
    response.headers["X-Process-Time-Ms"] = str(elapsed_ms)
    return response


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"extra_fields": _request_fields(request)},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error_code": "INTERNAL_ERROR"},
    )


app.include_router(planner.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}
