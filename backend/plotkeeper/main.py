import json
import logging
import time
from typing import Any
from uuid import uuid4

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy import text
from sqlalchemy.orm import Session

from plotkeeper import __version__
from plotkeeper.config import get_settings
from plotkeeper.database import get_db
from plotkeeper.routers import (
    dashboard_router, plot_categories_router, plots_router,
    row_categories_router, row_fields_router, rows_router,
)
from plotkeeper.schemas import HealthResponse
from plotkeeper.services import InvalidFieldValue

settings = get_settings()
logger = logging.getLogger("plotkeeper.api")
logging.basicConfig(level=settings.log_level.upper())

limiter = Limiter(key_func=get_remote_address)

app = FastAPI(
    title="Plotkeeper API",
    version=__version__,
    description="Plots, planting rows, row categories and custom row fields.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _json(data: dict[str, Any]) -> str:
    return json.dumps(data, default=str)


@app.exception_handler(InvalidFieldValue)
async def invalid_field_value_handler(request: Request, exc: InvalidFieldValue):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    req_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = req_id

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = req_id
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response
    finally:
        payload = {
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            "status": status_code,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        }
        logger.info(_json(payload))


app.include_router(plot_categories_router)
app.include_router(row_categories_router)
app.include_router(plots_router)
app.include_router(row_fields_router)
app.include_router(rows_router)
app.include_router(dashboard_router)

Instrumentator().instrument(app).expose(app, include_in_schema=False)


@app.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database health check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=HealthResponse(status="degraded", db="error").model_dump(),
        )
    return HealthResponse(status="healthy", db="ok")


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": "Plotkeeper API",
        "version": __version__,
        "docs": "/docs",
        "resources": ["/plots", "/plot-categories", "/rows", "/row-categories", "/row-fields", "/dashboard"],
    }
