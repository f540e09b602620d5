import logging

from fastapi import FastAPI, Depends, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import get_db
from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import metrics as metrics_router
from app.routers import wellness as wellness_router
from app.routers import reminders as reminders_router
from app.routers import templates as templates_router
from app.core.errors import (
    WellnessError,
    wellness_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Wellness Core API",
    description=(
        "**Wellness scoring and reminder scheduling**\n\n"
        "Turns daily mood / sleep / hydration / work logs into a bounded Wellness "
        "Score and one prioritized insight, and manages recurring reminders and "
        "template packs.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS (browser dashboard) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- {code, message, details} envelope for every error ---
app.add_exception_handler(WellnessError, wellness_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(metrics_router.router)
app.include_router(wellness_router.router)
app.include_router(reminders_router.router)
app.include_router(templates_router.router)


@app.get("/health", tags=["health"], summary="Liveness and database check")
def health(db: Session = Depends(get_db)):
    """`{"status": "ok", "db": "ok", "env": ...}`, or 503 with `db: "unreachable"`."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check: database unreachable: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "db": "unreachable", "env": settings.APP_ENV},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
