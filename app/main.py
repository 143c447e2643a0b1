from app.core.env import load_env
load_env()
# Initialize structured logging early
from app.core.logging import configure_logging
configure_logging()

import datetime
import time

from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.orm import Session

from app import models  # noqa: F401  registers every table on Base.metadata
from app.core.config import settings
from app.core.logging import get_logger
from app.db.deps import get_db
from app.middleware.logging import logging_middleware
from app.modules.courses.media_routes import router as media_router
from app.modules.courses.routes import router as courses_router

logger = get_logger(__name__)

app = FastAPI(title="Course Catalog API")
app.middleware("http")(logging_middleware)

# Record process start time for uptime reporting
_START_TIME = time.time()

api_router = APIRouter()
api_router.include_router(media_router)
api_router.include_router(courses_router)

app.include_router(api_router, prefix="/api/v1")

if settings.USE_LOCAL_STORAGE:
    app.mount(
        settings.MEDIA_BASE_URL,
        StaticFiles(directory=settings.MEDIA_STORAGE_PATH, check_dir=False),
        name="media",
    )


@app.get("/health")
async def health():
    """Simple health endpoint returning status, uptime, and timestamp."""
    uptime = time.time() - _START_TIME
    payload = {
        "status": "ok",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
    return JSONResponse(content=payload)


@app.get("/db/health")
def db_health_sa(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}


logger.info("fastapi process started")
