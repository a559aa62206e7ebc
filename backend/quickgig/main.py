from contextlib import asynccontextmanager
import logging
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from sqlalchemy import text

from . import database
from .api import admin as admin_api
from .api import application as application_api
from .api import auth as auth_api
from .api import job as job_api
from .config import FRONTEND_DIST_DIR, HOST, LOG_LEVEL, PORT
from .utils.error_handlers import register_exception_handlers

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A store that can't be initialized stops startup.
    database.init_db()
    logger.info("Database ready at %s", database.engine.url.render_as_string(hide_password=True))
    yield


def include_routers(app: FastAPI) -> None:
    app.include_router(auth_api.router)
    app.include_router(job_api.router)
    app.include_router(application_api.router)
    app.include_router(admin_api.router)


def mount_frontend(app: FastAPI, dist_dir: str) -> bool:
    """
    Serve a built single-page frontend from `dist_dir`.

    Existing files are returned as-is; any other non-API path gets index.html so
    client-side routing works. Must run after the API routers are included.
    """
    dist = Path(dist_dir).resolve()
    index = dist / "index.html"
    if not index.is_file():
        logger.warning("FRONTEND_DIST_DIR %s has no index.html; frontend not served", dist_dir)
        return False

    @app.get("/{full_path:path}", include_in_schema=False)
    def frontend(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found")
        candidate = (dist / full_path).resolve()
        if full_path and candidate.is_file() and dist in candidate.parents:
            return FileResponse(candidate)
        return FileResponse(index)

    logger.info("Serving frontend from %s", dist)
    return True


app = FastAPI(title="QuickGig", lifespan=lifespan)

register_exception_handlers(app)
include_routers(app)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "Backend running",
        "service": "QuickGig"
    }


@app.get("/db/health")
def db_health():
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"DB connection failed: {e}",
        )

    return {"status": "ok"}


_default_origins = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]
_extra_origins = [
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=[*_default_origins, *_extra_origins],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Registered last so the catch-all never shadows an API route.
if FRONTEND_DIST_DIR:
    mount_frontend(app, FRONTEND_DIST_DIR)


def run() -> None:
    """Entry point for the `quickgig-server` script."""
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
