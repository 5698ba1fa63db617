"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import assets, crypto, dashboard, export, labels, reports, snapshots
from config import settings
from database import get_session_local, init_db
from logging_config import setup_logging
from services.label_service import seed_default_labels

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the shared default labels on startup."""
    init_db()

    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        seed_default_labels(db)
    except Exception:
        logger.warning("Default label seeding failed on startup", exc_info=True)
    finally:
        db.close()
    yield


app = FastAPI(
    title="Carteira",
    description="Personal investment portfolio with snapshot-based net worth reports",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(assets.router)
app.include_router(crypto.router)
app.include_router(dashboard.router)
app.include_router(export.router)
app.include_router(labels.categories_router)
app.include_router(labels.sectors_router)
app.include_router(labels.custodies_router)
app.include_router(reports.router)
app.include_router(snapshots.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
