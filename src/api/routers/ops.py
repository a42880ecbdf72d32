import os
import logging

from fastapi import APIRouter, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api import state
from storage import db

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint for container orchestration."""
    health = {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "storage": "postgres" if state.USE_DATABASE else "in-memory",
    }

    try:
        db_health = await db.health_check()
        health["database"] = db_health
        if db_health["status"] not in {"healthy", "disabled"}:
            health["status"] = "degraded"
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        health["status"] = "degraded"
        health["database"] = {"status": "error", "error": str(e)}

    return health


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
