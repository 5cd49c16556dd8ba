"""Health check route"""

from fastapi import APIRouter
import logging

from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("nutritrack.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
