"""Health check routes"""
from fastapi import APIRouter
import logging

from groupmatch.config.settings import settings
from groupmatch.core.dependencies import get_store
from groupmatch.database.store import EQ

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "ok", "service": "groupmatch"}


@router.get("/health/store")
async def store_health():
    """Check document store connectivity"""
    try:
        await get_store().query_by_field(
            settings.PENDING_EVENTS_COLLECTION, "created_by", EQ, "__health__"
        )
        return {"status": "ok", "store": {"backend": settings.STORE_BACKEND, "connected": True}}
    except Exception as e:
        logger.error(f"Store health check failed: {e}")
        return {
            "status": "error",
            "store": {"backend": settings.STORE_BACKEND, "connected": False, "error": str(e)},
        }
