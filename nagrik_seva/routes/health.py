"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from nagrik_seva.core.settings import settings
from nagrik_seva.routes.deps import get_store
from nagrik_seva.services.issue_store import IssueStore


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(store: IssueStore = Depends(get_store)):
    """
    Basic health check endpoint.
    Returns 200 if service is running, with current record counts.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "store": store.counts(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
