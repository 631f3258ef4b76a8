import datetime

from fastapi import APIRouter

SERVICE_NAME = "Top Thought Blog API"
SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }
