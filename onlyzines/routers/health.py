from datetime import datetime, timezone

from fastapi import APIRouter

from onlyzines.core.config import get_settings


router = APIRouter()


@router.get("/health", tags=["Health"])
def read_health() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
