from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from snipers.api.deps import get_app_settings
from snipers.core.config import Settings

router = APIRouter()


@router.get("/health", summary="Health check")
def health_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "app": settings.app_name,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
