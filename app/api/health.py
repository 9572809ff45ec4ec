from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.config.settings import config
from app.core.state import state
from app.i18n import i18n
from app.models.response import HealthResponse, UsageResponse
from app.utils.locale import get_locale

router = APIRouter()


@router.get("/", response_model=UsageResponse)
async def root(request: Request):
    """Usage description"""
    locale = get_locale(request.headers.get("accept-language"))
    return UsageResponse(
        message=i18n.get("response.message", locale=locale),
        usage={
            "audio": "/videoId/type=audio",
            "video": "/videoId/type=video",
        },
        example="/dQw4w9WgXcQ/type=audio",
        engine=config.engine,
        ytdlp_version=state.ytdlp_version,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight health check"""
    return HealthResponse(
        status=i18n.get("health.status"),
        timestamp=datetime.now(timezone.utc).isoformat(),
        engine=config.engine,
    )
