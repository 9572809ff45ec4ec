from fastapi import APIRouter, Depends, Request
from app.core.errors import ExtractionFailed, GatewayError
from app.core.logging import log_info, log_error
from app.core.validation import RequestValidator
from app.i18n import i18n
from app.models.response import ErrorResponse
from app.services.extractor import MediaExtractor, get_extractor
from app.services.relay import relay

router = APIRouter()

@router.get(
    "/{video_id}/type={media_type}",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def download_media(
    request: Request,
    video_id: str,
    media_type: str,
    extractor: MediaExtractor = Depends(get_extractor),
):
    """Download audio (mp3) or video (mp4) as an attachment"""

    intent = RequestValidator.to_intent(video_id, media_type)
    log_info(request, i18n.get("log.starting_download", media_type=intent.media_type.value, video_id=intent.video_id, engine=extractor.name))

    try:
        payload = await extractor.extract(intent, request)
    except GatewayError:
        raise
    except Exception as e:
        log_error(request, f"Download error: {str(e)}")
        raise ExtractionFailed(detail=str(e)) from e

    return relay(payload, request)
