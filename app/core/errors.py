from typing import Any, Dict, Optional

from app.i18n import i18n


class GatewayError(Exception):
    """Base error converted to a JSON response at the handler boundary"""

    status_code: int = 500
    message_key: str = "error.internal"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or self.message_key)

    def to_body(self, locale: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": i18n.get(self.message_key, locale=locale)}
        if self.detail:
            body["message"] = self.detail
        return body


class InvalidIdentifier(GatewayError):
    status_code = 400
    message_key = "error.invalid_id"


class InvalidType(GatewayError):
    status_code = 400
    message_key = "error.invalid_type"


class ExtractionFailed(GatewayError):
    """yt-dlp could not produce media (private, restricted, unavailable, timeout)"""
    status_code = 500
    message_key = "error.extraction_failed"


class ArtifactNotFound(GatewayError):
    status_code = 500
    message_key = "error.artifact_not_found"


class StreamError(GatewayError):
    status_code = 500
    message_key = "error.stream_failed"


class InternalError(GatewayError):
    status_code = 500
    message_key = "error.internal"


class RouteNotFound(GatewayError):
    status_code = 404
    message_key = "error.route_not_found"
