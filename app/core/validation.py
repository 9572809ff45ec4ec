import re
from enum import Enum, auto

from app.core.errors import GatewayError, InvalidIdentifier, InvalidType
from app.models.internal import DownloadIntent, MediaType

VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")
MEDIA_TYPES = frozenset(m.value for m in MediaType)


class ValidationResult(Enum):
    """Request validation result without throwing exceptions"""
    OK = auto()
    INVALID_IDENTIFIER = auto()
    INVALID_TYPE = auto()

    def to_error(self) -> GatewayError:
        if self is ValidationResult.INVALID_IDENTIFIER:
            return InvalidIdentifier()
        if self is ValidationResult.INVALID_TYPE:
            return InvalidType()
        raise ValueError("OK has no error")


class RequestValidator:
    """
    Validate the path parameters of a download request.
    Pure shape checks: no network or filesystem access.
    """

    @staticmethod
    def validate_id(video_id: str) -> bool:
        return VIDEO_ID_PATTERN.fullmatch(video_id) is not None

    @staticmethod
    def validate_type(media_type: str) -> bool:
        return media_type in MEDIA_TYPES

    @staticmethod
    def validate(video_id: str, media_type: str) -> ValidationResult:
        """Identifier is checked before the type"""
        if not RequestValidator.validate_id(video_id):
            return ValidationResult.INVALID_IDENTIFIER
        if not RequestValidator.validate_type(media_type):
            return ValidationResult.INVALID_TYPE
        return ValidationResult.OK

    @staticmethod
    def to_intent(video_id: str, media_type: str) -> DownloadIntent:
        """Validate and convert, raising the matching client error"""
        result = RequestValidator.validate(video_id, media_type)
        if result is not ValidationResult.OK:
            raise result.to_error()
        return DownloadIntent(video_id=video_id, media_type=MediaType(media_type))
