from .internal import DownloadIntent, ExtractionOptions, MediaMetadata, MediaType
from .response import ErrorResponse, HealthResponse, UsageResponse

__all__ = [
    "DownloadIntent",
    "ErrorResponse",
    "ExtractionOptions",
    "HealthResponse",
    "MediaMetadata",
    "MediaType",
    "UsageResponse",
]
