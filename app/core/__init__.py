from .errors import (
    ArtifactNotFound,
    ExtractionFailed,
    GatewayError,
    InternalError,
    InvalidIdentifier,
    InvalidType,
    RouteNotFound,
    StreamError,
)
from .validation import RequestValidator, ValidationResult

__all__ = [
    "ArtifactNotFound",
    "ExtractionFailed",
    "GatewayError",
    "InternalError",
    "InvalidIdentifier",
    "InvalidType",
    "RequestValidator",
    "RouteNotFound",
    "StreamError",
    "ValidationResult",
]
