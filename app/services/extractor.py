from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import AsyncIterator, Awaitable, Callable, Optional

from fastapi import Request

from app.config.settings import config
from app.models.internal import DownloadIntent


@dataclass
class MediaPayload:
    """Everything the relay needs: a lazy byte source plus its headers"""
    chunks: AsyncIterator[bytes]
    filename: str
    content_type: str
    content_length: Optional[int] = None
    cleanup: Optional[Callable[[], Awaitable[None]]] = None


class MediaExtractor(ABC):
    """Resolve a validated intent into downloadable media bytes"""

    name: str = "abstract"

    @abstractmethod
    async def extract(self, intent: DownloadIntent, request: Request) -> MediaPayload:
        """
        Prepare the byte source. Anything raised here happens before
        response headers are sent and becomes a JSON error.
        """

    async def close(self) -> None:
        """Release engine-wide resources on shutdown"""


@lru_cache(maxsize=None)
def create_extractor(engine: str) -> MediaExtractor:
    # Imported lazily so that only the selected engine's stack is loaded
    if engine == "library":
        from app.services.stream import LibraryExtractor
        return LibraryExtractor()
    if engine == "subprocess":
        from app.services.download import SubprocessExtractor
        return SubprocessExtractor()
    raise ValueError(f"Unknown extraction engine: {engine}")


def get_extractor() -> MediaExtractor:
    """FastAPI dependency returning the engine selected at deployment time"""
    return create_extractor(config.engine)
