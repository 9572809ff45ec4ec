from enum import Enum
from pydantic import BaseModel

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

class MediaType(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"

class DownloadIntent(BaseModel):
    """Internal download intent (separated from HTTP concerns)"""
    video_id: str
    media_type: MediaType

    @property
    def url(self) -> str:
        return WATCH_URL.format(video_id=self.video_id)

    @property
    def audio_only(self) -> bool:
        return self.media_type is MediaType.AUDIO

class ExtractionOptions(BaseModel):
    """Extraction options derived from the media type"""
    format_selector: str
    quality: str
    target_format: str

class MediaMetadata(BaseModel):
    """Media metadata"""
    ext: str
    content_type: str
