import asyncio
from typing import Any, AsyncIterator, Dict, Optional
import httpx
import yt_dlp
from yt_dlp.utils import YoutubeDLError
from fastapi import Request
from app.config.settings import config
from app.core.errors import ExtractionFailed, StreamError
from app.core.logging import log_info, log_error
from app.models.internal import DownloadIntent
from app.services.extractor import MediaExtractor, MediaPayload
from app.services.format import FormatDecision
from app.services.ytdlp import build_library_options
from app.utils.filename import build_filename

class LibraryExtractor(MediaExtractor):
    """
    In-process engine: yt-dlp resolves metadata and a direct media URL,
    the bytes are streamed live from the platform. Length is unknown up front.
    """

    name = "library"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        # Reuse client for keep-alive
        if self._client is None:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=httpx.Timeout(config.download.socket_timeout, read=None)
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def extract_info(self, url: str, ydl_opts: Dict[str, Any]) -> Dict[str, Any]:
        """Blocking metadata + format resolution, run in a worker thread"""
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            return ydl.extract_info(url, download=False)

    async def extract(self, intent: DownloadIntent, request: Request) -> MediaPayload:
        options = FormatDecision.options(intent)
        metadata = FormatDecision.get_metadata(intent)

        try:
            info = await asyncio.to_thread(self.extract_info, intent.url, build_library_options(options))
        except YoutubeDLError as e:
            log_error(request, f"yt-dlp extraction failed: {e}")
            raise ExtractionFailed(detail=str(e)) from e

        media_url = info.get("url")
        if not media_url:
            raise ExtractionFailed(detail=f"No {options.quality} format matching {options.format_selector}")

        filename = build_filename(info.get("title") or "", metadata.ext, fallback=intent.video_id)
        log_info(request, f"Resolved {info.get('format_id', 'unknown')} format for {filename}")

        upstream = await self._open(media_url, info.get("http_headers") or {}, request)

        return MediaPayload(
            chunks=self._iterate(upstream),
            filename=filename,
            content_type=metadata.content_type,
            cleanup=upstream.aclose,
        )

    async def _open(self, url: str, headers: Dict[str, str], request: Request) -> httpx.Response:
        """Open the upstream stream; failures here still become a JSON 500"""
        try:
            upstream_request = self.client.build_request("GET", url, headers=headers)
            upstream = await self.client.send(upstream_request, stream=True)
        except httpx.HTTPError as e:
            log_error(request, f"Upstream connection failed: {e!r}")
            raise StreamError(detail=str(e)) from e

        if upstream.status_code >= 400:
            await upstream.aclose()
            log_error(request, f"Upstream responded {upstream.status_code}")
            raise StreamError(detail=f"Upstream responded with status {upstream.status_code}")
        return upstream

    async def _iterate(self, upstream: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in upstream.aiter_bytes(config.download.chunk_size):
                yield chunk
        finally:
            await upstream.aclose()
