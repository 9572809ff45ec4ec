import asyncio
import os
from typing import AsyncIterator, Optional
import aiofiles
from fastapi import Request
from app.config.settings import config
from app.core.errors import ArtifactNotFound, ExtractionFailed
from app.core.logging import log_info, log_error, log_warning
from app.models.internal import DownloadIntent
from app.services.extractor import MediaExtractor, MediaPayload
from app.services.format import FormatDecision
from app.services.ytdlp import YTDLPCommandBuilder, SubprocessExecutor
from app.utils.filename import build_filename
from app.utils.workspace import Workspace, ensure_dir

STDERR_MAX_LINES = 50

class SubprocessExtractor(MediaExtractor):
    """
    Download to a temp file with the yt-dlp binary, then stream the file.
    Reliable for merges and mp3 conversion, and the only engine that knows
    Content-Length up front.
    """

    name = "subprocess"

    def __init__(self, temp_dir: Optional[str] = None):
        self.temp_dir = temp_dir or config.download.temp_dir

    async def fetch_title(self, intent: DownloadIntent, request: Request) -> str:
        """Resolve the title, falling back to the identifier on any failure"""
        cmd = YTDLPCommandBuilder.build_title_command(intent.url)
        try:
            result = await SubprocessExecutor.run(cmd, timeout=config.download.title_timeout_seconds)
        except (asyncio.TimeoutError, OSError) as e:
            log_warning(request, f"Title lookup failed: {e!r}")
            return intent.video_id

        title = result.stdout.decode(errors="replace").strip().splitlines()
        if result.returncode != 0 or not title:
            log_warning(request, f"Title lookup exited with {result.returncode}")
            return intent.video_id
        return title[0]

    async def extract(self, intent: DownloadIntent, request: Request) -> MediaPayload:
        metadata = FormatDecision.get_metadata(intent)
        title = await self.fetch_title(intent, request)
        filename = build_filename(title, metadata.ext, fallback=intent.video_id, strict=True)
        log_info(request, f"Filename resolved: {filename}")

        workspace = Workspace(ensure_dir(self.temp_dir), intent.video_id).create()
        try:
            artifact = await self._download(intent, workspace, request)
            file_size = os.path.getsize(artifact)
        except BaseException:
            removed = workspace.purge()
            if removed:
                log_info(request, f"Removed {removed} partial file(s) for {intent.video_id}")
            workspace.remove()
            raise

        log_info(request, f"Download finished. Streaming {file_size / 1024 / 1024:.1f} MB")

        async def cleanup() -> None:
            workspace.remove()

        return MediaPayload(
            chunks=self._read(artifact),
            filename=filename,
            content_type=metadata.content_type,
            content_length=file_size,
            cleanup=cleanup,
        )

    async def _download(self, intent: DownloadIntent, workspace: Workspace, request: Request) -> str:
        """Run yt-dlp into the workspace and return the artifact path"""
        output_template = os.path.join(workspace.path, f"{intent.video_id}.%(ext)s")
        cmd = YTDLPCommandBuilder.build_download_command(
            intent.url,
            FormatDecision.decide(intent),
            intent.audio_only,
            output_template
        )
        timeout = config.download.timeout_seconds
        log_info(request, f"Starting download to temp: {output_template}")

        try:
            result = await SubprocessExecutor.run(cmd, timeout=timeout)
        except asyncio.TimeoutError:
            log_error(request, f"yt-dlp timed out after {timeout}s")
            raise ExtractionFailed(detail=f"Download timed out after {timeout} seconds") from None
        except OSError as e:
            log_error(request, f"Failed to start yt-dlp: {e}")
            raise ExtractionFailed(detail=str(e)) from e

        if result.returncode != 0:
            stderr_lines = result.stderr.decode(errors="replace").strip().splitlines()
            error_summary = '\n'.join(stderr_lines[-STDERR_MAX_LINES:])
            log_error(request, f"yt-dlp exited with {result.returncode}: {error_summary}")
            raise ExtractionFailed(detail=f"yt-dlp failed: {error_summary[:200]}")

        # yt-dlp picks the final extension, so search by identifier prefix
        found_files = workspace.find()
        if not found_files:
            raise ArtifactNotFound()
        if len(found_files) > 1:
            log_warning(request, f"Multiple artifacts for {intent.video_id}, using {found_files[0]}")
        return found_files[0]

    async def _read(self, path: str) -> AsyncIterator[bytes]:
        async with aiofiles.open(path, 'rb') as f:
            while True:
                chunk = await f.read(config.download.chunk_size)
                if not chunk:
                    break
                yield chunk
