import asyncio
from typing import AsyncIterator, Dict
from fastapi import Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from app.core.logging import log_info, log_error, log_warning
from app.services.extractor import MediaPayload


def build_headers(payload: MediaPayload) -> Dict[str, str]:
    """Response headers, Content-Length first when the size is known"""
    headers: Dict[str, str] = {}
    if payload.content_length is not None:
        headers['Content-Length'] = str(payload.content_length)
    headers['Content-Type'] = payload.content_type
    headers['Content-Disposition'] = f'attachment; filename="{payload.filename}"'
    headers['X-Content-Type-Options'] = 'nosniff'
    headers['Cache-Control'] = 'no-cache'
    return headers


def relay(payload: MediaPayload, request: Request) -> StreamingResponse:
    """
    Copy the payload to the response.

    Headers are flushed with the first chunk, so a source failure past that
    point can only be logged; re-raising makes the server abort the
    connection and the client sees a truncated download.
    """

    async def run_cleanup() -> None:
        if payload.cleanup is None:
            return
        try:
            await payload.cleanup()
        except Exception as e:
            log_error(request, f"Cleanup failed: {e!r}")

    async def generate() -> AsyncIterator[bytes]:
        sent = 0
        try:
            async for chunk in payload.chunks:
                sent += len(chunk)
                yield chunk
        except asyncio.CancelledError:
            log_warning(request, f"Client disconnected after {sent} bytes")
            raise
        except Exception as e:
            log_error(request, f"Stream error after {sent} bytes: {e!r}")
            raise
        else:
            log_info(request, f"Relay finished for {payload.filename} ({sent} bytes)")
        finally:
            aclose = getattr(payload.chunks, "aclose", None)
            if aclose is not None:
                await aclose()
            await run_cleanup()

    return StreamingResponse(
        generate(),
        media_type=payload.content_type,
        headers=build_headers(payload),
        background=BackgroundTask(run_cleanup),
    )
