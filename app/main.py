import logging
import os
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from rich.console import Console
from yt_dlp.version import __version__ as ytdlp_version
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api import health, download
from app.config.settings import config
from app.core.errors import GatewayError, InternalError, RouteNotFound
from app.core.logging import setup_logging
from app.core.state import state
from app.services.extractor import get_extractor
from app.utils.locale import get_locale
from app.utils.workspace import ensure_dir

logger = logging.getLogger(__name__)
console = Console()

app = FastAPI(
    title=config.api.title,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    request.state.request_id = uuid.uuid4().hex[:8]
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response

# Error handling
@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    locale = get_locale(request.headers.get("accept-language"))
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(locale))

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods are both "no such route"
    if exc.status_code in (404, 405):
        return await gateway_error_handler(request, RouteNotFound())
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    response = await gateway_error_handler(request, InternalError())
    # Runs outside the request-id middleware; scope state is still shared
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response

# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(download.router, tags=["Download"])

@app.on_event("startup")
async def startup_event():
    setup_logging()

    # Process-wide: inherited by every yt-dlp subprocess
    if config.ytdlp.no_update:
        os.environ.setdefault(config.ytdlp.update_env_var, "1")
    state.ytdlp_version = ytdlp_version

    console.print(f"[green]✓ Engine: {config.engine} (yt-dlp {state.ytdlp_version})[/green]")
    if config.engine == "subprocess":
        temp_dir = ensure_dir(config.download.temp_dir)
        console.print(f"[green]✓ Temp directory ready at {temp_dir}[/green]")
    console.print(f"Server is running on port {config.port}")

@app.on_event("shutdown")
async def shutdown_event():
    await get_extractor().close()
    console.print("[dim]✓ Extractor closed[/dim]")
