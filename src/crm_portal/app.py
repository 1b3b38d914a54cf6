from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.staticfiles import StaticFiles

from crm_portal import __version__
from crm_portal.config import LoggingConfig, PortalConfig, load_portal_config
from crm_portal.hubspot import HubSpotClient
from crm_portal.ui.router import STATIC_DIR as UI_STATIC_DIR
from crm_portal.ui.router import router as ui_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LoggingConfig) -> None:
    root = logging.getLogger()
    root.setLevel(config.level)

    formatter = logging.Formatter(LOG_FORMAT)
    # Avoid adding duplicate handlers if reloaded
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if config.file and not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def create_app(
    config: PortalConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        cfg = config if config is not None else load_portal_config()
        configure_logging(cfg.logging)

        logger.info("CRM portal starting up")
        logger.info(f"Object type: {cfg.hubspot.object_type}")

        app.state.portal_config = cfg
        app.state.hubspot = HubSpotClient.from_config(cfg.hubspot, transport=transport)

        try:
            yield
        finally:
            await app.state.hubspot.aclose()
            logger.info("CRM portal shut down")

    app = FastAPI(title="CRM Portal", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        # Avoid leaking internals to the browser.
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse("Internal server error", status_code=500)

    if UI_STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(UI_STATIC_DIR)), name="static")
    else:
        logger.warning(
            "UI static directory is missing (%s); /static will not be served",
            UI_STATIC_DIR,
        )
    app.include_router(ui_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
