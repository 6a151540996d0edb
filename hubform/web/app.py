"""FastAPI application factory.

One shared httpx.AsyncClient per app; the fetcher and submitter built on
it live on ``app.state`` and are handed to per-request shells.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hubform import __version__
from hubform.client.fetcher import FormFetcher
from hubform.client.http import HUBSPOT_API_BASE, HUBSPOT_FORMS_BASE, create_http_client
from hubform.client.submitter import FormSubmitter
from hubform.config import HubFormSettings
from hubform.web.pages import router as pages_router
from hubform.web.proxy import router as proxy_router

logger = logging.getLogger(__name__)


def create_app(
    settings: HubFormSettings,
    http_client: httpx.AsyncClient | None = None,
    api_base: str = HUBSPOT_API_BASE,
    forms_base: str = HUBSPOT_FORMS_BASE,
) -> FastAPI:
    """Build the web app serving the rendered form and the proxy API.

    Args:
        settings: Validated process settings.
        http_client: Optional client for upstream calls. When given, the
            caller owns it; otherwise the app creates one and closes it
            on shutdown.
        api_base: Marketing API base URL.
        forms_base: Forms ingestion base URL.

    Returns:
        The configured FastAPI app.
    """
    owns_client = http_client is None
    client = http_client or create_http_client(settings.http_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Serving form %s for portal %s", settings.form_id, settings.portal_id)
        yield
        if owns_client:
            await client.aclose()

    app = FastAPI(
        title="hubform",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.http_client = client
    app.state.fetcher = FormFetcher(client, base_url=api_base)
    app.state.submitter = FormSubmitter(client, base_url=forms_base)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.include_router(pages_router)
    app.include_router(proxy_router)

    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app
