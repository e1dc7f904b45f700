"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import PROXY_METHODS, handle_health, handle_proxy
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.proxy_handler import ProxyHandler
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            transport=transport,
        )
        upstream = UpstreamClient(client)
        app.state.proxy_handler = ProxyHandler(
            config=config,
            upstream=upstream,
            logger=logger,
            header_builder=HeaderBuilder(),
        )
        try:
            yield
        finally:
            await upstream.aclose()

    app = FastAPI(title="OpenAI Key Proxy", version="0.1.0", lifespan=lifespan)

    @app.api_route(config.proxy.path, methods=PROXY_METHODS)
    async def proxy_chat_completion(request: Request):
        return await handle_proxy(request)

    @app.get("/healthz")
    async def health(request: Request):
        return await handle_health(request, config)

    return app
