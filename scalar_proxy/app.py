"""FastAPI application factory and host integration."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, Request

from scalar_proxy.api.handlers import handle_docs, handle_proxy
from scalar_proxy.core.config import ProxyConfig
from scalar_proxy.core.debug import debug
from scalar_proxy.core.protocols import RequestLogger
from scalar_proxy.services.docs import DocsRenderer
from scalar_proxy.services.proxy_service import ProxyService
from scalar_proxy.services.upstream import UpstreamClient

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_router(config: ProxyConfig) -> APIRouter:
    """Register the proxy route (all methods) and the docs route."""
    router = APIRouter()
    prefix = "" if config.proxy_path == "/" else config.proxy_path

    async def proxy(request: Request):
        return await handle_proxy(request)

    async def docs(request: Request):
        return await handle_docs(request)

    # Docs first so a root-mounted proxy doesn't shadow it
    router.add_api_route(config.doc_path, docs, methods=["GET"], include_in_schema=False)
    if prefix:
        router.add_api_route(prefix, proxy, methods=PROXY_METHODS, include_in_schema=False)
    router.add_api_route(
        f"{prefix}/{{path:path}}", proxy, methods=PROXY_METHODS, include_in_schema=False
    )
    return router


def scalar_lifespan(
    config: ProxyConfig,
    logger: RequestLogger,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Lifespan that owns the shared upstream client and installs the services."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        client = httpx.AsyncClient(
            timeout=config.timeout,
            limits=limits,
            follow_redirects=False,
        )
        upstream = UpstreamClient(client, logger, forward_preflight=config.forward_preflight)
        app.state.proxy_config = config
        app.state.proxy_service = ProxyService(config, logger, upstream)
        app.state.docs_renderer = DocsRenderer(
            config.proxy_url,
            config.api_spec_url,
            config.custom_html_path,
        )
        debug("Scalar proxy ready:", config.proxy_path, "->", config.api_spec_url)
        try:
            yield
        finally:
            await client.aclose()

    return lifespan


def create_app(config: ProxyConfig, logger: RequestLogger) -> FastAPI:
    """Create and configure the standalone FastAPI application."""
    app = FastAPI(
        title="Scalar Proxy",
        version="0.1.0",
        lifespan=scalar_lifespan(config, logger),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(create_router(config))
    return app
