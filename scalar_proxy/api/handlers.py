"""FastAPI route handlers."""

import asyncio
from collections.abc import Awaitable

from fastapi import Request, Response
from fastapi.responses import HTMLResponse, JSONResponse

from scalar_proxy.core.debug import debug
from scalar_proxy.core.exceptions import ScalarError
from scalar_proxy.core.request_types import InboundRequest, OutboundResult
from scalar_proxy.ui.log_utils import write_incoming_log

DISCONNECT_POLL_INTERVAL = 0.1


async def _read_inbound(request: Request) -> InboundRequest:
    """Convert the Starlette request into an InboundRequest."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"

    headers: dict[str, list[str]] = {}
    for key, value in request.headers.items():
        headers.setdefault(key, []).append(value)

    raw_body = await request.body()
    body = raw_body.decode("utf-8", errors="replace") if raw_body else None
    return InboundRequest(method=request.method, path=path, headers=headers, body=body)


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL)


async def _run_until_disconnect(
    request: Request,
    pipeline: Awaitable[OutboundResult],
) -> OutboundResult | None:
    """Run the pipeline; cancel it and return None if the client goes away."""
    work = asyncio.ensure_future(pipeline)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [task for task in (work, watcher) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if work.cancelled():
        debug("Client disconnected, abandoned upstream call for", request.url.path)
        return None
    return work.result()


async def handle_proxy(request: Request) -> Response:
    """Handle any request under the proxy path."""
    inbound = await _read_inbound(request)
    debug("Proxy route hit:", inbound.method, inbound.path)

    proxy_service = request.app.state.proxy_service
    if request.app.state.proxy_config.log_requests:
        write_incoming_log(inbound.method, inbound.path, dict(inbound.headers), inbound.body)

    result = await _run_until_disconnect(request, proxy_service.handle(inbound))
    if result is None:
        # Nobody is listening anymore
        return Response(status_code=499)

    response = Response(content=result.content, status_code=result.status_code)
    for key, value in result.headers.multi_items():
        response.headers.append(key, value)
    return response


async def handle_docs(request: Request) -> Response:
    """Serve the rendered Scalar docs page."""
    debug("Docs route hit:", request.method, request.url.path)
    renderer = request.app.state.docs_renderer
    try:
        return HTMLResponse(renderer.render())
    except ScalarError as e:
        debug("Docs rendering failed:", e.code, e.message)
        return JSONResponse(e.to_dict(), status_code=e.status_code)
    except OSError as e:
        debug("Docs template unreadable:", e)
        return JSONResponse(
            {
                "message": "Internal server error occurred while serving documentation",
                "code": "INTERNAL_SERVER_ERROR",
            },
            status_code=500,
        )
