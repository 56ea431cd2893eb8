"""HTTP forwarding to the upstream API spec server."""

import httpx

from scalar_proxy.core.debug import debug
from scalar_proxy.core.exceptions import (
    UpstreamConnectionError,
    UpstreamError,
    UpstreamTimeoutError,
)
from scalar_proxy.core.headers import HeaderBuilder
from scalar_proxy.core.protocols import RequestLogger
from scalar_proxy.core.request_types import InboundRequest, OutboundResult
from scalar_proxy.core.transform import RequestTransformer


class UpstreamClient:
    """Forward an authorized request upstream and buffer the response.

    Never raises: every failure is returned as a PROXY_ERROR result. No retries.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        logger: RequestLogger,
        header_builder: HeaderBuilder | None = None,
        transformer: RequestTransformer | None = None,
        forward_preflight: bool = False,
    ) -> None:
        self._client = client
        self._logger = logger
        self._headers = header_builder or HeaderBuilder()
        self._transformer = transformer or RequestTransformer()
        self._forward_preflight = forward_preflight

    async def forward(self, request: InboundRequest, target_url: str) -> OutboundResult:
        """Execute the outbound call and translate the upstream response."""
        method = request.method.upper()

        if method == "OPTIONS" and not self._forward_preflight:
            debug("Answering preflight locally for", target_url)
            return OutboundResult(status_code=204, headers=self._headers.cors_headers())

        self._logger.log_request(method, target_url)
        try:
            response = await self._send(method, request, target_url)
        except httpx.TimeoutException as e:
            return self._failure(UpstreamTimeoutError(f"Upstream timeout: {e}", target_url))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._failure(
                UpstreamConnectionError(f"Upstream connection error: {e}", target_url)
            )
        except Exception as e:
            return self._failure(UpstreamError(f"Proxy error: {e}", target_url))

        self._logger.log_response(method, target_url, response.status_code)
        headers = self._headers.build_response_headers(response.headers.multi_items())

        if method == "OPTIONS":
            return OutboundResult(status_code=response.status_code, headers=headers)

        return OutboundResult(
            status_code=response.status_code,
            headers=headers,
            content=response.content,
        )

    async def _send(
        self,
        method: str,
        request: InboundRequest,
        target_url: str,
    ) -> httpx.Response:
        """Send the request and read the full response body."""
        headers = self._headers.build_upstream_headers(request.headers, target_url)
        content = self._transformer.encode_body(method, request.body)
        if content is not None and self._transformer.is_structured(request.body):
            if not any(key.lower() == "content-type" for key in headers):
                headers["content-type"] = "application/json"

        debug("Forwarding", method, "to", target_url, "headers:", sorted(headers))
        return await self._client.request(
            method,
            target_url,
            headers=headers,
            content=content,
        )

    def _failure(self, error: UpstreamError) -> OutboundResult:
        self._logger.log_error("proxy", error.status_code, error.message)
        return OutboundResult.from_error(error, headers=self._headers.cors_headers())
