"""Proxy pipeline: validate, resolve, authorize, forward."""

from scalar_proxy.core.config import ProxyConfig
from scalar_proxy.core.debug import debug
from scalar_proxy.core.exceptions import CrossOriginBlocked, InvalidRequestError
from scalar_proxy.core.headers import HeaderBuilder
from scalar_proxy.core.protocols import RequestLogger
from scalar_proxy.core.request_types import InboundRequest, OutboundResult, TargetResolution
from scalar_proxy.core.router import TargetResolver
from scalar_proxy.services.upstream import UpstreamClient


class ProxyService:
    """Run each inbound request through the proxy pipeline.

    Every step either yields its value or an error OutboundResult that ends
    the pipeline; nothing is raised to the host.
    """

    def __init__(
        self,
        config: ProxyConfig,
        logger: RequestLogger,
        upstream: UpstreamClient,
        resolver: TargetResolver | None = None,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._logger = logger
        self._upstream = upstream
        self._resolver = resolver or TargetResolver(config)
        self._headers = header_builder or HeaderBuilder()

    async def handle(self, request: InboundRequest) -> OutboundResult:
        """Proxy one request and return the result for the host to write."""
        invalid = self._validate(request)
        if invalid is not None:
            return invalid

        target = self._authorize(request)
        if isinstance(target, OutboundResult):
            return target

        return await self._upstream.forward(request, target.url)

    def _validate(self, request: InboundRequest) -> OutboundResult | None:
        if request.method and request.path:
            return None
        error = InvalidRequestError("Request URL and method are required")
        self._logger.log_error("proxy", error.status_code, error.message)
        return OutboundResult.from_error(error, headers=self._headers.cors_headers())

    def _authorize(self, request: InboundRequest) -> TargetResolution | OutboundResult:
        target = self._resolver.resolve(request.path)
        if target.authorized:
            return target
        debug("Blocked cross-origin target:", target.url)
        error = CrossOriginBlocked()
        self._logger.log_error("proxy", error.status_code, f"{error.message}: {target.url}")
        return OutboundResult.from_error(error, headers=self._headers.cors_headers())
