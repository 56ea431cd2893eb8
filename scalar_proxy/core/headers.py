"""Header construction for upstream requests and relayed responses."""

from collections.abc import Iterable, Mapping

import httpx

from scalar_proxy.core.request_types import HeaderValues

HOP_BY_HOP_HEADERS = frozenset(
    {"connection", "keep-alive", "transfer-encoding", "te", "trailer", "upgrade", "host"}
)

# The body is decoded and re-buffered, so upstream framing no longer applies
STALE_FRAMING_HEADERS = frozenset({"content-encoding", "content-length"})

# httpx sets these itself and advertises only the encodings it can decode
CLIENT_NEGOTIATED_HEADERS = frozenset({"accept-encoding", "content-length"})

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,HEAD,POST,PUT,PATCH,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


class HeaderBuilder:
    """Build upstream request headers and client response headers."""

    def build_upstream_headers(
        self,
        headers: Mapping[str, HeaderValues],
        target_url: str,
    ) -> dict[str, str]:
        """Copy non-empty inbound headers and point `host` at the target."""
        upstream: dict[str, str] = {}
        for key, value in headers.items():
            key_lower = key.lower()
            if key_lower in HOP_BY_HOP_HEADERS or key_lower in CLIENT_NEGOTIATED_HEADERS:
                continue
            if not isinstance(value, str):
                value = ", ".join(v for v in value if v)
            if value:
                upstream[key] = value
        upstream["host"] = httpx.URL(target_url).netloc.decode("ascii")
        return upstream

    def cors_headers(self) -> dict[str, str]:
        return dict(CORS_HEADERS)

    def build_response_headers(self, headers: Iterable[tuple[str, str]]) -> httpx.Headers:
        """CORS headers first, then upstream headers minus hop-by-hop and framing.

        Repeated upstream headers such as `set-cookie` stay separate entries.
        """
        response = list(CORS_HEADERS.items())
        taken = {key.lower() for key in CORS_HEADERS}
        for key, value in headers:
            key_lower = key.lower()
            if key_lower in HOP_BY_HOP_HEADERS or key_lower in STALE_FRAMING_HEADERS:
                continue
            if key_lower in taken:
                continue
            response.append((key, value))
        return httpx.Headers(response)
