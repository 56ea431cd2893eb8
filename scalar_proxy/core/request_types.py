"""Shared request data types."""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from scalar_proxy.core.exceptions import ScalarError

HeaderValues = str | Sequence[str]


@dataclass(frozen=True)
class InboundRequest:
    """Read-only view of a request handed over by the host server.

    `path` is the full path plus query string as received, including the
    mount prefix. `body` is raw text, a structured (JSON-serializable) value,
    or None.
    """

    method: str
    path: str
    headers: Mapping[str, HeaderValues] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class TargetResolution:
    """Resolved upstream URL and whether it passed the origin check."""

    url: str
    authorized: bool


@dataclass
class OutboundResult:
    """Status, headers and buffered payload to write back to the client.

    `headers` may repeat a name (several `set-cookie` lines, for example).
    """

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes = b""

    def __post_init__(self) -> None:
        self.headers = httpx.Headers(self.headers)

    @classmethod
    def from_error(
        cls,
        error: ScalarError,
        headers: Mapping[str, str] | None = None,
    ) -> "OutboundResult":
        """Build a JSON error result from a ScalarError."""
        result_headers = httpx.Headers(headers)
        result_headers["Content-Type"] = "application/json"
        return cls(
            status_code=error.status_code,
            headers=result_headers,
            content=json.dumps(error.to_dict()).encode("utf-8"),
        )
