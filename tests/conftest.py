from collections.abc import AsyncIterator

import httpx
import pytest

from scalar_proxy.core.config import ProxyConfig
from scalar_proxy.services.upstream import UpstreamClient

API_SPEC_URL = "https://api.example.com"


class RecordingLogger:
    """RequestLogger fake that keeps every call."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str]] = []
        self.responses: list[tuple[str, str, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(self, method: str, target_url: str) -> None:
        self.requests.append((method, target_url))

    def log_response(self, method: str, target_url: str, status: int) -> None:
        self.responses.append((method, target_url, status))

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def proxy_config() -> ProxyConfig:
    return ProxyConfig(
        api_spec_url=API_SPEC_URL,
        proxy_path="/scalar/proxy",
        proxy_url="https://docs.example.com/scalar/proxy",
    )


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=5.0) as client:
        yield client


@pytest.fixture
def upstream(http_client: httpx.AsyncClient, logger: RecordingLogger) -> UpstreamClient:
    return UpstreamClient(http_client, logger)
