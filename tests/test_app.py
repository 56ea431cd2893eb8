"""Route-level tests through the FastAPI app."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from respx import MockRouter

from scalar_proxy.app import create_app, create_router, scalar_lifespan
from scalar_proxy.core.config import ProxyConfig


@pytest.fixture
def client(proxy_config, logger):
    with TestClient(create_app(proxy_config, logger)) as test_client:
        yield test_client


def test_proxies_get_with_query(client: TestClient, respx_mock: MockRouter):
    route = respx_mock.get("https://api.example.com/pets?limit=5").mock(
        return_value=httpx.Response(200, json={"pets": ["Rex"]})
    )

    response = client.get("/scalar/proxy/pets?limit=5", headers={"x-trace": "abc"})

    assert response.status_code == 200
    assert response.json() == {"pets": ["Rex"]}
    assert response.headers["access-control-allow-origin"] == "*"
    sent = route.calls.last.request
    assert sent.headers["host"] == "api.example.com"
    assert sent.headers["x-trace"] == "abc"


def test_proxies_post_body(client: TestClient, respx_mock: MockRouter):
    route = respx_mock.post("https://api.example.com/pets").mock(
        return_value=httpx.Response(201, json={"id": 7})
    )

    response = client.post(
        "/scalar/proxy/pets",
        content='{"name":"Rex"}',
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 201
    assert route.calls.last.request.content == b'{"name":"Rex"}'


def test_cross_origin_blocked(client: TestClient, respx_mock: MockRouter):
    response = client.get("/scalar/proxy", params={"scalar_url": "https://evil.example.com/x"})

    assert response.status_code == 403
    assert response.json() == {"message": "Cross-origin blocked", "code": "CROSS_ORIGIN_BLOCKED"}
    assert respx_mock.calls.call_count == 0


def test_timeout_returns_502(client: TestClient, respx_mock: MockRouter):
    route = respx_mock.get("https://api.example.com/slow").mock(
        side_effect=httpx.ReadTimeout("timed out")
    )

    response = client.get("/scalar/proxy/slow")

    assert response.status_code == 502
    assert response.json()["code"] == "PROXY_ERROR"
    assert route.call_count == 1


def test_repeated_set_cookie_reaches_client(client: TestClient, respx_mock: MockRouter):
    respx_mock.get("https://api.example.com/login").mock(
        return_value=httpx.Response(
            200,
            headers=[("set-cookie", "session=abc; Path=/"), ("set-cookie", "theme=dark; Path=/")],
        )
    )

    response = client.get("/scalar/proxy/login")

    assert response.headers.get_list("set-cookie") == [
        "session=abc; Path=/",
        "theme=dark; Path=/",
    ]


def test_preflight_answered_locally(client: TestClient, respx_mock: MockRouter):
    response = client.options("/scalar/proxy/pets")

    assert response.status_code == 204
    assert response.content == b""
    assert "PATCH" in response.headers["access-control-allow-methods"]
    assert respx_mock.calls.call_count == 0


def test_docs_page_rendered(client: TestClient):
    response = client.get("/docs")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "https://docs.example.com/scalar/proxy" in response.text
    assert "https://api.example.com" in response.text
    assert "&{" not in response.text


def test_docs_missing_custom_template(tmp_path, logger):
    config = ProxyConfig(
        api_spec_url="https://api.example.com",
        proxy_url="https://docs.example.com/scalar/proxy",
        custom_html_path=str(tmp_path / "missing.html"),
    )

    with TestClient(create_app(config, logger)) as client:
        response = client.get("/docs")

    assert response.status_code == 404
    assert response.json()["code"] == "HTML_TEMPLATE_NOT_FOUND"


def test_docs_without_proxy_url(logger):
    config = ProxyConfig(api_spec_url="https://api.example.com")

    with TestClient(create_app(config, logger)) as client:
        response = client.get("/docs")

    assert response.status_code == 500
    assert response.json() == {
        "message": "Proxy URL or API Spec URL not defined",
        "code": "STORE_VALUES_MISSING",
    }


def test_mount_into_host_app(proxy_config, logger, respx_mock: MockRouter):
    host = FastAPI(lifespan=scalar_lifespan(proxy_config, logger))
    host.include_router(create_router(proxy_config))

    @host.get("/health")
    async def health():
        return {"ok": True}

    respx_mock.get("https://api.example.com/openapi.json").mock(
        return_value=httpx.Response(200, json={"openapi": "3.1.0"})
    )

    with TestClient(host) as client:
        assert client.get("/health").json() == {"ok": True}
        assert client.get("/scalar/proxy/openapi.json").json() == {"openapi": "3.1.0"}
