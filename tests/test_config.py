"""Tests for configuration models, loading and ProxyConfig construction."""

import json

import pytest
from pydantic import ValidationError

from scalar_proxy.core.config import Config, ProxyConfig, ScalarSettings, load_config
from scalar_proxy.core.exceptions import ConfigurationError


class TestScalarSettings:
    def test_base_url_gets_http_scheme(self):
        settings = ScalarSettings(base_url="  localhost:3000/ ")
        assert settings.base_url == "http://localhost:3000"

    def test_base_url_with_scheme_kept(self):
        settings = ScalarSettings(base_url="https://api.example.com")
        assert settings.base_url == "https://api.example.com"

    def test_defaults(self):
        settings = ScalarSettings()
        assert settings.proxy_path == "/scalar/proxy"
        assert settings.doc_path == "/docs"
        assert settings.api_spec_path == "/openapi.json"
        assert settings.custom_html_path is None

    def test_trailing_slash_removed_from_paths(self):
        settings = ScalarSettings(proxy_path="/proxy/", doc_path="/")
        assert settings.proxy_path == "/proxy"
        assert settings.doc_path == "/"

    @pytest.mark.parametrize("path", ["docs", "/docs?x=1", "/do cs", "/<script>"])
    def test_invalid_path_rejected(self, path):
        with pytest.raises(ValidationError):
            ScalarSettings(doc_path=path)


class TestProxyConfig:
    def test_from_settings_computes_urls(self):
        config = Config(scalar=ScalarSettings(base_url="api.example.com"))

        proxy_config = ProxyConfig.from_settings(config)

        assert proxy_config.api_spec_url == "http://api.example.com/openapi.json"
        assert proxy_config.proxy_url == "http://api.example.com/scalar/proxy"
        assert proxy_config.base_url == "http://api.example.com"
        assert proxy_config.timeout == 30.0

    def test_from_settings_uses_public_url_for_proxy(self):
        config = Config(scalar=ScalarSettings(base_url="https://api.example.com"))

        proxy_config = ProxyConfig.from_settings(config, public_url="http://127.0.0.1:8080")

        assert proxy_config.proxy_url == "http://127.0.0.1:8080/scalar/proxy"
        assert proxy_config.api_spec_url == "https://api.example.com/openapi.json"

    def test_missing_base_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ProxyConfig.from_settings(Config())
        assert exc_info.value.code == "MISSING_REQUIRED_CONFIG"

    def test_invalid_public_url(self):
        config = Config(scalar=ScalarSettings(base_url="https://api.example.com"))
        with pytest.raises(ConfigurationError) as exc_info:
            ProxyConfig.from_settings(config, public_url="not a url")
        assert exc_info.value.code == "INVALID_URL"

    @pytest.mark.parametrize("url", ["api.example.com", "/openapi.json", "http://"])
    def test_api_spec_url_must_be_absolute(self, url):
        with pytest.raises(ConfigurationError) as exc_info:
            ProxyConfig(api_spec_url=url)
        assert exc_info.value.code == "INVALID_URL"

    def test_empty_api_spec_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ProxyConfig(api_spec_url="")
        assert exc_info.value.code == "MISSING_REQUIRED_CONFIG"

    def test_base_url_must_be_absolute_when_set(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ProxyConfig(api_spec_url="https://api.example.com", base_url="example.com")
        assert exc_info.value.code == "INVALID_URL"

    def test_is_immutable(self, proxy_config):
        with pytest.raises(AttributeError):
            proxy_config.api_spec_url = "https://evil.example.com"


class TestLoadConfig:
    def test_creates_default_when_missing(self, tmp_path):
        config_file = tmp_path / "scalar-proxy" / "config.json"

        config = load_config(config_file)

        assert config == Config()
        assert json.loads(config_file.read_text())["scalar"]["proxy_path"] == "/scalar/proxy"

    def test_reads_existing_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps({"scalar": {"base_url": "https://api.example.com"}, "server": {"port": 9000}})
        )

        config = load_config(config_file)

        assert config.scalar.base_url == "https://api.example.com"
        assert config.server.port == 9000

    def test_corrupted_file_is_backed_up(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        config = load_config(config_file)

        assert config == Config()
        assert (tmp_path / "config.json.bak").read_text() == "{not json"

    def test_invalid_values_raise(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"scalar": {"proxy_path": "no-slash"}}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)
        assert exc_info.value.code == "INVALID_CONFIG"
