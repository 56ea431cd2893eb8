"""Configuration models and loading."""

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from scalar_proxy.core.exceptions import ConfigurationError
from scalar_proxy.core.urls import is_absolute_url, join_url

CONFIG_DIR = Path.home() / ".config" / "scalar-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

PATH_PATTERN = r"^/[A-Za-z0-9._~/-]*$"


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080
    public_url: str | None = None


class ScalarSettings(BaseModel):
    base_url: str = ""
    proxy_path: str = Field(default="/scalar/proxy", pattern=PATH_PATTERN)
    doc_path: str = Field(default="/docs", pattern=PATH_PATTERN)
    api_spec_path: str = Field(default="/openapi.json", pattern=PATH_PATTERN)
    custom_html_path: str | None = None

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, value: str | None) -> str:
        value = (value or "").strip()
        if value and "://" not in value:
            value = f"http://{value}"
        return value.rstrip("/")

    @field_validator("proxy_path", "doc_path", "api_spec_path")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or "/"


class UpstreamSettings(BaseModel):
    timeout: float = Field(default=30.0, gt=0)
    forward_preflight: bool = False
    log_requests: bool = False


class Config(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    scalar: ScalarSettings = Field(default_factory=ScalarSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)


@dataclass(frozen=True)
class ProxyConfig:
    """Immutable proxy configuration, built once at startup."""

    api_spec_url: str
    base_url: str | None = None
    proxy_path: str = "/scalar/proxy"
    proxy_url: str | None = None
    doc_path: str = "/docs"
    custom_html_path: str | None = None
    timeout: float = 30.0
    forward_preflight: bool = False
    log_requests: bool = False

    def __post_init__(self) -> None:
        if not self.api_spec_url:
            raise ConfigurationError("apiSpecUrl is required", "MISSING_REQUIRED_CONFIG")
        if not is_absolute_url(self.api_spec_url):
            raise ConfigurationError(
                f"apiSpecUrl must be a valid absolute URL: {self.api_spec_url}", "INVALID_URL"
            )
        if self.base_url is not None and not is_absolute_url(self.base_url):
            raise ConfigurationError(
                f"baseUrl must be a valid absolute URL: {self.base_url}", "INVALID_URL"
            )

    @classmethod
    def from_settings(
        cls,
        config: Config,
        public_url: str | None = None,
    ) -> "ProxyConfig":
        """Compute the proxy and API spec URLs from user settings."""
        scalar = config.scalar
        if not scalar.base_url:
            raise ConfigurationError("baseUrl is required", "MISSING_REQUIRED_CONFIG")
        if public_url and not is_absolute_url(public_url):
            raise ConfigurationError(
                f"public_url must be a valid absolute URL: {public_url}", "INVALID_URL"
            )
        return cls(
            api_spec_url=join_url(scalar.base_url, scalar.api_spec_path),
            base_url=scalar.base_url,
            proxy_path=scalar.proxy_path,
            proxy_url=join_url(public_url or scalar.base_url, scalar.proxy_path),
            doc_path=scalar.doc_path,
            custom_html_path=scalar.custom_html_path,
            timeout=config.upstream.timeout,
            forward_preflight=config.upstream.forward_preflight,
            log_requests=config.upstream.log_requests,
        )


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
    except json.JSONDecodeError:
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {config_file}: {e}", "INVALID_CONFIG") from e
