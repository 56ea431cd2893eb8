"""Scalar API docs with a same-origin proxy for FastAPI."""

from scalar_proxy.app import create_app, create_router, scalar_lifespan
from scalar_proxy.core.config import Config, ProxyConfig, ScalarSettings, load_config
from scalar_proxy.core.exceptions import ConfigurationError, ScalarError
from scalar_proxy.core.request_types import InboundRequest, OutboundResult
from scalar_proxy.services.docs import DocsRenderer
from scalar_proxy.services.proxy_service import ProxyService
from scalar_proxy.ui.log_utils import CliLogger

__all__ = [
    "CliLogger",
    "Config",
    "ConfigurationError",
    "DocsRenderer",
    "InboundRequest",
    "OutboundResult",
    "ProxyConfig",
    "ProxyService",
    "ScalarError",
    "ScalarSettings",
    "create_app",
    "create_router",
    "load_config",
    "scalar_lifespan",
]
