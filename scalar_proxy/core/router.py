"""Target resolution and origin authorization for proxied requests."""

from urllib.parse import parse_qs

from scalar_proxy.core.config import ProxyConfig
from scalar_proxy.core.debug import debug
from scalar_proxy.core.request_types import TargetResolution
from scalar_proxy.core.urls import is_absolute_url, origin_of, split_path

OVERRIDE_PARAM = "scalar_url"


class OriginGuard:
    """Allow only targets on the API spec origin or the base URL origin."""

    def __init__(self, api_spec_url: str, base_url: str | None = None):
        self._allowed = {origin_of(api_spec_url)}
        if base_url:
            self._allowed.add(origin_of(base_url))
        self._allowed.discard(None)

    def authorize(self, target_url: str) -> bool:
        """Return True if the target's origin is on the allow-list."""
        origin = origin_of(target_url)
        if origin is None:
            return False
        return origin in self._allowed


class TargetResolver:
    """Compute where an inbound request should be forwarded."""

    def __init__(self, config: ProxyConfig, guard: OriginGuard | None = None):
        self._api_spec_url = config.api_spec_url
        self._proxy_path = config.proxy_path
        self._guard = guard or OriginGuard(config.api_spec_url, config.base_url)

    def resolve(self, path: str) -> TargetResolution:
        """Resolve the target URL for `path` (path + query) and authorize it."""
        url = self._override_target(path) or self._default_target(path)
        authorized = self._guard.authorize(url)
        debug("Resolved target:", url, "authorized:", authorized)
        return TargetResolution(url=url, authorized=authorized)

    def _override_target(self, path: str) -> str | None:
        """Return the scalar_url override, or None if missing or malformed."""
        _, query = split_path(path)
        if not query:
            return None
        values = parse_qs(query, keep_blank_values=True).get(OVERRIDE_PARAM)
        if not values:
            return None
        candidate = values[0].strip()
        if not is_absolute_url(candidate):
            debug("Ignoring malformed scalar_url override:", candidate)
            return None
        return candidate

    def _default_target(self, path: str) -> str:
        """Append the path below the mount prefix and the query verbatim."""
        route_path, query = split_path(path)
        if self._proxy_path != "/" and (
            route_path == self._proxy_path or route_path.startswith(self._proxy_path + "/")
        ):
            route_path = route_path[len(self._proxy_path):]
        target = self._api_spec_url + route_path
        if query:
            target = f"{target}?{query}"
        return target
