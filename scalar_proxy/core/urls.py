"""URL helpers shared by config, target resolution and the origin guard."""

from urllib.parse import urlsplit

DEFAULT_PORTS = {"http": 80, "https": 443}

Origin = tuple[str, str, int | None]


def is_absolute_url(value: str | None) -> bool:
    """Return True if value has both a scheme and a network location."""
    if not value:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def origin_of(url: str) -> Origin | None:
    """Return (scheme, host, port) for an absolute URL, or None if it doesn't parse."""
    if not is_absolute_url(url):
        return None
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    if not parts.hostname:
        return None
    scheme = parts.scheme.lower()
    return scheme, parts.hostname.lower(), port or DEFAULT_PORTS.get(scheme)


def join_url(base: str, path: str) -> str:
    """Join a base URL and an absolute path without doubling slashes."""
    if not path or path == "/":
        return base.rstrip("/") + "/"
    return base.rstrip("/") + "/" + path.lstrip("/")


def split_path(path: str) -> tuple[str, str]:
    """Split 'path?query' into its two halves (query without the '?')."""
    path, _, query = path.partition("?")
    return path, query
