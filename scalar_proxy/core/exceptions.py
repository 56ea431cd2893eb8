"""Custom exception hierarchy for the Scalar docs proxy."""

from typing import Any


class ScalarError(Exception):
    """Base exception for all proxy and docs errors.

    Attributes:
        message: Human readable error message
        code: Machine readable error code (e.g., 'PROXY_ERROR')
        status_code: HTTP status code reported to the client
    """

    default_code = "INTERNAL_SERVER_ERROR"
    default_status = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body sent to clients."""
        return {"message": self.message, "code": self.code}


class ConfigurationError(ScalarError):
    """Raised when configuration is missing or invalid."""

    default_code = "MISSING_REQUIRED_CONFIG"
    default_status = 500


class InvalidRequestError(ScalarError):
    """Inbound request is missing its method or path."""

    default_code = "INVALID_REQUEST"
    default_status = 400


class CrossOriginBlocked(ScalarError):
    """Target origin is not on the allow-list."""

    default_code = "CROSS_ORIGIN_BLOCKED"
    default_status = 403

    def __init__(self, message: str = "Cross-origin blocked") -> None:
        super().__init__(message)


class TemplateNotFoundError(ScalarError):
    """HTML template file does not exist."""

    default_code = "HTML_TEMPLATE_NOT_FOUND"
    default_status = 404


class StoreValuesMissingError(ScalarError):
    """Proxy URL or API spec URL is unset at render time."""

    default_code = "STORE_VALUES_MISSING"
    default_status = 500


class UpstreamError(ScalarError):
    """Raised when the upstream call fails.

    Attributes:
        target_url: URL the request was forwarded to (optional)
    """

    default_code = "PROXY_ERROR"
    default_status = 502

    def __init__(self, message: str, target_url: str | None = None) -> None:
        super().__init__(message)
        self.target_url = target_url


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream request times out."""


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to the upstream."""
