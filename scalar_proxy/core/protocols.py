"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, CliLogger)."""

    def log_request(self, method: str, target_url: str) -> None: ...
    def log_response(self, method: str, target_url: str, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
