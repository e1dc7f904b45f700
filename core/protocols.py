"""Shared protocol definitions."""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, ConsoleLogger)."""

    def log_request(self, model: str, body: dict[str, Any]) -> None: ...
    def log_success(self, model: str) -> None: ...
    def log_upstream_error(self, status: int, message: str) -> None: ...
    def log_error(self, message: str) -> None: ...
