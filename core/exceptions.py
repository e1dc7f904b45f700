"""Custom exception hierarchy for the OpenAI key proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class MethodNotAllowed(ProxyError):
    """Raised for any inbound method other than POST."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Method {method} not allowed")
        self.method = method


class UpstreamError(ProxyError):
    """Raised when the upstream API returns a non-success status.

    Attributes:
        message: Summary shown to the caller
        status_code: HTTP status code from upstream
        details: Raw upstream error body
    """

    def __init__(self, message: str, status_code: int, details: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
