class StatsError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(StatsError):
    """Required configuration is missing or malformed."""


class RemoteCallError(StatsError):
    """A call to the statistics backend failed (transport, status or payload)."""


class APIError(RemoteCallError):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")


class PayloadError(RemoteCallError):
    """The backend answered 2xx but the body did not match the expected shape."""
