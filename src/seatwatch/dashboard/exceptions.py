"""Custom exceptions for the dashboard client."""


class DashboardError(Exception):
    """A request to the proxy failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
