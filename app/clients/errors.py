"""Client-side exceptions."""


class UpstreamUnavailableError(Exception):
    """A market data or sentiment source could not serve the request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
