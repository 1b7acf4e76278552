"""Exceptions raised by posting source adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Any error of this family means the source is unavailable for this
    search. The orchestrator catches it, logs it and carries on with the
    remaining sources.
    """

    pass


class AdapterHTTPError(AdapterError):
    """HTTP request failed with a 4xx or 5xx status (or never got a response)."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code, 0 when the connection itself failed
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """HTTP request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response could not be parsed, or did not have the expected shape."""

    pass


class AdapterConfigurationError(AdapterError):
    """Invalid adapter configuration, e.g. unknown source type or missing API token."""

    pass
