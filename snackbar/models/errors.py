# snackbar/models/errors.py

"""Error taxonomy for catalog access."""


class CatalogError(Exception):
    """Base class for every error raised by the catalog layer."""


class InvalidQuery(CatalogError):
    """A caller supplied a query, code or page size that cannot be served."""


class FetchError(CatalogError):
    """A single remote call failed.  Search degrades these to no results."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class TransportFailure(FetchError):
    """DNS resolution or connection level failure."""


class TimedOut(FetchError):
    """No response arrived before the call's deadline."""

    def __init__(self, url: str, timeout_ms: int) -> None:
        super().__init__(url, f"Request timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class RemoteError(FetchError):
    """The catalog answered with a non-2xx status."""

    def __init__(self, url: str, status: int, body_excerpt: str) -> None:
        detail = f" | body: {body_excerpt}" if body_excerpt else ""
        super().__init__(url, f"Request failed with {status}{detail}")
        self.status = status
        self.body_excerpt = body_excerpt


class MalformedResponse(FetchError):
    """A 2xx response whose body is not valid JSON."""
