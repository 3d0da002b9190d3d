"""Error kinds raised by the Titan swap client.

Every failure aborts the call with exactly one of these. Nothing is retried
internally: retry/backoff around TransportError and RequestFailedError is
left to the caller.
"""

from typing import Optional

# Marker the service puts in 404 bodies when no route exists for the pair
NO_ROUTES_MARKER = "No routes"


class TitanClientError(Exception):
    """Base class for all client errors."""


class TransportError(TitanClientError):
    """The HTTP transport failed (connection, TLS, timeout)."""


class RequestFailedError(TitanClientError):
    """The service answered with a non-2xx status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Request failed with status {status}: {body}")


class NoRoutesAvailableError(TitanClientError):
    """No route exists for the requested pair and amount."""

    def __init__(self, message: str = "No routes available"):
        super().__init__(message)


class DecodeError(TitanClientError):
    """The binary payload does not match the expected schema."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(f"Failed to decode msgpack: {message}")


def classify_error_response(status: int, body: str) -> TitanClientError:
    """Map a non-2xx response to the error kind the caller should see.

    This is the only place that inspects error body text. Swap the substring
    check for a structured error code once the service exposes one.
    """
    if status == 404 and NO_ROUTES_MARKER in body:
        return NoRoutesAvailableError()
    return RequestFailedError(status, body)
