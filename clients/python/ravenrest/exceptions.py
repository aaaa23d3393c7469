"""ravenrest client exceptions."""

from typing import Any


class RavenError(Exception):
    """Base exception for ravenrest errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(RavenError):
    """Connection settings are missing or malformed."""

    pass


class ValidationError(RavenError):
    """Invalid arguments passed to a builder or request method.

    Always raised before any request is sent.
    """

    pass


class RequestError(RavenError):
    """The server answered with a status code the operation does not accept.

    Attributes:
        status_code: HTTP status returned by the server, if a response arrived.
        body: Parsed response body, kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        *,
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(message, code)
        self.status_code = status_code
        self.body = body


class ConnectionError(RequestError):
    """Failed to reach the database server."""

    pass


class AlreadyExistsError(RequestError):
    """Tried to create something that is already there."""

    pass
