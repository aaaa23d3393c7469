"""HTTP plumbing shared by every request type."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .exceptions import ConnectionError, RequestError, ValidationError
from .types import ConnectionSettings

logger = logging.getLogger(__name__)


def build_url(settings: ConnectionSettings, path: str) -> str:
    """Compose an absolute URL from the host, the database segment and ``path``."""
    url = settings.host
    if settings.database:
        url += f"/databases/{settings.database}"
    return f"{url}/{path.lstrip('/')}"


def encode_body(body: Any) -> dict[str, Any]:
    """Keyword arguments for httpx that carry ``body``.

    Bytes are sent as-is, anything else as JSON.
    """
    if body is None:
        return {}
    if isinstance(body, (bytes, bytearray)):
        return {"content": bytes(body)}
    return {"json": body}


def parse_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when the server says so, text otherwise."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def unexpected_status(action: str, response: httpx.Response) -> RequestError:
    """Error for a response whose status the operation does not accept."""
    return RequestError(
        f"Failed to {action}. Server returned an unexpected response {response.status_code}",
        status_code=response.status_code,
        body=parse_body(response),
    )


def require_name(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Expected a valid {what} string.")
    return value


def require_options(options: Any) -> Any:
    """Return the buffer of attachment save options."""
    if not isinstance(options, Mapping):
        raise ValidationError("Expected attachment options with a buffer to save.")
    if options.get("buffer") is None:
        raise ValidationError("Attachment options must include a buffer.")
    return options["buffer"]


class RequestBase:
    """Sends requests to the server on behalf of the request builders.

    Args:
        settings: Connection settings, or a mapping with ``host`` and
            optionally ``database`` and ``timeout``.
        client: Existing ``httpx.Client`` to send requests with. It is not
            closed by this object.
        transport: Transport for a newly created client (used for testing).
    """

    def __init__(
        self,
        settings: ConnectionSettings | Mapping[str, Any] | None,
        *,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = ConnectionSettings.coerce(settings)
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.settings.timeout, transport=transport)

    def close(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def build_url(self, path: str) -> str:
        return build_url(self.settings, path)

    def _send(self, method: str, path: str, body: Any = None) -> httpx.Response:
        url = self.build_url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **encode_body(body))
        except httpx.HTTPError as e:
            raise ConnectionError(f"{method} {url} failed: {e}") from e
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def _send_get(self, path: str) -> httpx.Response:
        return self._send("GET", path)

    def _send_put(self, path: str, body: Any = None) -> httpx.Response:
        return self._send("PUT", path, body)

    def _send_delete(self, path: str) -> httpx.Response:
        return self._send("DELETE", path)

    def _send_post(self, path: str, body: Any = None) -> httpx.Response:
        return self._send("POST", path, body)
