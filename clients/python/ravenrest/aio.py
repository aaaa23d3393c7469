"""Async request types.

Same interface as the sync requests but uses async/await on
``httpx.AsyncClient``. Validation, query compilation and status handling are
shared with the sync versions.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from . import attachments
from .databases import (
    DATABASES_PATH,
    already_exists,
    database_document,
    database_document_path,
    interpret_create,
    interpret_exists,
    interpret_listing,
    interpret_remove,
    server_settings,
)
from .exceptions import ConnectionError
from .query import QueryBuilder, split_query_args
from .request import build_url, encode_body, require_options
from .types import ConnectionSettings, DatabaseInfo, QueryState

logger = logging.getLogger(__name__)


class AsyncRequestBase:
    """Async counterpart of ``RequestBase``."""

    def __init__(
        self,
        settings: ConnectionSettings | Mapping[str, Any] | None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = ConnectionSettings.coerce(settings)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.settings.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def build_url(self, path: str) -> str:
        return build_url(self.settings, path)

    async def _send(self, method: str, path: str, body: Any = None) -> httpx.Response:
        url = self.build_url(path)
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **encode_body(body))
        except httpx.HTTPError as e:
            raise ConnectionError(f"{method} {url} failed: {e}") from e
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    async def _send_get(self, path: str) -> httpx.Response:
        return await self._send("GET", path)

    async def _send_put(self, path: str, body: Any = None) -> httpx.Response:
        return await self._send("PUT", path, body)

    async def _send_delete(self, path: str) -> httpx.Response:
        return await self._send("DELETE", path)

    async def _send_post(self, path: str, body: Any = None) -> httpx.Response:
        return await self._send("POST", path, body)


class AsyncQueryRequest(QueryBuilder, AsyncRequestBase):
    """Async query against a named index, or a dynamic query."""

    def __init__(
        self,
        index_or_settings: str | ConnectionSettings | Mapping[str, Any] | None,
        settings: ConnectionSettings | Mapping[str, Any] | None = None,
        *,
        index_name: str | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        index_name, settings = split_query_args(index_or_settings, settings, index_name)
        super().__init__(settings, client=client, transport=transport)
        self.state = QueryState(index_name=index_name)

    async def results(self) -> Any:
        """Send the query and return the parsed response body."""
        compiled = self.compile()
        return self._interpret(await self._send_get(compiled.url))


class AsyncDatabaseRequests(AsyncRequestBase):
    """Async database administration. Requests always go to the server root."""

    def __init__(
        self,
        settings: ConnectionSettings | Mapping[str, Any] | None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(server_settings(settings), client=client, transport=transport)

    async def exists(self, name: str) -> bool:
        path = database_document_path(name)
        return interpret_exists(await self._send_get(path))

    async def create(self, name: str, *, data_directory: str | None = None) -> None:
        if await self.exists(name):
            raise already_exists(name)
        await self._put_database(name, data_directory)

    async def _put_database(self, name: str, data_directory: str | None) -> None:
        path = database_document_path(name)
        interpret_create(await self._send_put(path, database_document(name, data_directory)))
        logger.info("Created database %s", name)

    async def remove(self, name: str) -> None:
        path = database_document_path(name)
        interpret_remove(await self._send_delete(path))
        logger.info("Deleted database %s", name)

    async def ensure_exists(self, name: str, *, data_directory: str | None = None) -> bool:
        if await self.exists(name):
            return False
        await self._put_database(name, data_directory)
        return True

    async def list(self) -> list[DatabaseInfo]:  # noqa: A003
        return interpret_listing(await self._send_get(DATABASES_PATH))


class AsyncAttachmentRequests(AsyncRequestBase):
    """Async attachment get/save/remove."""

    async def get(self, key: str) -> bytes:
        path = attachments.attachment_path(key)
        return attachments.interpret_get(await self._send_get(path))

    async def save(self, key: str, options: dict[str, Any]) -> None:
        path = attachments.attachment_path(key)
        buffer = require_options(options)
        attachments.interpret_save(await self._send_put(path, buffer))

    async def remove(self, key: str) -> None:
        path = attachments.attachment_path(key)
        attachments.interpret_remove(await self._send_delete(path))
