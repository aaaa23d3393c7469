"""ravenrest HTTP client."""

from typing import Any

import httpx

from .aio import AsyncAttachmentRequests, AsyncDatabaseRequests, AsyncQueryRequest
from .attachments import AttachmentRequests
from .databases import DatabaseRequests
from .query import QueryRequest
from .types import ConnectionSettings


class RavenClient:
    """HTTP client for a RavenDB-style document database.

    All request builders created by the client share one connection pool.

    Args:
        host: Base URL of the server (e.g., "http://localhost:8080").
        database: Database to scope queries and attachments to.
        timeout: Request timeout in seconds.
        transport: Custom httpx transport (used for testing).

    Example:
        >>> with RavenClient("http://localhost:8080", database="shop") as client:
        ...     client.databases.ensure_exists("shop")
        ...     orders = client.query().collection("Orders").where("Status", "open").results()
    """

    def __init__(
        self,
        host: str = "http://localhost:8080",
        database: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = ConnectionSettings(host=host, database=database, timeout=timeout)
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self.databases = DatabaseRequests(self.settings, client=self._client)
        self.attachments = AttachmentRequests(self.settings, client=self._client)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "RavenClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def query(self, index_name: str | None = None) -> QueryRequest:
        """Start a query.

        Args:
            index_name: Index to query. Omit for a dynamic query.
        """
        return QueryRequest(index_name, self.settings, client=self._client)


class AsyncRavenClient:
    """Async HTTP client for a RavenDB-style document database.

    Same interface as RavenClient but uses async/await.
    """

    def __init__(
        self,
        host: str = "http://localhost:8080",
        database: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = ConnectionSettings(host=host, database=database, timeout=timeout)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.databases = AsyncDatabaseRequests(self.settings, client=self._client)
        self.attachments = AsyncAttachmentRequests(self.settings, client=self._client)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncRavenClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def query(self, index_name: str | None = None) -> AsyncQueryRequest:
        """Start a query."""
        return AsyncQueryRequest(index_name, self.settings, client=self._client)
