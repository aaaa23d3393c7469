"""Database administration requests."""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .exceptions import AlreadyExistsError, RequestError
from .request import RequestBase, parse_body, require_name, unexpected_status
from .types import ConnectionSettings, DatabaseInfo

logger = logging.getLogger(__name__)

DATABASES_PATH = "databases"
DATABASE_DOCUMENT_PREFIX = "docs/Raven/Databases"


def server_settings(settings: ConnectionSettings | Mapping[str, Any] | None) -> ConnectionSettings:
    """Settings scoped to the server root. Admin requests never target a database."""
    return dataclasses.replace(ConnectionSettings.coerce(settings), database=None)


def database_document_path(name: str) -> str:
    return f"{DATABASE_DOCUMENT_PREFIX}/{require_name(name, 'database name')}"


def database_document(name: str, data_directory: str | None = None) -> dict[str, Any]:
    """Body of the document that asks the server to create a database."""
    return {"Settings": {"Raven/DataDir": data_directory or f"~/Tenants/{name}"}}


def interpret_exists(response: httpx.Response) -> bool:
    if response.status_code == 200:
        return True
    if response.status_code == 404:
        return False
    raise unexpected_status("check whether the database exists", response)


def interpret_create(response: httpx.Response) -> None:
    if response.status_code != 201:
        raise unexpected_status("create the database", response)


def interpret_remove(response: httpx.Response) -> None:
    if response.status_code != 204:
        raise unexpected_status("delete the database", response)


def interpret_listing(response: httpx.Response) -> list[DatabaseInfo]:
    if response.status_code != 200:
        raise unexpected_status("list databases", response)
    records = parse_body(response)
    if not isinstance(records, list):
        raise RequestError(
            "Failed to list databases. Expected a JSON array in the response.",
            status_code=response.status_code,
            body=records,
        )
    try:
        return [DatabaseInfo.from_response(record) for record in records]
    except (AttributeError, TypeError) as e:
        raise RequestError(
            f"Failed to list databases. Malformed database record: {e}",
            status_code=response.status_code,
            body=records,
        ) from e


def already_exists(name: str) -> AlreadyExistsError:
    return AlreadyExistsError(f"Database {name!r} already exists.", code="already_exists")


class DatabaseRequests(RequestBase):
    """Create, remove and list databases on a server.

    Any database in the settings is dropped; these requests always go to the
    server root.

    Example:
        >>> databases = DatabaseRequests({"host": "http://localhost:8080"})
        >>> databases.ensure_exists("shop")
        >>> [db.name for db in databases.list()]
        ['shop']
    """

    def __init__(
        self,
        settings: ConnectionSettings | Mapping[str, Any] | None,
        *,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(server_settings(settings), client=client, transport=transport)

    def exists(self, name: str) -> bool:
        """Check whether a database exists.

        Returns:
            True on 200, False on 404.

        Raises:
            RequestError: For any other status.
        """
        path = database_document_path(name)
        return interpret_exists(self._send_get(path))

    def create(self, name: str, *, data_directory: str | None = None) -> None:
        """Create a database.

        Args:
            name: Database name.
            data_directory: Server-side data directory. Defaults to
                ``~/Tenants/<name>``.

        Raises:
            AlreadyExistsError: If the database exists. Nothing is written.
            RequestError: If the server does not answer the create with 201.
        """
        if self.exists(name):
            raise already_exists(name)
        self._put_database(name, data_directory)

    def _put_database(self, name: str, data_directory: str | None) -> None:
        path = database_document_path(name)
        interpret_create(self._send_put(path, database_document(name, data_directory)))
        logger.info("Created database %s", name)

    def remove(self, name: str) -> None:
        """Delete a database."""
        path = database_document_path(name)
        interpret_remove(self._send_delete(path))
        logger.info("Deleted database %s", name)

    def ensure_exists(self, name: str, *, data_directory: str | None = None) -> bool:
        """Create a database unless it already exists.

        Returns:
            True if the database was created by this call.
        """
        if self.exists(name):
            return False
        self._put_database(name, data_directory)
        return True

    def list(self) -> list[DatabaseInfo]:  # noqa: A003
        """List the databases on the server."""
        return interpret_listing(self._send_get(DATABASES_PATH))
