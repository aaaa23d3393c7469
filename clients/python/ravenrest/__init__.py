"""ravenrest Python Client.

A Python client for the HTTP REST interface of a RavenDB-style document
database.

Usage:
    from ravenrest import RavenClient

    client = RavenClient("http://localhost:8080", database="shop")

    # Make sure the database is there
    client.databases.ensure_exists("shop")

    # Query an index
    users = client.query("Users/ByName").where("Name", "alice").take(10).results()

    # Dynamic query over a collection
    orders = client.query().collection("Orders").order_by_descending("Total").results()

    # Attachments
    client.attachments.save("logo.png", {"buffer": png_bytes})
"""

from .aio import AsyncAttachmentRequests, AsyncDatabaseRequests, AsyncQueryRequest
from .attachments import AttachmentRequests
from .client import AsyncRavenClient, RavenClient
from .databases import DatabaseRequests
from .exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    ConnectionError,
    RavenError,
    RequestError,
    ValidationError,
)
from .query import QueryRequest, compile_query
from .request import RequestBase
from .types import CompiledQuery, ConnectionSettings, DatabaseInfo, QueryState

__version__ = "0.1.0"
__all__ = [
    "RavenClient",
    "AsyncRavenClient",
    "RequestBase",
    "QueryRequest",
    "AsyncQueryRequest",
    "compile_query",
    "DatabaseRequests",
    "AsyncDatabaseRequests",
    "AttachmentRequests",
    "AsyncAttachmentRequests",
    "ConnectionSettings",
    "QueryState",
    "CompiledQuery",
    "DatabaseInfo",
    "RavenError",
    "ConfigurationError",
    "ValidationError",
    "RequestError",
    "ConnectionError",
    "AlreadyExistsError",
]
