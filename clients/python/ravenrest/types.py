"""Type definitions for ravenrest."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

from .exceptions import ConfigurationError

# Characters left unescaped in query strings, as Node's querystring does.
QUERY_SAFE_CHARACTERS = "!*'()"


@dataclass(frozen=True)
class ConnectionSettings:
    """Where to find the server.

    Args:
        host: Base URL of the server (e.g., "http://localhost:8080").
        database: Tenant database to scope requests to. ``None`` targets the
            server root.
        timeout: Request timeout in seconds.
    """

    host: str
    database: str | None = None
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not self.host.strip():
            raise ConfigurationError("A host is required to connect to the server.")
        object.__setattr__(self, "host", self.host.rstrip("/"))
        if self.database is not None and not isinstance(self.database, str):
            raise ConfigurationError(f"Invalid database name: {self.database!r}")

    @classmethod
    def coerce(cls, settings: "ConnectionSettings | Mapping[str, Any] | None") -> "ConnectionSettings":
        """Build settings from an instance or a plain mapping."""
        if isinstance(settings, cls):
            return settings
        if settings is None:
            raise ConfigurationError("Connection settings are required.")
        if isinstance(settings, Mapping):
            if "host" not in settings:
                raise ConfigurationError("Connection settings must include a host.")
            return cls(
                host=settings["host"],
                database=settings.get("database"),
                timeout=settings.get("timeout", 30.0),
            )
        raise ConfigurationError(f"Unsupported connection settings: {settings!r}")


@dataclass
class QueryState:
    """Accumulated intent of a query builder."""

    index_name: str | None = None
    collection: str | None = None
    where: dict[str, str] | None = None
    select: list[str] | None = None
    order_by: str | None = None
    skip: int | None = None
    take: int | None = None


@dataclass(frozen=True)
class CompiledQuery:
    """Wire form of a query: a relative path plus query-string parameters."""

    path: str
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def query_string(self) -> str:
        return urlencode(self.params, doseq=True, safe=QUERY_SAFE_CHARACTERS, quote_via=quote)

    @property
    def url(self) -> str:
        """Relative URL including the encoded query string, if any."""
        query = self.query_string
        return f"{self.path}?{query}" if query else self.path


@dataclass
class DatabaseInfo:
    """A database as reported by the server's database listing."""

    id: str
    name: str
    last_modified: str | None = None
    data_directory: str | None = None

    @classmethod
    def from_response(cls, record: dict[str, Any]) -> "DatabaseInfo":
        """Create DatabaseInfo from a raw listing record."""
        metadata = record.get("@metadata") or {}
        doc_id = metadata.get("@id", "")
        settings = record.get("Settings") or {}

        return cls(
            id=doc_id,
            name=doc_id.rsplit("/", 1)[-1],
            last_modified=record.get("Last-Modified"),
            data_directory=settings.get("Raven/DataDir"),
        )
