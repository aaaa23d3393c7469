"""Fluent query builder for index and dynamic queries."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from .exceptions import ValidationError
from .request import RequestBase, parse_body, require_name, unexpected_status
from .types import QUERY_SAFE_CHARACTERS, CompiledQuery, ConnectionSettings, QueryState


def compile_predicate(where: dict[str, str] | None) -> str | None:
    """Join ``field:value`` pairs with ``AND`` in insertion order."""
    if not where:
        return None
    return " AND ".join(
        f"{quote(field, safe=QUERY_SAFE_CHARACTERS)}:{quote(value, safe=QUERY_SAFE_CHARACTERS)}"
        for field, value in where.items()
    )


def compile_query(state: QueryState) -> CompiledQuery:
    """Turn accumulated query state into a path and query-string parameters.

    Empty values (no predicate, empty projection, zero paging) are left out.

    Raises:
        ValidationError: For a dynamic query that names neither a collection
            nor any filter, paging or sorting parameter.
    """
    candidates = {
        "query": compile_predicate(state.where),
        "fetch": state.select,
        "sort": state.order_by,
        "start": state.skip,
        "pageSize": state.take,
    }
    params = {key: value for key, value in candidates.items() if value}

    if state.index_name:
        path = f"indexes/{state.index_name}"
    else:
        if not state.collection and not params:
            raise ValidationError(
                "Invalid query operation. When performing a dynamic query either the "
                "collection name or query filters using where() and and_() must be used."
            )
        path = "indexes/dynamic"
        if state.collection:
            path += f"/{state.collection}"

    return CompiledQuery(path=path, params=params)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_count(count: Any, what: str) -> int:
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValidationError(f"Expected a valid number for total records to {what}.")
    if count < 0:
        raise ValidationError(f"Total records to {what} cannot be negative, got {count}.")
    return count


def split_query_args(
    index_or_settings: Any, settings: Any, index_name: str | None = None
) -> tuple[str | None, Any]:
    """Resolve the ``(settings)``, ``(settings, index_name=...)`` and
    ``(index_name, settings)`` call forms."""
    if settings is None:
        settings = index_or_settings
    elif index_name is not None and index_or_settings is not None:
        raise ValidationError("Index name given both positionally and as a keyword.")
    elif index_or_settings is not None:
        index_name = index_or_settings
    if index_name is not None and (not isinstance(index_name, str) or not index_name):
        raise ValidationError(f"Expected a valid index name, got {index_name!r}.")
    return index_name, settings


class QueryBuilder:
    """Chained query mutators shared by the sync and async query requests.

    Every mutator validates its input, updates ``self.state`` and returns
    ``self``. Nothing is sent until ``results()``.
    """

    state: QueryState

    @property
    def index_name(self) -> str | None:
        return self.state.index_name

    def collection(self, name: str):
        """Restrict a dynamic query to a single collection."""
        if self.state.index_name is not None:
            raise ValidationError("Cannot specify both an index and collection to query.")
        self.state.collection = require_name(name, "collection name")
        return self

    def where(self, field: str, value: str):
        """Filter on ``field`` equal to ``value``."""
        self._check_predicate(field, value)
        if self.state.where is None:
            self.state.where = {}
        self.state.where[field] = value
        return self

    def and_(self, field: str, value: str):
        """Add another filter to the ones started with ``where()``."""
        self._check_predicate(field, value)
        if self.state.where is None:
            raise ValidationError(
                "Invalid usage. Call where() before calling and_(). "
                "and_() cannot be used before where()."
            )
        self.state.where[field] = value
        return self

    def select(self, *fields: str | int | float):
        """Fetch only the given fields. Replaces any earlier selection."""
        if not fields:
            raise ValidationError("Expected at least one string argument to select.")
        selected = []
        for arg in fields:
            if isinstance(arg, str):
                selected.append(arg)
            elif _is_number(arg):
                selected.append(str(arg))
            else:
                raise ValidationError(f"Invalid arguments. Cannot add {arg!r} as a select filter")
        self.state.select = selected
        return self

    def order_by(self, field: str):
        if not isinstance(field, str):
            raise ValidationError("Expected a valid field string to sort by.")
        self.state.order_by = field
        return self

    def order_by_descending(self, field: str):
        if not isinstance(field, str):
            raise ValidationError("Expected a valid field string to sort by.")
        self.state.order_by = f"-{field}"
        return self

    def skip(self, count: int):
        self.state.skip = _require_count(count, "skip")
        return self

    def take(self, count: int):
        self.state.take = _require_count(count, "take")
        return self

    def compile(self) -> CompiledQuery:
        """Compile the current state without sending anything."""
        return compile_query(self.state)

    @staticmethod
    def _check_predicate(field: Any, value: Any) -> None:
        if not isinstance(field, str):
            raise ValidationError("Expected a valid field string to query by.")
        if not isinstance(value, str):
            raise ValidationError("Expected a valid value string.")

    @staticmethod
    def _interpret(response: httpx.Response) -> Any:
        if response.status_code != 200:
            raise unexpected_status("get results", response)
        return parse_body(response)


class QueryRequest(QueryBuilder, RequestBase):
    """Query against a named index, or a dynamic query.

    Args:
        index_or_settings: Name of the index to query. When called with a
            single positional argument, that argument is the settings.
        settings: Connection settings.
        index_name: Index to query when the settings are passed first. Omit
            both index forms for a dynamic query.

    Example:
        >>> query = QueryRequest("Users/ByName", {"host": "http://localhost:8080"})
        >>> users = query.where("Name", "alice").order_by("Name").take(10).results()

        >>> dynamic = QueryRequest({"host": "http://localhost:8080", "database": "shop"})
        >>> orders = dynamic.collection("Orders").where("Status", "open").results()
    """

    def __init__(
        self,
        index_or_settings: str | ConnectionSettings | Mapping[str, Any] | None,
        settings: ConnectionSettings | Mapping[str, Any] | None = None,
        *,
        index_name: str | None = None,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        index_name, settings = split_query_args(index_or_settings, settings, index_name)
        super().__init__(settings, client=client, transport=transport)
        self.state = QueryState(index_name=index_name)

    def results(self) -> Any:
        """Send the query and return the parsed response body.

        Returns:
            Decoded JSON body of the query results.

        Raises:
            ValidationError: If the query cannot be compiled.
            ConnectionError: If the server cannot be reached.
            RequestError: If the server answers with anything but 200.
        """
        compiled = self.compile()
        return self._interpret(self._send_get(compiled.url))
