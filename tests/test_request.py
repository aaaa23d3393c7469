"""Tests for the request plumbing."""

import httpx
import pytest

from ravenrest import ConfigurationError, ConnectionError, ConnectionSettings, RequestBase
from ravenrest.request import parse_body

from .conftest import HOST


@pytest.mark.parametrize("value", [None, {}])
def test_requires_settings(value):
    with pytest.raises(ConfigurationError):
        RequestBase(value)


def test_build_url_without_database(settings):
    with RequestBase(settings) as request:
        assert request.build_url("databases") == f"{HOST}/databases"


def test_build_url_with_database():
    with RequestBase(ConnectionSettings(HOST, "foo")) as request:
        assert request.build_url("static/key") == f"{HOST}/databases/foo/static/key"


def test_verbs_send_one_request_each(server, settings):
    server.reply("GET", "/a", 200).reply("PUT", "/b", 201).reply("DELETE", "/c", 204)
    server.reply("POST", "/d", 200)

    with RequestBase(settings, transport=server.transport) as request:
        assert request._send_get("a").status_code == 200
        assert request._send_put("b", {"x": 1}).status_code == 201
        assert request._send_delete("c").status_code == 204
        assert request._send_post("d", b"raw").status_code == 200

    server.done()
    assert server.methods() == ["GET", "PUT", "DELETE", "POST"]
    assert server.requests[1].headers["content-type"] == "application/json"
    assert server.requests[3].content == b"raw"


def test_transport_failure_is_connection_error(settings):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with RequestBase(settings, transport=httpx.MockTransport(refuse)) as request:
        with pytest.raises(ConnectionError) as exc_info:
            request._send_get("databases")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code is None


def test_supplied_client_is_not_closed(settings, server):
    client = httpx.Client(transport=server.transport)
    RequestBase(settings, client=client).close()
    assert not client.is_closed
    client.close()


class TestParseBody:
    def test_json(self):
        assert parse_body(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_text(self):
        assert parse_body(httpx.Response(500, text="boom")) == "boom"

    def test_empty(self):
        assert parse_body(httpx.Response(404)) is None
