"""Tests for the client facades."""

import pytest

from ravenrest import AsyncQueryRequest, AsyncRavenClient, QueryRequest, RavenClient

from .conftest import HOST


def test_client_shares_settings(server):
    server.reply("GET", "/databases/shop/indexes/Orders/ByStatus", 200, json={"Results": []})
    server.reply("GET", "/docs/Raven/Databases/shop", 200)

    with RavenClient(HOST, database="shop", transport=server.transport) as client:
        query = client.query("Orders/ByStatus")
        assert isinstance(query, QueryRequest)
        assert query.where("Status", "open").results() == {"Results": []}
        assert client.databases.exists("shop") is True
        assert client.attachments.settings.database == "shop"

    server.done()


def test_dynamic_query_from_client(server):
    server.reply("GET", "/indexes/dynamic/Orders", 200, json=[])

    with RavenClient(HOST, transport=server.transport) as client:
        assert client.query().index_name is None
        assert client.query().collection("Orders").results() == []


@pytest.mark.asyncio
async def test_async_client(server):
    server.reply("GET", "/databases/shop/static/logo", 200, content=b"logo")
    server.reply("GET", "/databases/shop/indexes/dynamic/Orders", 200, json=[])

    async with AsyncRavenClient(HOST, database="shop", transport=server.transport) as client:
        assert await client.attachments.get("logo") == b"logo"
        query = client.query()
        assert isinstance(query, AsyncQueryRequest)
        assert await query.collection("Orders").results() == []

    server.done()
