"""Tests for the album data MCP server."""

import json

import pytest
from mcp.shared.exceptions import McpError

from albumdata.mcp_server import AlbumDataInput, AlbumDataServer


@pytest.fixture
def server(engine):
    return AlbumDataServer(engine=engine)


@pytest.mark.asyncio
async def test_get_album_data_tool(server):
    content = await server.call_tool("get_album_data", {"artist": "Wild Child", "albums": ["Pillow Talk"]})

    payload = json.loads(content[0].text)
    assert payload["artist"] == "Wild Child"
    assert [row["track_n"] for row in payload["rows"]] == [1, 2, 3]
    assert payload["provider_misses"] == []


@pytest.mark.asyncio
async def test_empty_albums_rejected(server):
    with pytest.raises(McpError):
        await server.call_tool("get_album_data", {"artist": "Wild Child", "albums": []})


@pytest.mark.asyncio
async def test_unknown_tool(server):
    with pytest.raises(McpError):
        await server.call_tool("enrich_music", {})


def test_input_defaults():
    data = AlbumDataInput(artist="Wild Child", albums=["Expectations"])
    assert data.parallel is True
    assert data.concurrency_strategy == "default"
