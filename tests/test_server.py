"""
End-to-end tests for the stdio server loop.

The transport is fed from an in-memory StreamReader and writes into a
BytesIO, so the full read → dispatch → write path runs without a process.
"""

import asyncio
import io
import json

import pytest

from wp_mcp import server as server_mod
from wp_mcp.protocol import INVALID_REQUEST, PARSE_ERROR
from wp_mcp.server import WPMCPServer
from wp_mcp.tools import ALL_TOOLS
from wp_mcp.transport import LINE_LIMIT, RawStdioTransport

from conftest import SITE


def feed(*lines, limit=LINE_LIMIT):
    reader = asyncio.StreamReader(limit=limit)
    for line in lines:
        data = line if isinstance(line, bytes) else json.dumps(line).encode()
        reader.feed_data(data + b"\n")
    reader.feed_eof()
    return reader


def responses(out: io.BytesIO):
    raw = out.getvalue().decode()
    assert raw.endswith("\n")
    return [json.loads(line) for line in raw.splitlines()]


@pytest.fixture
def stdio_server(monkeypatch, clients):
    monkeypatch.setattr(server_mod, "open_clients", lambda site: clients)

    def build(*lines, limit=LINE_LIMIT):
        out = io.BytesIO()
        transport = RawStdioTransport(reader=feed(*lines, limit=limit), writer=out, limit=limit)
        return WPMCPServer(SITE, transport=transport), out

    return build


class TestStdioServer:

    @pytest.mark.asyncio
    async def test_initialize_and_list(self, stdio_server):
        server, out = stdio_server(
            {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2024-11-05"}},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
        )

        await server.run()

        by_id = {r["id"]: r for r in responses(out)}
        assert set(by_id) == {1, 2}
        assert by_id[1]["result"]["serverInfo"]["name"] == "wp-mcp"
        assert len(by_id[2]["result"]["tools"]) == len(ALL_TOOLS)

    @pytest.mark.asyncio
    async def test_parse_error_then_continue(self, stdio_server):
        server, out = stdio_server(
            b"{not json",
            b"",
            {"jsonrpc": "2.0", "id": 7, "method": "ping"},
        )

        await server.run()

        lines = responses(out)
        assert lines[0]["id"] is None
        assert lines[0]["error"]["code"] == PARSE_ERROR
        assert lines[1] == {"jsonrpc": "2.0", "id": 7, "result": {}}

    @pytest.mark.asyncio
    async def test_tool_call_hits_site(self, stdio_server, site):
        site.respond("GET", "/wp-json/wp/v2/posts/3", json_body={"id": 3})
        server, out = stdio_server(
            {"jsonrpc": "2.0", "id": "a", "method": "tools/call",
             "params": {"name": "wp_get_post", "arguments": {"id": 3}}},
        )

        await server.run()

        (reply,) = responses(out)
        assert reply["id"] == "a"
        assert json.loads(reply["result"]["content"][0]["text"]) == {"id": 3}
        assert len(site.requests) == 1

    @pytest.mark.asyncio
    async def test_one_line_per_response_under_concurrency(self, stdio_server):
        server, out = stdio_server(*[
            {"jsonrpc": "2.0", "id": i, "method": "tools/call",
             "params": {"name": "wc_get_order", "arguments": {"id": i}}}
            for i in range(1, 11)
        ])

        await server.run()

        assert sorted(r["id"] for r in responses(out)) == list(range(1, 11))

    @pytest.mark.asyncio
    async def test_shutdown_releases_clients(self, stdio_server):
        from wp_mcp.tools import wordpress_tools

        server, _ = stdio_server()
        await server.run()
        assert wordpress_tools.get_client() is None

    @pytest.mark.asyncio
    async def test_non_utf8_line_is_parse_error(self, stdio_server):
        server, out = stdio_server(
            b'{"jsonrpc":"2.0","id":1,"method":"ping","x":"\xff"}',
            {"jsonrpc": "2.0", "id": 2, "method": "ping"},
        )

        await server.run()

        lines = responses(out)
        assert lines[0]["id"] is None
        assert lines[0]["error"]["code"] == PARSE_ERROR
        assert lines[1] == {"jsonrpc": "2.0", "id": 2, "result": {}}

    @pytest.mark.asyncio
    async def test_oversized_line_is_skipped(self, stdio_server):
        big = {"jsonrpc": "2.0", "id": 1, "method": "tools/call",
               "params": {"name": "wp_upload_media", "arguments": {"content": "A" * 4096}}}
        server, out = stdio_server(
            big,
            {"jsonrpc": "2.0", "id": 2, "method": "ping"},
            limit=1024,
        )

        await server.run()

        lines = responses(out)
        assert lines[0]["error"]["code"] == INVALID_REQUEST
        assert "1024" in lines[0]["error"]["message"]
        assert lines[1] == {"jsonrpc": "2.0", "id": 2, "result": {}}

    @pytest.mark.asyncio
    async def test_oversized_line_at_default_limit(self, stdio_server):
        server, out = stdio_server(
            b'"' + b"A" * (LINE_LIMIT + 16) + b'"',
            {"jsonrpc": "2.0", "id": 2, "method": "ping"},
        )

        await server.run()

        lines = responses(out)
        assert lines[0]["error"]["code"] == INVALID_REQUEST
        assert lines[1]["id"] == 2
