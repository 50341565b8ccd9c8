"""Tests for the HTTP binding of the MCP envelope."""

import json

import pytest
from fastapi.testclient import TestClient

from wp_mcp.api.client import WooCommerceClient, WordPressClient
from wp_mcp.config import Config
from wp_mcp.http_app import create_app
from wp_mcp.protocol import PARSE_ERROR
from wp_mcp.tools import ALL_TOOLS

from conftest import SITE


@pytest.fixture
def http(site):
    wp = WordPressClient(SITE, transport=site.transport)
    wc = WooCommerceClient(SITE, transport=site.transport)
    app = create_app(clients=(wp, wc))
    with TestClient(app) as client:
        yield client


def rpc(method, params=None, id=1):
    msg = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        msg["params"] = params
    return msg


class TestHttpApp:

    def test_health(self, http):
        resp = http.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok",
            "server": Config.SERVER_NAME,
            "version": Config.SERVER_VERSION,
            "tools": len(ALL_TOOLS),
        }

    def test_initialize(self, http):
        resp = http.post(Config.HTTP_PATH, json=rpc("initialize", {"protocolVersion": "2024-11-05"}))
        assert resp.status_code == 200
        assert resp.json()["result"]["serverInfo"]["name"] == Config.SERVER_NAME

    def test_tools_list(self, http):
        resp = http.post(Config.HTTP_PATH, json=rpc("tools/list", id=2))
        body = resp.json()
        assert body["id"] == 2
        assert len(body["result"]["tools"]) == len(ALL_TOOLS)

    def test_tools_call(self, http, site):
        site.respond("GET", "/wp-json/wc/v3/products/42", json_body={"id": 42, "name": "Widget"})

        resp = http.post(Config.HTTP_PATH, json=rpc("tools/call", {"name": "wc_get_product", "arguments": {"id": 42}}))

        result = resp.json()["result"]
        assert "isError" not in result
        assert json.loads(result["content"][0]["text"]) == {"id": 42, "name": "Widget"}
        assert site.last.url.path == "/wp-json/wc/v3/products/42"

    def test_tool_error_is_still_http_200(self, http, site):
        site.respond("GET", "/wp-json/wc/v3/products/999", status=404, text='{"code":"x"}')
        resp = http.post(Config.HTTP_PATH, json=rpc("tools/call", {"name": "wc_get_product", "arguments": {"id": 999}}))
        assert resp.status_code == 200
        assert resp.json()["result"]["isError"] is True

    def test_notification_accepted(self, http):
        resp = http.post(Config.HTTP_PATH, json={"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert resp.status_code == 202
        assert resp.content == b""

    def test_invalid_json(self, http):
        resp = http.post(Config.HTTP_PATH, content=b"{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == PARSE_ERROR

    def test_unknown_method(self, http):
        resp = http.post(Config.HTTP_PATH, json=rpc("resources/list"))
        assert resp.json()["error"]["code"] == -32601
