"""Shared fixtures: a recorded fake WordPress site and clients bound to it."""

import json
import os
import tempfile

# Logger writes to files only; keep them out of the home directory during tests
os.environ.setdefault("WP_MCP_LOG_DIR", tempfile.mkdtemp(prefix="wp-mcp-test-logs-"))

import httpx
import pytest

from wp_mcp import tools
from wp_mcp.api.client import WooCommerceClient, WordPressClient
from wp_mcp.config import SiteConfig
from wp_mcp.router import Router
from wp_mcp.server import load_tools

SITE = SiteConfig(base_url="https://shop.example.com", username="admin", password="app-pass")


class FakeSite:
    """
    Stand-in for the remote site behind an httpx.MockTransport.

    Records every request; answers from routes registered with respond(),
    falling back to 200 {"ok": true}.
    """

    def __init__(self):
        self.requests = []
        self._routes = {}

    def respond(self, method, path, status=200, json_body=None, text=None, exc=None):
        self._routes[(method, path)] = (status, json_body, text, exc)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, json_body, text, exc = self._routes.get(
            (request.method, request.url.path), (200, {"ok": True}, None, None)
        )
        if exc is not None:
            raise exc
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def router():
    r = Router()
    load_tools(r)
    return r


@pytest.fixture
def site():
    return FakeSite()


@pytest.fixture
async def clients(site):
    wp = WordPressClient(SITE, transport=site.transport)
    wc = WooCommerceClient(SITE, transport=site.transport)
    tools.set_clients(wp, wc)
    yield wp, wc
    tools.set_clients(None, None)
    await wp.aclose()
    await wc.aclose()
