"""
WooCommerce tools — wc/v3

Products (+ variations, categories, tags, reviews), orders (+ notes),
customers, coupons, batch variants, reports, taxes, shipping zones and
methods, payment gateways, system status, settings and webhooks.
"""

from typing import Any, Dict, Optional

from ..api.client import WooCommerceClient
from ..api.endpoints import WOOCOMMERCE_ENDPOINTS, index_endpoints
from ..logger import get_logger
from .common import build_tools, endpoint_handler, run_tool

log = get_logger("tools.woocommerce")

_client: Optional[WooCommerceClient] = None


def set_client(client: Optional[WooCommerceClient]):
    global _client
    _client = client


def get_client() -> Optional[WooCommerceClient]:
    return _client


ENDPOINTS = index_endpoints(WOOCOMMERCE_ENDPOINTS)

TOOLS = build_tools(WOOCOMMERCE_ENDPOINTS)

_SCHEMAS = {t["name"]: t["inputSchema"] for t in TOOLS}

_HANDLERS = {name: endpoint_handler(endpoint) for name, endpoint in ENDPOINTS.items()}


async def handle_tool(name: str, args: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Route wc_* tool calls to handlers."""
    return await run_tool(name, args, handlers=_HANDLERS, schemas=_SCHEMAS, client=_client, log=log)
