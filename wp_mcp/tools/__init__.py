"""
MCP tools for a WordPress + WooCommerce site

The router registers each family module (TOOLS + handle_tool) directly.

Modules:
  wordpress_tools    — wp_* tools over /wp-json/wp/v2
  woocommerce_tools  — wc_* tools over /wp-json/wc/v3
"""

from typing import Optional

from ..api.client import WooCommerceClient, WordPressClient
from ..api.endpoints import index_endpoints
from . import woocommerce_tools, wordpress_tools

# Aggregate all tools for router discovery; also rejects cross-family duplicates
ALL_ENDPOINTS = index_endpoints(wordpress_tools.ENDPOINTS.values(), woocommerce_tools.ENDPOINTS.values())
ALL_TOOLS = wordpress_tools.TOOLS + woocommerce_tools.TOOLS


def set_clients(wordpress: Optional[WordPressClient], woocommerce: Optional[WooCommerceClient]):
    """Inject the site clients used by every tool call."""
    wordpress_tools.set_client(wordpress)
    woocommerce_tools.set_client(woocommerce)

