"""
WordPress / WooCommerce MCP Server

Exposes the wp/v2 and wc/v3 REST APIs of one site as MCP tools,
over raw stdio JSON-RPC or an HTTP listener.
"""

__version__ = "1.0.0"

from .config import Config, ConfigError, SiteConfig
from .router import Router
from .server import WPMCPServer, dispatch_message, load_tools
