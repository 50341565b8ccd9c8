#!/usr/bin/env python3
"""
Entry point: python -m wp_mcp

Launches the WordPress / WooCommerce MCP server.

    python3 -m wp_mcp                          stdio (default)
    python3 -m wp_mcp --transport http         HTTP listener on WP_MCP_HOST:WP_MCP_PORT

Requires WORDPRESS_URL, WORDPRESS_USERNAME and WORDPRESS_APP_PASSWORD.
"""

import argparse
import asyncio
import sys

from .config import Config, ConfigError
from .logger import get_logger

log = get_logger("main")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="wp-mcp", description="WordPress / WooCommerce MCP server")
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    parser.add_argument("--host", help="HTTP bind host (default: WP_MCP_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="HTTP bind port (default: WP_MCP_PORT or 8000)")
    return parser.parse_args(argv)


def run_http(site, host: str, port: int):
    import uvicorn
    from .http_app import create_app

    uvicorn.run(create_app(site), host=host, port=port, log_level="info")


async def run_stdio(site):
    from .server import WPMCPServer

    server = WPMCPServer(site)
    await server.run()


def main(argv=None):
    args = parse_args(argv)

    try:
        Config.load_runtime()
        site = Config.load_site_config()
    except ConfigError as exc:
        log.error(f"Configuration error: {exc}")
        # stderr only; stdout belongs to the protocol
        print(f"wp-mcp: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.transport == "http":
            run_http(site, args.host or Config.HTTP_HOST, args.port or Config.HTTP_PORT)
        else:
            asyncio.run(run_stdio(site))
    except KeyboardInterrupt:
        log.info("Server shutdown requested")
    except Exception as e:
        log.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
