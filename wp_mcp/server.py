"""
WordPress MCP Server — raw JSON-RPC over stdio

Transport → Protocol → Router → Tools → REST client

Each request is serviced in its own task, so several tool calls can have
HTTP requests in flight against the site at once. The only shared state is
the read-only site config and the pooled HTTP clients.
"""

import asyncio
import importlib
import signal
from typing import Any, Dict, Optional, Set

from .api.client import WooCommerceClient, WordPressClient
from .config import Config, SiteConfig
from .logger import get_logger
from .protocol import (
    INTERNAL_ERROR,
    ProtocolError,
    make_error,
    make_response,
    validate_message,
)
from .router import Router
from .transport import RawStdioTransport

log = get_logger("server")

# Tool modules to load
TOOL_MODULES = [
    "wp_mcp.tools.wordpress_tools",
    "wp_mcp.tools.woocommerce_tools",
]


def load_tools(router: Router):
    """Import and register every tool module."""
    for module_path in TOOL_MODULES:
        mod = importlib.import_module(module_path)
        tools = getattr(mod, "TOOLS", [])
        handler = getattr(mod, "handle_tool", None)
        if not tools or handler is None:
            raise RuntimeError(f"Module {module_path} missing TOOLS or handle_tool")
        router.register_tools_module(tools, handler)
        log.info(f"Loaded {len(tools)} tools from {module_path}")


def open_clients(site: SiteConfig, timeout: Optional[float] = None):
    """Create both site clients and inject them into the tool modules."""
    from . import tools

    wp = WordPressClient(site, timeout=timeout)
    wc = WooCommerceClient(site, timeout=timeout)
    tools.set_clients(wp, wc)
    log.info(f"Site clients ready for {site.base_url}")
    return wp, wc


async def close_clients(*clients):
    from . import tools

    tools.set_clients(None, None)
    for client in clients:
        if client is None:
            continue
        try:
            await client.aclose()
        except Exception as exc:
            log.error(f"Error closing client: {exc}")


async def dispatch_message(router: Router, msg: Any) -> Optional[Dict[str, Any]]:
    """Process one JSON-RPC message; returns the response, or None for notifications."""
    request_id = msg.get("id") if isinstance(msg, dict) else None

    try:
        msg_type = validate_message(msg)
        result = await router.route(msg_type, msg)
        if result is None or msg_type != "request":
            return None
        return make_response(request_id, result)

    except ProtocolError as exc:
        log.warning(f"Protocol error: {exc.message} (code={exc.code})")
        return make_error(request_id, exc.code, exc.message, exc.data)

    except Exception as exc:
        log.error(f"Unhandled error: {exc}", exc_info=True)
        return make_error(request_id, INTERNAL_ERROR, str(exc))


class WPMCPServer:
    """
    WordPress / WooCommerce MCP server on stdio.

    Usage:
        server = WPMCPServer(Config.load_site_config())
        await server.run()
    """

    def __init__(
        self,
        site: SiteConfig,
        *,
        transport: Optional[RawStdioTransport] = None,
        router: Optional[Router] = None,
    ):
        self._site = site
        self._transport = transport or RawStdioTransport()
        self._router = router or Router()
        self._clients = ()
        self._tasks: Set[asyncio.Task] = set()
        self._running = False
        self._run_task: Optional[asyncio.Task] = None

    @property
    def router(self) -> Router:
        return self._router

    # ── server lifecycle ───────────────────────────────────────────

    async def run(self):
        """Main server loop."""
        log.info(f"WP MCP Server starting — version={Config.SERVER_VERSION}")

        if not self._router.tool_count:
            load_tools(self._router)

        self._run_task = asyncio.current_task()
        await self._transport.start()
        self._clients = open_clients(self._site)

        loop = asyncio.get_running_loop()
        installed = []
        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(sig, self.stop)
                installed.append(sig)
            except (NotImplementedError, RuntimeError):
                pass  # Windows / non-main thread

        self._running = True
        log.info(f"Server ready — tools={self._router.tool_count}")

        try:
            while self._running:
                try:
                    result = await self._transport.read_message()
                except ProtocolError as exc:
                    await self._transport.write_message(make_error(None, exc.code, exc.message))
                    continue

                if result is None:
                    log.info("EOF on stdin — shutting down")
                    break

                _, parsed = result
                task = asyncio.create_task(self._serve(parsed))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

        except asyncio.CancelledError:
            log.info("Server cancelled")
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)
            await self.shutdown()

    async def _serve(self, msg: Any):
        response = await dispatch_message(self._router, msg)
        if response is not None:
            await self._transport.write_message(response)

    def stop(self):
        self._running = False
        # unblock the pending readline
        if self._run_task is not None and not self._run_task.done():
            self._run_task.cancel()

    async def shutdown(self):
        """Graceful shutdown: finish in-flight calls, then close clients."""
        self._running = False
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await close_clients(*self._clients)
        self._clients = ()
        await self._transport.close()
        log.info("Shutdown complete")
