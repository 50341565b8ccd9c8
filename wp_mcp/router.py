"""
Method router for the MCP envelope.

  initialize            capabilities handshake
  ping                  empty result
  tools/list            every registered tool definition
  tools/call            dispatch to the owning tool module
  notifications/*       accepted, never answered

A tool module contributes TOOLS (list of MCP tool dicts) and an async
handle_tool(name, args) that returns a tools/call result. Tool failures
come back as results with isError set; only envelope problems raise
ProtocolError.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional

from .config import Config
from .logger import get_logger
from .protocol import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    ProtocolError,
    initialize_result,
    text_content,
    tool_result_content,
    tools_list_result,
)

log = get_logger("router")

ToolHandler = Callable[[str, Optional[Dict[str, Any]]], Awaitable[Dict[str, Any]]]


class Router:

    def __init__(self):
        self._tools: List[Dict[str, Any]] = []
        self._owners: Dict[str, ToolHandler] = {}
        self.initialized = False
        self._methods = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    def register_tools_module(self, tools_list: List[Dict], handler: ToolHandler):
        """Add a module's tools; a name may be owned by one module only."""
        clashes = [t["name"] for t in tools_list if t["name"] in self._owners]
        if clashes:
            raise ValueError(f"Tool already registered: {', '.join(clashes)}")
        for tool in tools_list:
            self._owners[tool["name"]] = handler
        self._tools.extend(tools_list)
        log.info(f"Registered {len(tools_list)} tools")

    async def route(self, msg_type: str, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Result payload for a request, or None when nothing should be sent back."""
        if msg_type in ("response", "error"):
            return None  # we never issue requests, so nothing is waiting on these

        method = msg.get("method", "")
        if method in ("initialized", "notifications/initialized"):
            self.initialized = True
            return None
        if msg_type == "notification" or method.startswith("notifications/"):
            return None

        handler = self._methods.get(method)
        if handler is None:
            raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {method}")
        return await handler(msg.get("params") or {})

    # ── methods ──────────────────────────────────────────────────

    async def _initialize(self, params: Dict) -> Dict[str, Any]:
        client = params.get("clientInfo") or {}
        log.info(f"initialize from {client.get('name', '?')} (protocol {params.get('protocolVersion', '?')})")
        return initialize_result(
            server_name=Config.SERVER_NAME,
            server_version=Config.SERVER_VERSION,
            protocol_version=Config.PROTOCOL_VERSION,
        )

    async def _ping(self, params: Dict) -> Dict[str, Any]:
        return {}

    async def _tools_list(self, params: Dict) -> Dict[str, Any]:
        return tools_list_result(self._tools)

    async def _tools_call(self, params: Dict) -> Dict[str, Any]:
        if not isinstance(params, dict):
            raise ProtocolError(INVALID_PARAMS, "tools/call params must be an object")
        name = params.get("name")
        if not name:
            raise ProtocolError(INVALID_PARAMS, "Missing tool name")
        if not isinstance(name, str):
            raise ProtocolError(INVALID_PARAMS, f"Tool name must be a string, got {type(name).__name__}")

        handler = self._owners.get(name)
        if handler is None:
            log.warning(f"Unknown tool requested: {name}")
            return tool_result_content([text_content(f"Unknown tool: {name}")], is_error=True)

        try:
            return await handler(name, params.get("arguments"))
        except Exception as exc:
            log.error(f"Tool {name} error: {exc}", exc_info=True)
            return tool_result_content([text_content(f"Error: {exc}")], is_error=True)

    @property
    def tool_count(self) -> int:
        return len(self._tools)

    @property
    def tools(self) -> List[Dict[str, Any]]:
        return list(self._tools)
