"""Shared tool plumbing: catalog building, result wrapping and the per-call runner."""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional

from ..api.client import RestClient
from ..api.endpoints import Endpoint
from ..api.errors import ToolArgumentError, WPError
from ..protocol import text_content, tool_result_content
from .coercion import validate_arguments

Handler = Callable[[Any, Dict[str, Any]], Awaitable[Any]]


def build_tools(endpoints: Iterable[Endpoint]) -> List[Dict[str, Any]]:
    """MCP tool definitions, one per endpoint row."""
    return [
        {
            "name": ep.name,
            "description": f"{ep.description} ({ep.method} {ep.path})",
            "inputSchema": ep.input_schema(),
        }
        for ep in endpoints
    ]


def endpoint_handler(endpoint: Endpoint) -> Handler:
    """Handler that forwards a validated call straight through RestClient.call."""

    async def _handler(client: RestClient, args: Dict[str, Any]) -> Any:
        return await client.call(endpoint, args)

    _handler.__name__ = f"_h_{endpoint.name}"
    return _handler


def _fmt(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _ok(data: Any) -> dict:
    return tool_result_content([text_content(_fmt(data))])


def _err(msg: str) -> dict:
    return tool_result_content([text_content(msg)], is_error=True)


async def run_tool(
    name: str,
    args: Optional[Mapping[str, Any]],
    *,
    handlers: Mapping[str, Handler],
    schemas: Mapping[str, Dict[str, Any]],
    client: Optional[RestClient],
    log: logging.Logger,
) -> dict:
    """Validate, invoke and wrap one tool call. Never raises."""
    if args is None:
        return _err(f"Missing arguments for tool: {name}")

    handler = handlers.get(name)
    if handler is None:
        return _err(f"Unknown tool: {name}")

    if client is None:
        return _err(f"Error: {name} is unavailable, site client not configured")

    try:
        typed = validate_arguments(schemas[name], args)
        result = await handler(client, typed)
    except ToolArgumentError as exc:
        log.info(f"Tool {name} rejected arguments: {exc}")
        return _err(f"Invalid arguments for {name}: {exc}")
    except WPError as exc:
        log.warning(f"Tool {name} failed: {exc}")
        return _err(f"Error: {exc}")
    except Exception as exc:
        log.error(f"Tool {name} error: {exc}", exc_info=True)
        return _err(f"Error: {exc}")

    log.debug(f"Tool {name} ok")
    return _ok(result)
