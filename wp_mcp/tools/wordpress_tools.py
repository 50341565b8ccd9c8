"""
WordPress core tools — wp/v2

Posts, pages, media (+ binary upload), comments, users, categories, tags,
menus, settings and search. Every tool is generated from
WORDPRESS_ENDPOINTS; upload and the menu routes have dedicated handlers.
"""

from typing import Any, Dict, Optional

from ..api.client import WordPressClient
from ..api.endpoints import WORDPRESS_ENDPOINTS, index_endpoints
from ..logger import get_logger
from .common import build_tools, endpoint_handler, run_tool

log = get_logger("tools.wordpress")

# Module-level state (injected by server)
_client: Optional[WordPressClient] = None


def set_client(client: Optional[WordPressClient]):
    global _client
    _client = client


def get_client() -> Optional[WordPressClient]:
    return _client


# ── Tool definitions ─────────────────────────────────────────────────────────

ENDPOINTS = index_endpoints(WORDPRESS_ENDPOINTS)

TOOLS = build_tools(WORDPRESS_ENDPOINTS)

_SCHEMAS = {t["name"]: t["inputSchema"] for t in TOOLS}


# ── Special handlers ─────────────────────────────────────────────────────────

async def _h_upload_media(client: WordPressClient, args: Dict[str, Any]) -> Any:
    return await client.upload_media(
        args["filename"],
        args["content"],
        args["content_type"],
        title=args.get("title"),
        alt_text=args.get("alt_text"),
        caption=args.get("caption"),
        description=args.get("description"),
    )


async def _h_list_menus(client: WordPressClient, args: Dict[str, Any]) -> Any:
    return await client.list_menus(args)


async def _h_get_menu(client: WordPressClient, args: Dict[str, Any]) -> Any:
    return await client.get_menu(args["id"])


_SPECIAL = {
    "wp_upload_media": _h_upload_media,
    "wp_list_menus": _h_list_menus,
    "wp_get_menu": _h_get_menu,
}

# ── Handler Dispatch Table ───────────────────────────────────────────────────

_HANDLERS = {
    name: _SPECIAL.get(name) or endpoint_handler(endpoint)
    for name, endpoint in ENDPOINTS.items()
}


async def handle_tool(name: str, args: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Route wp_* tool calls to handlers."""
    return await run_tool(name, args, handlers=_HANDLERS, schemas=_SCHEMAS, client=_client, log=log)
