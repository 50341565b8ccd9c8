"""
HTTP listener — the MCP envelope on a single path.

POST /mcp     one JSON-RPC message in, its JSON-RPC response out
              (202 with an empty body for notifications)
GET  /health  liveness + tool count

Usage:
    python3 -m wp_mcp --transport http --port 8000
"""

from contextlib import asynccontextmanager
from typing import Optional, Tuple

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .api.client import RestClient
from .config import Config, SiteConfig
from .logger import get_logger
from .protocol import PARSE_ERROR, make_error
from .router import Router
from .server import close_clients, dispatch_message, load_tools, open_clients

log = get_logger("http")


class HealthResponse(BaseModel):
    status: str = "ok"
    server: str
    version: str
    tools: int


def create_app(
    site: Optional[SiteConfig] = None,
    *,
    clients: Optional[Tuple[RestClient, RestClient]] = None,
    router: Optional[Router] = None,
) -> FastAPI:
    """Build the FastAPI app. Site clients are opened on startup and closed on shutdown."""
    router = router or Router()
    if not router.tool_count:
        load_tools(router)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if clients is not None:
            from . import tools

            tools.set_clients(*clients)
            opened = clients
        else:
            opened = open_clients(site or Config.load_site_config())
        log.info(f"HTTP listener ready — tools={router.tool_count}")
        try:
            yield
        finally:
            await close_clients(*opened)

    app = FastAPI(
        title="WordPress MCP",
        version=Config.SERVER_VERSION,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            server=Config.SERVER_NAME,
            version=Config.SERVER_VERSION,
            tools=router.tool_count,
        )

    @app.post(Config.HTTP_PATH)
    async def mcp_endpoint(request: Request):
        try:
            msg = await request.json()
        except ValueError as exc:
            log.warning(f"Rejected non-JSON body: {exc}")
            return JSONResponse(make_error(None, PARSE_ERROR, "Parse error"), status_code=400)

        response = await dispatch_message(router, msg)
        if response is None:
            return Response(status_code=202)
        return JSONResponse(response)

    return app
