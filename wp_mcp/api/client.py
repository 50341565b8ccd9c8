"""REST clients for WordPress core (wp/v2) and WooCommerce (wc/v3).

One generic RestClient parameterised by namespace does every round trip;
the family subclasses only add the operations the endpoint table cannot
express (binary media upload, menu route fallback).
"""

import base64
import binascii
import urllib.parse
from typing import Any, Mapping, Optional

import httpx

from ..config import Config, SiteConfig
from ..logger import get_logger
from .endpoints import Endpoint
from .errors import ToolArgumentError, WPAPIError, WPError, WPTransportError

log = get_logger("api")

DEFAULT_TIMEOUT = 30.0


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[dict]:
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None}
    return cleaned or None


def _content_disposition(filename: str) -> str:
    safe = filename.replace("\\", "").replace('"', "")
    try:
        safe.encode("ascii")
    except UnicodeEncodeError:
        fallback = safe.encode("ascii", "ignore").decode() or "upload"
        quoted = urllib.parse.quote(safe, safe="")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"
    return f'attachment; filename="{safe}"'


def _is_missing_route(exc: WPAPIError) -> bool:
    """WordPress answers 404 rest_no_route when no plugin registers the route."""
    return exc.status_code == 404 and "rest_no_route" in exc.body


class RestClient:
    """Pooled HTTP client bound to one REST namespace of one site.

    Every call is exactly one round trip: no retries, no caching. Non-2xx
    responses raise WPAPIError; connection failures and timeouts raise
    WPTransportError.
    """

    NAMESPACE = ""
    UPDATE_METHOD = "PUT"

    def __init__(
        self,
        config: SiteConfig,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.base_url = f"{config.base_url}/wp-json/{self.NAMESPACE}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(config.username, config.password),
            headers={"Accept": "application/json"},
            timeout=timeout if timeout is not None else Config.REQUEST_TIMEOUT or DEFAULT_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    # =====================================================================
    # Transport
    # =====================================================================

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body."""
        path = path.lstrip("/")
        kw: dict[str, Any] = {"params": _clean_params(params)}
        if content is not None:
            kw["content"] = content
        elif json is not None:
            kw["json"] = json
        if headers:
            kw["headers"] = dict(headers)

        log.debug(f"{method} {self.NAMESPACE}/{path}")
        try:
            response = await self._client.request(method, path, **kw)
        except httpx.TimeoutException as exc:
            log.warning(f"{method} {path} timed out: {exc}")
            raise WPTransportError(f"Request to {method} /{self.NAMESPACE}/{path} timed out") from exc
        except httpx.TransportError as exc:
            log.warning(f"{method} {path} transport failure: {exc}")
            raise WPTransportError(
                f"Request to {method} /{self.NAMESPACE}/{path} failed: {exc.__class__.__name__}"
            ) from exc

        if not response.is_success:
            log.info(f"{method} {path} -> {response.status_code}")
            raise WPAPIError(response.status_code, response.text)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    # =====================================================================
    # Resource operations
    # =====================================================================

    async def list(self, resource: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", resource, params=params)

    async def get(self, resource: str, resource_id: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", f"{resource}/{_quote(resource_id)}", params=params)

    async def create(self, resource: str, data: Mapping[str, Any]) -> Any:
        return await self.request("POST", resource, json=dict(data))

    async def update(self, resource: str, resource_id: Any, data: Mapping[str, Any]) -> Any:
        return await self.request(self.UPDATE_METHOD, f"{resource}/{_quote(resource_id)}", json=dict(data))

    async def delete(self, resource: str, resource_id: Any, **params) -> Any:
        return await self.request("DELETE", f"{resource}/{_quote(resource_id)}", params=params)

    async def call(self, endpoint: Endpoint, args: Mapping[str, Any]) -> Any:
        """Run one endpoint-table row: fill the path, send the rest as query or body."""
        remaining = dict(args)
        path = endpoint.path
        for name in endpoint.path_params:
            if remaining.get(name) is None:
                raise ToolArgumentError(f"missing required field(s): {name}")
            path = path.replace(f"{{{name}}}", _quote(remaining.pop(name)))

        if endpoint.sends_body:
            return await self.request(endpoint.method, path, json=remaining or None)
        return await self.request(endpoint.method, path, params=remaining)


def _quote(value: Any) -> str:
    return urllib.parse.quote(str(value), safe="")


class WordPressClient(RestClient):
    """WordPress core resources under /wp-json/wp/v2."""

    NAMESPACE = "wp/v2"
    UPDATE_METHOD = "POST"

    async def upload_media(
        self,
        filename: str,
        content: str,
        content_type: str,
        *,
        title: Optional[str] = None,
        alt_text: Optional[str] = None,
        caption: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Any:
        """Upload a base64-encoded file, then attach metadata in a second call if any was given.

        The media endpoint does not accept a binary body and metadata in the
        same request.
        """
        try:
            raw = base64.b64decode(content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ToolArgumentError(f"content is not valid base64: {exc}") from exc

        created = await self.request(
            "POST",
            "media",
            content=raw,
            headers={
                "Content-Type": content_type,
                "Content-Disposition": _content_disposition(filename),
            },
        )
        log.info(f"Uploaded media {filename!r} ({len(raw)} bytes)")

        meta: dict[str, Any] = {}
        if title:
            meta["title"] = {"raw": title}
        if alt_text:
            meta["alt_text"] = alt_text
        if caption:
            meta["caption"] = {"raw": caption}
        if description:
            meta["description"] = {"raw": description}
        if not meta:
            return created

        media_id = created.get("id") if isinstance(created, dict) else None
        if media_id is None:
            raise WPError("Upload succeeded but the response carried no media id; metadata not applied")
        return await self.update("media", media_id, meta)

    async def list_menus(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            return await self.list("menus", params)
        except WPAPIError as exc:
            if _is_missing_route(exc):
                log.info("Menus route not registered on site; returning empty list")
                return []
            raise

    async def get_menu(self, menu_id: Any) -> Any:
        try:
            return await self.get("menus", menu_id)
        except WPAPIError as exc:
            if _is_missing_route(exc):
                raise WPAPIError(
                    exc.status_code, exc.body,
                    "Menu endpoint not available. Please install a menu plugin.",
                ) from exc
            raise


class WooCommerceClient(RestClient):
    """WooCommerce resources under /wp-json/wc/v3."""

    NAMESPACE = "wc/v3"
    UPDATE_METHOD = "PUT"
