"""
REST HTTP client for a microfoxx service: request dispatch and session header.
"""

import json
import logging
from typing import Any, Optional, Protocol, Sequence, Union
from urllib.parse import quote

import httpx
from pydantic_core import PydanticSerializationError, to_jsonable_python

from microfoxx.errors import DecodeError, TransportError
from microfoxx.models.session import ConnectionParams, SessionInfo

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Id"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
DEFAULT_TIMEOUT = 10.0
USER_AGENT = "microfoxx-python/0.1.0"

QueryParams = Union[dict[str, str], Sequence[tuple[str, str]], None]


class Sender(Protocol):
    """Anything that can send a prepared request. httpx.AsyncClient qualifies."""

    async def send(self, request: httpx.Request) -> httpx.Response: ...


def segment(value: str, safe: str = "") -> str:
    """Percent-encode one path segment so it cannot change the route."""
    return quote(value, safe=safe)


def encode_body(body: Any) -> bytes:
    """JSON-encode a request body. Models are dumped by alias."""
    try:
        return json.dumps(to_jsonable_python(body, by_alias=True), separators=(",", ":")).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise DecodeError(f"Failed to encode request body: {e}")


class HttpClient:
    def __init__(
        self,
        params: ConnectionParams,
        sender: Optional[Sender] = None,
        session: Optional[SessionInfo] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._endpoint = params.endpoint
        self._session = session
        self._owns_sender = sender is None
        self._sender: Sender = sender or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def session(self) -> Optional[SessionInfo]:
        return self._session

    def set_session(self, session: SessionInfo) -> None:
        self._session = session

    def prepare(
        self,
        method: str,
        path: str,
        params: QueryParams = None,
        body: Optional[bytes] = None,
        authenticated: bool = True,
    ) -> httpx.Request:
        headers: dict[str, str] = {}
        if body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if authenticated:
            # No session yet: the server rejects the empty header as an auth fault.
            headers[SESSION_HEADER] = self._session.session_id if self._session else ""
        return httpx.Request(
            method,
            self._endpoint + path,
            params=params or None,
            headers=headers,
            content=body,
        )

    async def send(self, request: httpx.Request) -> httpx.Response:
        logger.debug("%s %s", request.method, request.url)
        try:
            resp = await self._sender.send(request)
        except httpx.RequestError as e:
            logger.debug("%s %s failed: %r", request.method, request.url, e)
            raise TransportError(f"{request.method} {request.url.path}: {e}")
        logger.debug("%s %s -> %d", request.method, request.url.path, resp.status_code)
        return resp

    async def call(
        self,
        method: str,
        path: str,
        params: QueryParams = None,
        body: Any = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """One round trip. Raises TransportError or DecodeError, never on HTTP status."""
        content = encode_body(body) if body is not None else None
        return await self.send(self.prepare(method, path, params, content, authenticated))

    async def close(self) -> None:
        if self._owns_sender:
            await self._sender.aclose()  # type: ignore[attr-defined]
