"""Immutable HTTP request.

Frozen metadata with async body access. A request never changes once
received; prefix stripping and path parameter binding produce copies.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from viewkit._internal.asgi import Receive
from viewkit.http.cookies import parse_cookies
from viewkit.http.headers import Headers
from viewkit.http.query import QueryParams


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the path as seen by the current handler: when a router
    is mounted under a prefix, the prefix has been stripped and moved
    onto ``root_path``. ``full_path`` recovers the original.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str] = field(default_factory=dict)
    root_path: str = ""
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    cookies: Mapping[str, str] = field(default_factory=dict)

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Private: body cache, shared between copies of the same request
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def full_path(self) -> str:
        """The path before any mount prefix was stripped."""
        return f"{self.root_path}{self.path}" if self.root_path else self.path

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Full request URL (original path + query string)."""
        qs = self.query.raw
        if qs:
            return f"{self.full_path}?{qs.decode('latin-1')}"
        return self.full_path

    # -- Copies --

    def with_path(self, path: str, root_path: str) -> Request:
        """Return a copy seen from below a mount point."""
        return replace(self, path=path, root_path=root_path)

    def with_path_params(self, params: Mapping[str, str]) -> Request:
        """Return a copy with *params* merged over the existing path params."""
        if not params:
            return self
        return replace(self, path_params={**self.path_params, **params})

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body (cached after the first read)."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        headers = Headers(tuple(scope.get("headers", ())))
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            root_path=scope.get("root_path", ""),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            cookies=parse_cookies(headers.get("cookie", "") or ""),
            _receive=receive,
        )

    @classmethod
    def build(
        cls,
        path: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Build a request without a server, mainly for unit tests.

        *path* may carry a query string::

            Request.build("/games?page=2", headers={"HX-Request": "true"})
        """
        path_part, _, query_string = path.partition("?")
        hdrs = Headers.from_dict(headers or {})
        return cls(
            method=method.upper(),
            path=path_part,
            headers=hdrs,
            query=QueryParams(query_string),
            cookies=parse_cookies(hdrs.get("cookie", "") or ""),
        )
