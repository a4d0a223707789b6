"""Mutable per-request response sink.

A view and its mixins share one ``ResponseWriter`` while loading. Header
changes are free until the response is committed; writing a status or
any body text commits it. The registration layer treats a committed
writer as "already handled" and never renders over it.
"""

from viewkit.http.response import Response


class ResponseWriter:
    """Collects status, headers, and body for a single response.

    Usage inside a loader::

        def load(self, request, response, app):
            if not request.cookies.get("session"):
                return response.redirect("/login")
            response.set_header("Cache-Control", "no-store")
            return False
    """

    __slots__ = ("_chunks", "_committed", "_headers", "content_type", "status")

    def __init__(self) -> None:
        self.status: int = 200
        self.content_type: str = "text/html; charset=utf-8"
        self._headers: list[tuple[str, str]] = []
        self._chunks: list[bytes] = []
        self._committed: bool = False

    # -- Headers --

    def set_header(self, name: str, value: str) -> None:
        """Set *name*, replacing any earlier values."""
        self.delete_header(name)
        self._headers.append((name, value))

    def add_header(self, name: str, value: str) -> None:
        """Append a value for *name*, keeping earlier ones."""
        self._headers.append((name, value))

    def get_header(self, name: str, default: str | None = None) -> str | None:
        lower = name.lower()
        for key, value in reversed(self._headers):
            if key.lower() == lower:
                return value
        return default

    def delete_header(self, name: str) -> None:
        lower = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lower]

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    # -- Status and body --

    @property
    def committed(self) -> bool:
        """True once a status or body has been written."""
        return self._committed

    def write_status(self, status: int) -> None:
        self.status = status
        self._committed = True

    def write(self, data: str | bytes) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._chunks.append(data)
        self._committed = True

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    # -- Shortcuts that finish the response --

    def redirect(self, url: str, status: int = 302) -> bool:
        """Write a redirect. Returns True so loaders can ``return`` it."""
        self.set_header("Location", url)
        self.write_status(status)
        return True

    def error(self, status: int, detail: str) -> bool:
        """Replace the body with a plain-text error. Returns True."""
        self.content_type = "text/plain; charset=utf-8"
        self.set_header("X-Content-Type-Options", "nosniff")
        self._chunks = []
        self.write_status(status)
        self.write(detail + "\n")
        return True

    def to_response(self) -> Response:
        """Freeze the collected state into a ``Response``."""
        return Response(
            body=self.body,
            status=self.status,
            content_type=self.content_type,
            headers=self.headers,
        )
