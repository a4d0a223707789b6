"""Static file serving.

A handler that serves files from a directory. Mount it under a prefix;
the router strips the prefix before the request arrives::

    router.mount("/static", StaticFiles("web/static"))
"""

import mimetypes
from pathlib import Path

from viewkit.errors import MethodNotAllowed, NotFound
from viewkit.http.request import Request
from viewkit.http.response import Response


class StaticFiles:
    """Handler that serves files below *directory*.

    Security: resolves symlinks and verifies the final path is within
    the configured directory to prevent path traversal.
    """

    __slots__ = ("_cache_control", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    async def __call__(self, request: Request) -> Response:
        """Serve the file at ``request.path`` relative to the directory."""
        if request.method not in ("GET", "HEAD"):
            raise MethodNotAllowed(frozenset({"GET", "HEAD"}))

        path = request.path
        relative = path.lstrip("/")

        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403, content_type="text/plain; charset=utf-8")

        if file_path.is_dir():
            index_path = file_path / self._index
            if not index_path.is_file():
                raise NotFound(f"No index file in {path!r}")
            if not path.endswith("/"):
                return Response(status=301).with_header("Location", request.root_path + path + "/")
            file_path = index_path

        if not file_path.is_file():
            raise NotFound(f"No static file at {path!r}")

        return self._serve_file(file_path)

    def _serve_file(self, file_path: Path) -> Response:
        """Read a file and build a response."""
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"

        body = file_path.read_bytes()

        return (
            Response(body=body, content_type=content_type)
            .with_header("Content-Length", str(len(body)))
            .with_header("Cache-Control", self._cache_control)
        )
