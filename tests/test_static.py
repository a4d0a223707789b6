"""Tests for viewkit.static: static file serving under a mount."""

from pathlib import Path

import pytest

from viewkit.routing.router import Router
from viewkit.static import StaticFiles
from viewkit.testing import TestClient


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create temporary static files, plus one file outside the root."""
    static = tmp_path / "static"
    static.mkdir()
    (static / "style.css").write_text("body { color: red; }")
    (static / "data.unknownext").write_bytes(b"\x00\x01")
    docs = static / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")
    (static / "empty").mkdir()
    (tmp_path / "secret.txt").write_text("do not serve")
    return static


def _router(static_dir: Path, **options: object) -> Router:
    router = Router()
    router.mount("/static", StaticFiles(static_dir, **options))
    return router


class TestStaticFiles:
    async def test_serves_file(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/style.css")
        assert response.status == 200
        assert "text/css" in response.content_type
        assert response.text == "body { color: red; }"
        assert response.header("cache-control") == "public, max-age=3600"

    async def test_unknown_type_is_octet_stream(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/data.unknownext")
        assert response.content_type == "application/octet-stream"
        assert response.body == b"\x00\x01"

    async def test_custom_cache_control(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir, cache_control="no-cache")) as client:
            response = await client.get("/static/style.css")
        assert response.header("cache-control") == "no-cache"

    async def test_missing_file(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/nope.js")
        assert response.status == 404

    async def test_path_traversal_forbidden(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/../secret.txt")
        assert response.status == 403
        assert "do not serve" not in response.text

    async def test_directory_index(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/docs/")
        assert response.status == 200
        assert response.text == "<h1>Docs</h1>"

    async def test_directory_without_slash_redirects(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/docs")
        assert response.status == 301
        assert response.header("location") == "/static/docs/"

    async def test_directory_without_index(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.get("/static/empty/")
        assert response.status == 404

    async def test_rejects_post(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.post("/static/style.css")
        assert response.status == 405
        assert response.header("allow") == "GET, HEAD"

    async def test_head(self, static_dir: Path) -> None:
        async with TestClient(_router(static_dir)) as client:
            response = await client.request("HEAD", "/static/style.css")
        assert response.status == 200
        assert response.body == b""

    def test_directory_resolved(self, static_dir: Path) -> None:
        assert StaticFiles(static_dir / "docs" / "..").directory == static_dir.resolve()
