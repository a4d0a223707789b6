"""Tests for viewkit.routing.builder: fluent route registration."""

from dataclasses import dataclass
from typing import Any

import pytest

from viewkit.app import App
from viewkit.config import AppConfig
from viewkit.http.request import Request
from viewkit.http.response import Response
from viewkit.http.writer import ResponseWriter
from viewkit.routing.builder import RouteBuilder
from viewkit.routing.router import Router
from viewkit.testing import TestClient


def _write_ref(response: ResponseWriter, file_name: str, block_name: str, view: Any) -> None:
    response.write(f"{file_name}[{block_name}]")


def _app(**config: Any) -> App[None]:
    return App(None, config=AppConfig(**config), render_func=_write_ref)


@dataclass
class Page:
    def load(self, request, response, app) -> bool:
        return False


@dataclass
class Adaptive:
    fragment: bool = False

    def load(self, request, response, app) -> bool:
        self.fragment = request.headers.get("HX-Request") == "true"
        return False

    def should_render_fragment(self) -> bool:
        return self.fragment


def _tag(value: str):
    async def mw(request: Request, next) -> Response:
        response = await next(request)
        return response.with_header("X-Tag", value)

    return mw


class TestRouteBuilder:
    def test_app_router_returns_builder(self) -> None:
        app = _app()
        builder = app.router()
        assert isinstance(builder, RouteBuilder)
        assert isinstance(builder.build(), Router)
        assert builder.router is builder.build()

    def test_debug_flows_from_config(self) -> None:
        assert _app(debug=True).router().build().debug is True

    async def test_pages_and_handlers(self) -> None:
        router = (
            _app()
            .router()
            .page("/", Page, template="home/Home")
            .page("/about", Page)
            .adaptive_page("/games", Adaptive, full="games/List", fragment="games/List:Rows")
            .handle("GET /healthz", lambda request: "ok")
            .build()
        )
        async with TestClient(router) as client:
            assert (await client.get("/")).text == "home/Home[Home]"
            assert (await client.get("/about")).text == "Page[Page]"
            assert (await client.get("/games")).text == "games/List[List]"
            assert (await client.fragment("/games")).text == "games/List[Rows]"
            assert (await client.get("/healthz")).text == "ok"

    async def test_group(self) -> None:
        router = (
            _app()
            .router()
            .group("/games", lambda games: (
                games.page("/", Page, template="games/Listing")
                .page("/{id}", Page, template="games/Detail")
            ))
            .build()
        )
        async with TestClient(router) as client:
            assert (await client.get("/games/")).text == "games/Listing[Listing]"
            assert (await client.get("/games/3")).text == "games/Detail[Detail]"

    async def test_mount_group(self) -> None:
        class Games:
            def register_routes(self, app: App[Any]) -> Router:
                return app.router().page("/{id}", Page, template="games/Detail").build()

        router = _app().router().mount_group("/games", Games).build()
        async with TestClient(router) as client:
            assert (await client.get("/games/3")).text == "games/Detail[Detail]"

    async def test_use_applies_to_later_routes_only(self) -> None:
        router = (
            _app()
            .router()
            .page("/before", Page)
            .use(_tag("site"))
            .page("/after", Page)
            .build()
        )
        async with TestClient(router) as client:
            assert (await client.get("/before")).header("x-tag") is None
            assert (await client.get("/after")).header("x-tag") == "site"

    async def test_builder_middleware_is_outermost(self) -> None:
        order: list[str] = []

        def tracking(name: str):
            async def mw(request: Request, next) -> Response:
                order.append(name)
                return await next(request)

            return mw

        router = (
            _app()
            .router()
            .use(tracking("builder"))
            .page("/", Page, middleware=[tracking("route")])
            .build()
        )
        async with TestClient(router) as client:
            await client.get("/")
        assert order == ["builder", "route"]

    async def test_use_wraps_groups(self) -> None:
        router = (
            _app()
            .router()
            .use(_tag("site"))
            .group("/games", lambda games: games.page("/{id}", Page))
            .build()
        )
        async with TestClient(router) as client:
            assert (await client.get("/games/1")).header("x-tag") == "site"

    async def test_static(self, tmp_path) -> None:
        (tmp_path / "app.css").write_text("body {}")
        router = _app().router().static("/static", tmp_path).build()
        async with TestClient(router) as client:
            response = await client.get("/static/app.css")
        assert response.status == 200
        assert response.text == "body {}"

    async def test_group_router_frozen_after_first_request(self) -> None:
        groups: list[RouteBuilder[None]] = []

        def setup(games: RouteBuilder[None]) -> None:
            groups.append(games)
            games.handle("/a", lambda request: "a")

        router = _app().router().group("/games", setup).build()
        async with TestClient(router) as client:
            await client.get("/games/a")
        with pytest.raises(RuntimeError, match="started serving"):
            groups[0].handle("/late", lambda request: "late")
