"""Tests for viewkit.app: kida rendering through App."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from viewkit.app import App, view_context
from viewkit.config import AppConfig
from viewkit.errors import TemplateRenderError
from viewkit.http.writer import ResponseWriter
from viewkit.mixins import BasePage
from viewkit.testing import TestClient, assert_is_fragment


@dataclass
class Services:
    site_name: str = "Chess Club"


@dataclass
class GamePage:
    page: BasePage = field(default_factory=BasePage)
    title: str = ""
    moves: list[str] = field(default_factory=list)

    def load(self, request, response, app) -> bool:
        self.page.title = "Game"
        self.title = f"Game {request.path_params.get('id', '?')}"
        self.moves = ["e4", "e5"]
        return False


GAME_PAGE = """<html><head><title>{{ app.site_name }}</title></head>
<body class="{{ page.body_class }}">
{% block GamePage %}<h1>{{ view.title }}</h1>{% endblock %}
{% block Moves %}<ul>{% for m in moves %}<li>{{ m }}</li>{% endfor %}</ul>{% endblock %}
</body></html>
"""


@pytest.fixture
def templates(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    (root / "games").mkdir(parents=True)
    (root / "GamePage.html").write_text(GAME_PAGE)
    (root / "games" / "GamePage.html").write_text(GAME_PAGE)
    (root / "Escape.html").write_text("{% block Escape %}{{ view.title }}{% endblock %}")
    (root / "Filters.html").write_text(
        '{% block Filters %}{{ view.title | default_if_empty("untitled") }}{% endblock %}'
    )
    return root


def _app(templates: Path, **config: object) -> App[Services]:
    return App(Services(), config=AppConfig(template_dir=templates, **config))


class TestViewContext:
    def test_view_and_app(self) -> None:
        ctx = view_context(object(), "ctx")
        assert ctx["app"] == "ctx"
        assert "view" in ctx

    def test_dataclass_fields_exposed(self) -> None:
        view = GamePage(title="T")
        ctx = view_context(view, None)
        assert ctx["title"] == "T"
        assert ctx["page"] is view.page

    def test_fields_do_not_shadow_view_or_app(self) -> None:
        @dataclass
        class Odd:
            app: str = "field"
            view: str = "field"

        ctx = view_context(Odd(), "context")
        assert ctx["app"] == "context"
        assert isinstance(ctx["view"], Odd)


class TestRenderTemplate:
    async def test_renders_block(self, templates: Path) -> None:
        app = _app(templates)
        response = ResponseWriter()
        await app.render_template(response, "GamePage", "GamePage", GamePage(title="Hello"))
        assert response.body.decode().strip() == "<h1>Hello</h1>"

    async def test_empty_block_renders_whole_file(self, templates: Path) -> None:
        app = _app(templates)
        response = ResponseWriter()
        await app.render_template(response, "GamePage", "", GamePage(title="Hello"))
        html = response.body.decode()
        assert "<title>Chess Club</title>" in html
        assert "<h1>Hello</h1>" in html

    async def test_autoescape(self, templates: Path) -> None:
        app = _app(templates)
        response = ResponseWriter()
        await app.render_template(response, "Escape", "Escape", GamePage(title="<b>x</b>"))
        assert "&lt;b&gt;" in response.body.decode()

    async def test_builtin_filters_registered(self, templates: Path) -> None:
        app = _app(templates)
        response = ResponseWriter()
        await app.render_template(response, "Filters", "Filters", GamePage(title=""))
        assert response.body.decode().strip() == "untitled"

    async def test_missing_template(self, templates: Path) -> None:
        app = _app(templates)
        with pytest.raises(TemplateRenderError, match=r"Nope\[Nope\]") as exc_info:
            await app.render_template(ResponseWriter(), "Nope", "Nope", GamePage())
        assert exc_info.value.__cause__ is not None

    async def test_missing_block(self, templates: Path) -> None:
        app = _app(templates)
        with pytest.raises(TemplateRenderError):
            await app.render_template(ResponseWriter(), "GamePage", "NoSuchBlock", GamePage())

    async def test_component_dirs_searched_after_template_dir(
        self, templates: Path, tmp_path: Path
    ) -> None:
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "Footer.html").write_text("{% block Footer %}shared footer{% endblock %}")
        (shared / "GamePage.html").write_text("{% block GamePage %}shared{% endblock %}")
        app = _app(templates, component_dirs=(shared,))

        footer = ResponseWriter()
        await app.render_template(footer, "Footer", "Footer", GamePage())
        assert footer.body.decode().strip() == "shared footer"

        page = ResponseWriter()
        await app.render_template(page, "GamePage", "GamePage", GamePage(title="own"))
        assert "<h1>own</h1>" in page.body.decode()

    async def test_render_func_override(self, templates: Path) -> None:
        calls: list[tuple[str, str]] = []

        async def render(response, file_name, block_name, view):
            calls.append((file_name, block_name))
            response.write("custom")

        app = App(Services(), config=AppConfig(template_dir=templates), render_func=render)
        response = ResponseWriter()
        await app.render_template(response, "GamePage", "Moves", GamePage())
        assert calls == [("GamePage", "Moves")]
        assert response.body == b"custom"


class TestTemplateDecorators:
    async def test_filter_and_global(self, templates: Path) -> None:
        (templates / "Shout.html").write_text(
            "{% block Shout %}{{ view.title | shout }} {{ version() }}{% endblock %}"
        )
        app = _app(templates)

        @app.template_filter()
        def shout(value: str) -> str:
            return value.upper() + "!"

        @app.template_global("version")
        def current_version() -> str:
            return "v1"

        response = ResponseWriter()
        await app.render_template(response, "Shout", "Shout", GamePage(title="hi"))
        assert response.body.decode().strip() == "HI! v1"

    async def test_filter_after_environment_created(self, templates: Path) -> None:
        (templates / "Late.html").write_text("{% block Late %}{{ view.title | late }}{% endblock %}")
        app = _app(templates)
        assert app.templates is app.templates

        @app.template_filter("late")
        def late_filter(value: str) -> str:
            return f"late:{value}"

        response = ResponseWriter()
        await app.render_template(response, "Late", "Late", GamePage(title="x"))
        assert response.body.decode().strip() == "late:x"


class TestEndToEnd:
    async def test_full_page_and_fragment(self, templates: Path) -> None:
        app = _app(templates)
        router = (
            app.router()
            .page("/games/{id}", GamePage, template="games/GamePage:")
            .page("/games/{id}/moves", GamePage, template="games/GamePage:Moves")
            .build()
        )
        async with TestClient(router) as client:
            full = await client.get("/games/7")
            moves = await client.get("/games/7/moves")

        assert full.status == 200
        assert "<h1>Game 7</h1>" in full.text
        assert "<title>Chess Club</title>" in full.text
        assert_is_fragment(moves)
        assert "<li>e4</li><li>e5</li>" in moves.text

    async def test_default_template_is_view_name(self, templates: Path) -> None:
        router = _app(templates).router().page("/g/{id}", GamePage).build()
        async with TestClient(router) as client:
            response = await client.get("/g/1")
        assert response.text.strip() == "<h1>Game 1</h1>"

    async def test_missing_template_is_render_error(self, templates: Path) -> None:
        router = _app(templates).router().page("/", GamePage, template="Missing").build()
        async with TestClient(router) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.text == "Template render error\n"
