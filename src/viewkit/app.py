"""The application wrapper.

``App`` pairs the application's own shared state (its *context*, holding stores,
service clients, and settings as the application defines them) with the
template system. It is created once at startup and handed, read-only,
to every view's ``load``.

Basic usage::

    app = App(MyServices(), config=AppConfig(template_dir="web/templates"))

    router = (
        app.router()
        .page("/", HomePage)
        .page("/games", GameListingPage, template="games/GameListingPage")
        .build()
    )
"""

from collections.abc import Awaitable, Callable
from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Any

from kida import Environment

from viewkit._internal.invoke import invoke
from viewkit.config import AppConfig
from viewkit.errors import ConfigurationError, TemplateRenderError
from viewkit.http.writer import ResponseWriter
from viewkit.templating.integration import create_environment

if TYPE_CHECKING:
    from viewkit.routing.builder import RouteBuilder

# Replaces the default kida rendering: (response, file_name, block_name, view).
# Raise to signal failure.
type RenderFunc = Callable[[ResponseWriter, str, str, Any], Awaitable[None] | None]


def view_context(view: Any, context: Any = None) -> dict[str, Any]:
    """Build the template context for *view*.

    Templates always see ``view`` and ``app`` (the application context).
    Dataclass views also expose every field at top level, so a view with
    a ``pagination`` field can be rendered with ``{{ pagination.offset }}``.
    """
    ctx: dict[str, Any] = {"view": view, "app": context}
    if is_dataclass(view) and not isinstance(view, type):
        for f in fields(view):
            ctx.setdefault(f.name, getattr(view, f.name))
    return ctx


class App[C]:
    """Application context plus template rendering.

    Filters and globals may be registered until the environment is first
    used; with a caller-supplied environment they are applied directly.
    """

    __slots__ = ("_filters", "_globals", "_templates", "config", "context", "render_func")

    def __init__(
        self,
        context: C,
        templates: Environment | None = None,
        *,
        config: AppConfig | None = None,
        render_func: RenderFunc | None = None,
    ) -> None:
        self.context: C = context
        self.config: AppConfig = config or AppConfig()
        self.render_func: RenderFunc | None = render_func
        self._templates: Environment | None = templates
        self._filters: dict[str, Callable[..., Any]] = {}
        self._globals: dict[str, Any] = {}

    # -- Template integration --

    @property
    def templates(self) -> Environment:
        """The kida environment, created from ``config`` on first access."""
        if self._templates is None:
            self._templates = create_environment(self.config, self._filters, self._globals)
        return self._templates

    def template_filter(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template filter via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            filter_name = name or func.__name__
            if self._templates is None:
                self._filters[filter_name] = func
            else:
                self._templates.update_filters({filter_name: func})
            return func

        return decorator

    def template_global(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template global via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            global_name = name or func.__name__
            if self._templates is None:
                self._globals[global_name] = func
            else:
                self._templates.add_global(global_name, func)
            return func

        return decorator

    async def render_template(
        self,
        response: ResponseWriter,
        file_name: str,
        block_name: str,
        view: Any,
    ) -> None:
        """Render *view* with ``file_name[block_name]`` into *response*.

        Delegates to ``render_func`` when one is set. Otherwise loads
        ``file_name`` plus the configured suffix and renders the named
        block, or the whole file when *block_name* is empty.

        Raises ``TemplateRenderError`` (chained to the cause) on failure.
        """
        if self.render_func is not None:
            await invoke(self.render_func, response, file_name, block_name, view)
            return

        template_file = file_name + self.config.template_suffix
        try:
            template = self.templates.get_template(template_file)
        except Exception as exc:
            raise TemplateRenderError(file_name, block_name, f"cannot load {template_file}") from exc

        ctx = view_context(view, self.context)
        try:
            if block_name:
                html = template.render_block(block_name, ctx)
            else:
                html = template.render(ctx)
        except Exception as exc:
            raise TemplateRenderError(file_name, block_name, str(exc)) from exc
        response.write(html)

    # -- Routing --

    def router(self) -> "RouteBuilder[C]":
        """Start a fluent route builder bound to this app."""
        from viewkit.routing.builder import RouteBuilder

        return RouteBuilder(self)


def ensure_app(app: Any) -> None:
    """Reject registrations that pass something other than an ``App``."""
    if not isinstance(app, App):
        msg = f"Expected an App, got {type(app).__name__}."
        raise ConfigurationError(msg)
