"""Binding views, page groups, and plain handlers to a router.

``register`` turns a view class into a request handler. Per request the
handler builds a fresh view, runs its ``load``, and renders the view's
template unless ``load`` finished the response itself::

    router = register(app, None, "/", HomePage)
    register(app, router, "/games", GameListingPage, template="games/GameListingPage")
    register(app, router, "GET /games/{id}", GamePage, middleware=[require_login])

Two error channels stay separate. A failing ``load`` answers 500 with the
error message; a failing render answers 500 with a fixed message and
keeps the details in the server log.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from viewkit._internal.invoke import invoke
from viewkit.app import App, ensure_app
from viewkit.errors import ConfigurationError, HTTPError
from viewkit.http.request import Request
from viewkit.http.response import Response
from viewkit.http.writer import ResponseWriter
from viewkit.middleware.protocol import Handler, Middleware
from viewkit.routing.router import Router
from viewkit.templating.spec import TemplateRef, parse_template_spec, resolve_template
from viewkit.views import HtmxAware, PageGroup, ViewSpec, view_spec

logger = logging.getLogger("viewkit.views")

RENDER_ERROR_MESSAGE = "Template render error"


def _view_handler(
    app: App[Any],
    spec: ViewSpec[Any],
    choose_template: Callable[[Any], TemplateRef],
    label: str,
) -> Handler:
    """Build the per-request handler for one view registration."""

    async def handle_view(request: Request) -> Response:
        view = spec.factory()
        response = ResponseWriter()

        try:
            finished = await invoke(view.load, request, response, app)
        except HTTPError:
            raise
        except Exception as exc:
            if response.committed:
                # The view already answered; keep its response, keep the error in the log.
                logger.error(
                    "View load error for %s after the response was written: %s",
                    label,
                    exc,
                    exc_info=exc,
                )
                return response.to_response()
            logger.error("View load error for %s: %s", label, exc, exc_info=exc)
            response.error(500, str(exc))
            return response.to_response()

        if finished:
            return response.to_response()

        try:
            ref = choose_template(view)
            await app.render_template(response, ref.file_name, ref.block_name, view)
        except Exception as exc:
            logger.error("Render error for %s: %s", label, exc, exc_info=exc)
            response.error(500, RENDER_ERROR_MESSAGE)
        return response.to_response()

    handle_view.__name__ = f"view_{spec.name}"
    return handle_view


def register(
    app: App[Any],
    router: Router | None,
    pattern: str,
    view: type[Any] | ViewSpec[Any],
    *,
    template: str | None = None,
    middleware: Sequence[Middleware] = (),
) -> Router:
    """Register *view* at *pattern* and return the router.

    Args:
        app: The application wrapper passed to every ``load``.
        router: Target router; a new one is created when ``None``.
        pattern: Route pattern, e.g. ``"/games"`` or ``"GET /games/{id}"``.
        view: A view class or a ``ViewSpec``.
        template: Template spec (``"path"`` or ``"path:Block"``). Defaults
            to the view's name for both file and block.
        middleware: Wraps the handler; the first entry is outermost.

    Raises:
        ConfigurationError: *view* is an instance or has no ``load``.
    """
    ensure_app(app)
    spec = view_spec(view)
    ref = resolve_template(spec.name, template)
    if router is None:
        router = Router()
    router.handle(
        pattern,
        _view_handler(app, spec, lambda _view: ref, str(ref)),
        middleware=middleware,
    )
    return router


def register_adaptive(
    app: App[Any],
    router: Router | None,
    pattern: str,
    view: type[Any] | ViewSpec[Any],
    full: str,
    fragment: str,
    *,
    middleware: Sequence[Middleware] = (),
) -> Router:
    """Register a view that answers htmx swaps with a fragment.

    After ``load``, the view's ``should_render_fragment()`` picks *fragment*
    or *full*; both are template specs::

        register_adaptive(app, router, "/games", GameListingPage,
                          full="games/GameListingPage",
                          fragment="games/GameListingPage:GameRows")
    """
    ensure_app(app)
    spec = view_spec(view)
    if isinstance(view, type) and not callable(getattr(view, "should_render_fragment", None)):
        msg = f"View {view.__name__} needs should_render_fragment() for adaptive registration."
        raise ConfigurationError(msg)

    full_ref = parse_template_spec(full)
    fragment_ref = parse_template_spec(fragment)

    def choose(instance: Any) -> TemplateRef:
        if not isinstance(instance, HtmxAware):
            msg = f"View {spec.name} does not implement should_render_fragment()."
            raise TypeError(msg)
        return fragment_ref if instance.should_render_fragment() else full_ref

    if router is None:
        router = Router()
    router.handle(
        pattern,
        _view_handler(app, spec, choose, f"{full_ref} | {fragment_ref}"),
        middleware=middleware,
    )
    return router


def register_group(
    app: App[Any],
    router: Router | None,
    prefix: str,
    group: type[Any] | PageGroup[Any],
    *,
    middleware: Sequence[Middleware] = (),
) -> Router:
    """Mount a page group's routes under *prefix*.

    The group builds its own router with patterns relative to its mount
    point; requests reach it with *prefix* stripped. Groups may register
    further groups, which nest by the same rule.
    """
    ensure_app(app)
    instance = group() if isinstance(group, type) else group
    if not callable(getattr(instance, "register_routes", None)):
        msg = f"Page group {type(instance).__name__} has no register_routes(app) method."
        raise ConfigurationError(msg)

    sub_router = instance.register_routes(app)
    if not isinstance(sub_router, Router):
        msg = (
            f"{type(instance).__name__}.register_routes() returned "
            f"{type(sub_router).__name__}, expected a Router."
        )
        raise ConfigurationError(msg)

    if router is None:
        router = Router()
    router.mount(prefix, sub_router, middleware=middleware)
    return router


def register_handler(
    router: Router | None,
    pattern: str,
    handler: Handler,
    *,
    middleware: Sequence[Middleware] = (),
) -> Router:
    """Bind a plain ``(request) -> Response`` handler at *pattern*."""
    if router is None:
        router = Router()
    router.handle(pattern, handler, middleware=middleware)
    return router
