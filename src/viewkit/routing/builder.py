"""Fluent route building.

The same registrations as ``viewkit.routing.register``, chained against
one router::

    router = (
        app.router()
        .use(request_id)
        .page("/", HomePage)
        .group("/games", lambda games: (
            games.page("/", GameListingPage)
            .page("/{id}", GamePage)
        ))
        .static("/static", "web/static")
        .build()
    )
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

from viewkit.middleware.protocol import Handler, Middleware
from viewkit.routing.register import register, register_adaptive, register_group, register_handler
from viewkit.routing.router import Router
from viewkit.static import StaticFiles
from viewkit.views import PageGroup, ViewSpec

if TYPE_CHECKING:
    from viewkit.app import App


class RouteBuilder[C]:
    """Chained registration against an internal router.

    Middleware added with ``use`` wraps every route registered after the
    call, outside any per-route middleware.
    """

    __slots__ = ("_app", "_middleware", "_router")

    def __init__(self, app: "App[C]", router: Router | None = None) -> None:
        self._app = app
        self._router = router or Router(debug=app.config.debug)
        self._middleware: list[Middleware] = []

    def _stack(self, middleware: Sequence[Middleware]) -> list[Middleware]:
        return [*self._middleware, *middleware]

    def use(self, *middleware: Middleware) -> Self:
        """Add middleware for all routes registered from now on."""
        self._middleware.extend(middleware)
        return self

    def page(
        self,
        pattern: str,
        view: type[Any] | ViewSpec[Any],
        *,
        template: str | None = None,
        middleware: Sequence[Middleware] = (),
    ) -> Self:
        """Register a view (see ``register``)."""
        register(
            self._app,
            self._router,
            pattern,
            view,
            template=template,
            middleware=self._stack(middleware),
        )
        return self

    def adaptive_page(
        self,
        pattern: str,
        view: type[Any] | ViewSpec[Any],
        full: str,
        fragment: str,
        *,
        middleware: Sequence[Middleware] = (),
    ) -> Self:
        """Register a full-page/fragment view (see ``register_adaptive``)."""
        register_adaptive(
            self._app,
            self._router,
            pattern,
            view,
            full,
            fragment,
            middleware=self._stack(middleware),
        )
        return self

    def group(
        self,
        prefix: str,
        setup: "Callable[[RouteBuilder[C]], Any]",
        *,
        middleware: Sequence[Middleware] = (),
    ) -> Self:
        """Build a nested router with *setup* and mount it under *prefix*."""
        sub = RouteBuilder(self._app)
        setup(sub)
        self._router.mount(prefix, sub.build(), middleware=self._stack(middleware))
        return self

    def mount_group(
        self,
        prefix: str,
        group: type[Any] | PageGroup[C],
        *,
        middleware: Sequence[Middleware] = (),
    ) -> Self:
        """Mount a ``PageGroup`` under *prefix* (see ``register_group``)."""
        register_group(
            self._app,
            self._router,
            prefix,
            group,
            middleware=self._stack(middleware),
        )
        return self

    def static(self, prefix: str, directory: str | Path, **options: Any) -> Self:
        """Serve files from *directory* under *prefix*."""
        self._router.mount(
            prefix,
            StaticFiles(directory, **options),
            middleware=self._stack(()),
        )
        return self

    def handle(
        self,
        pattern: str,
        handler: Handler,
        *,
        middleware: Sequence[Middleware] = (),
    ) -> Self:
        """Bind a plain handler (see ``register_handler``)."""
        register_handler(self._router, pattern, handler, middleware=self._stack(middleware))
        return self

    @property
    def router(self) -> Router:
        """The router being built, for direct access."""
        return self._router

    def build(self) -> Router:
        return self._router
