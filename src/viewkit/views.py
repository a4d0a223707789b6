"""Views, loaders, and the loader chain.

A *loader* fills part of a page's per-request state. It is any object
with a ``load(request, response, app)`` method, or any callable with
that signature, sync or async. Its return value says whether the
response is finished:

- ``False`` (or ``None``): carry on.
- ``True``: the loader wrote the response itself (a redirect, a 4xx);
  nothing else may run or render.
- raising: something went wrong; the request ends with an error.

A *view* is a loader that also owns a template. Views hold their mixins
as fields and chain them explicitly::

    @dataclass
    class GameListingPage:
        page: BasePage = field(default_factory=BasePage)
        pagination: WithPagination = field(default_factory=WithPagination)
        games: list[Game] = field(default_factory=list)

        async def load(self, request, response, app):
            if await load_all(request, response, app, self.page, self.pagination):
                return True
            self.games = await app.context.games.list(offset=self.pagination.offset)
            return False
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from viewkit._internal.invoke import invoke
from viewkit.errors import ConfigurationError
from viewkit.http.request import Request
from viewkit.http.writer import ResponseWriter

if TYPE_CHECKING:
    from viewkit.app import App
    from viewkit.routing.router import Router

type LoadResult = bool | None | Awaitable[bool | None]

# A plain function used as a loader
type LoaderFunc[C] = Callable[[Request, ResponseWriter, App[C]], LoadResult]


class Loader[C](Protocol):
    """Anything with a ``load`` method: mixins and views alike."""

    def load(self, request: Request, response: ResponseWriter, app: App[C]) -> LoadResult: ...


class View[C](Loader[C], Protocol):
    """A page. Instantiated fresh for every request, then rendered."""


@runtime_checkable
class HtmxAware(Protocol):
    """A view that knows whether to answer with a fragment."""

    def should_render_fragment(self) -> bool: ...


class PageGroup[C](Protocol):
    """A set of routes defined relative to a mount prefix."""

    def register_routes(self, app: App[C]) -> Router: ...


async def load_all(
    request: Request,
    response: ResponseWriter,
    app: App[Any],
    *loaders: Loader[Any] | LoaderFunc[Any] | None,
) -> bool:
    """Run *loaders* in order against one request.

    ``None`` entries are skipped. Stops at the first loader that reports
    the response finished and returns ``True``; an exception from a loader
    propagates immediately. Later loaders can rely on fields set by
    earlier ones, so order matters.
    """
    for loader in loaders:
        if loader is None:
            continue
        load = loader.load if hasattr(loader, "load") else loader
        if await invoke(load, request, response, app):
            return True
    return False


@dataclass(frozen=True, slots=True)
class ViewSpec[V]:
    """Explicit view registration: the name templates resolve against and
    a zero-argument factory producing a fresh view per request.

    A view class works directly (its ``__name__`` and itself); use a spec
    for factories that need arguments::

        ViewSpec("GamePage", lambda: GamePage(store=store))
    """

    name: str
    factory: Callable[[], V]


def view_spec(view: type[Any] | ViewSpec[Any]) -> ViewSpec[Any]:
    """Normalize a registration target into a ``ViewSpec``.

    Raises ``ConfigurationError`` for anything that cannot produce a fresh
    view per request: an instance instead of a class, or a class with no
    ``load`` method.
    """
    if isinstance(view, ViewSpec):
        return view
    if isinstance(view, type):
        if not callable(getattr(view, "load", None)):
            msg = f"View {view.__name__} has no load(request, response, app) method."
            raise ConfigurationError(msg)
        return ViewSpec(view.__name__, view)
    msg = (
        f"Cannot register a {type(view).__name__} instance as a view. "
        "Pass the view class, or a ViewSpec(name, factory), so each request "
        "gets a fresh view."
    )
    raise ConfigurationError(msg)
