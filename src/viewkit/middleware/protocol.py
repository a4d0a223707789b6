"""Handler and middleware shapes.

A handler is any callable ``(request) -> Response``, sync or async.
Routers are handlers too, through ``Router.dispatch``.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The framework checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from viewkit._internal.invoke import invoke
from viewkit.http.request import Request
from viewkit.http.response import Response

# A request handler bound to a route pattern
type Handler = Callable[[Request], Awaitable[Response] | Response]

# The next handler in a middleware chain
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for viewkit middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class RequireLogin:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


def as_response(result: Any) -> Response:
    """Coerce a handler return value into a ``Response``.

    Strings become ``text/html`` bodies; anything else that is not a
    ``Response`` is a programming error.
    """
    if isinstance(result, Response):
        return result
    if isinstance(result, (str, bytes)):
        return Response(body=result)
    msg = f"Handler returned {type(result).__name__}, expected Response or str."
    raise TypeError(msg)


def chain(handler: Handler, middleware: Sequence[Middleware]) -> Next:
    """Wrap *handler* in *middleware*. The first middleware is outermost.

    ``chain(h, [a, b])`` runs ``a`` → ``b`` → ``h`` and back out again.
    """

    async def innermost(request: Request) -> Response:
        return as_response(await invoke(handler, request))

    wrapped: Next = innermost
    for mw in reversed(middleware):

        async def make_next(request: Request, _mw: Middleware = mw, _next: Next = wrapped) -> Response:
            return await _mw(request, _next)

        wrapped = make_next
    return wrapped
