"""Pattern router with subtree mounts and prefix stripping.

Patterns are registered during setup. The first ASGI request freezes
the router; after that its table never changes.

Pattern syntax::

    "/games"                 exact path, any method
    "GET /games/{id}"        method prefix, one-segment parameter
    "/games/{id:int}/edit"   typed parameter (int, float, str)
    "/files/{rest...}"       remainder of the path
    "/games/"                subtree: /games/ and everything below it
    "/"                      catch-all subtree
"""

import re
from collections.abc import Sequence

from viewkit._internal.asgi import Receive, Scope, Send
from viewkit._internal.invoke import invoke
from viewkit.errors import ConfigurationError, MethodNotAllowed, NotFound
from viewkit.http.request import Request
from viewkit.http.response import Response
from viewkit.middleware.protocol import Handler, Middleware, as_response, chain
from viewkit.routing.params import CONVERTERS
from viewkit.routing.route import PathSegment, Route, RouteMatch
from viewkit.server.handler import handle_lifespan, handle_request

_METHOD_RE = re.compile(r"^[A-Z]+$")


def parse_pattern(pattern: str) -> tuple[frozenset[str] | None, str]:
    """Split ``"GET /path"`` into its method set and path.

    Raises ``ConfigurationError`` for malformed patterns.
    """
    method, sep, path = pattern.strip().partition(" ")
    if not sep:
        method, path = "", method
    path = path.strip()
    if method and not _METHOD_RE.match(method):
        msg = f"Invalid method {method!r} in route pattern {pattern!r}."
        raise ConfigurationError(msg)
    if not path.startswith("/"):
        msg = f"Route pattern {pattern!r} must start with '/' (after an optional method)."
        raise ConfigurationError(msg)
    return (frozenset({method}) if method else None), path


def parse_path(path: str) -> tuple[tuple[PathSegment, ...], bool]:
    """Parse a route path into segments and its subtree flag.

    Examples::

        "/users"              -> (users,), False
        "/users/{id:int}"     -> (users, {id:int}), False
        "/static/"            -> (static,), True
        "/files/{rest...}"    -> (files, {rest...}), False
    """
    if "<" in path and ">" in path:
        msg = (
            f"Route path {path!r} uses <param> syntax. "
            "viewkit expects {param} placeholders, e.g. '/games/{id}'."
        )
        raise ConfigurationError(msg)

    subtree = path.endswith("/")
    parts = [p for p in path.strip("/").split("/") if p]
    segments: list[PathSegment] = []
    for index, part in enumerate(parts):
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue

        inner = part[1:-1]
        if inner.endswith("..."):
            param_name, param_type = inner[:-3], "path"
        elif ":" in inner:
            param_name, param_type = inner.split(":", 1)
        else:
            param_name, param_type = inner, "str"

        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route path {path!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Remainder parameter {part!r} must be the last segment of {path!r}."
            raise ConfigurationError(msg)

        pattern = CONVERTERS[param_type]
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
                regex=re.compile(f"^{pattern}$"),
            )
        )
    return tuple(segments), subtree


def _split_path(path: str) -> list[str]:
    return [p for p in path.split("/") if p]


def _match_route(route: Route, path: str, parts: list[str]) -> RouteMatch | None:
    """Match one route against the request path parts."""
    params: dict[str, str] = {}
    for index, seg in enumerate(route.segments):
        if seg.is_rest:
            # /files/{rest...} needs the slash: /files/ matches, /files does not
            if index >= len(parts) and not path.endswith("/"):
                return None
            params[seg.param_name or "path"] = "/".join(parts[index:])
            return RouteMatch(route=route, path_params=params, head=path, tail="/")
        if index >= len(parts):
            return None
        part = parts[index]
        if seg.is_param:
            assert seg.regex is not None
            if not seg.regex.match(part):
                return None
            params[seg.param_name or ""] = part
        elif part != seg.value:
            return None

    depth = len(route.segments)
    if route.subtree:
        # /games/ matches /games/ and /games/x, never /games itself
        if len(parts) == depth and not path.endswith("/"):
            return None
    elif len(parts) != depth or (parts and path.endswith("/")):
        # /games never matches /games/
        return None

    head = "/" + "/".join(parts[:depth]) if depth else ""
    tail = "/" + "/".join(parts[depth:])
    if len(parts) > depth and path.endswith("/"):
        tail += "/"
    return RouteMatch(route=route, path_params=params, head=head, tail=tail)


class Router:
    """Pattern router. Also an ASGI application and a handler.

    Usage::

        router = Router()
        router.handle("GET /games/{id}", show_game)
        router.mount("/admin", admin_router)
        match = router.match("GET", "/games/42")
    """

    __slots__ = ("_frozen", "_keys", "_mounted", "_routes", "debug")

    def __init__(self, *, debug: bool = False) -> None:
        self.debug = debug
        self._routes: list[Route] = []
        self._keys: set[tuple[str, str]] = set()
        self._mounted: list[Router] = []
        self._frozen = False

    # -- Registration --

    def handle(
        self,
        pattern: str,
        handler: Handler,
        *,
        middleware: Sequence[Middleware] = (),
    ) -> None:
        """Bind *handler* to *pattern*.

        Raises ``ConfigurationError`` when the same method and path are
        already bound, and ``RuntimeError`` once the router is serving.
        """
        self._add(pattern, handler, middleware=middleware, strip_prefix=False)

    def mount(
        self,
        prefix: str,
        handler: "Handler | Router",
        *,
        middleware: Sequence[Middleware] = (),
    ) -> None:
        """Serve *handler* for everything under *prefix*, prefix stripped.

        ``mount("/games", sub)`` binds the subtree ``/games/``; a request
        for ``/games/42`` reaches *sub* as ``/42`` with ``root_path``
        ``/games``. Routers nest by the same rule, and a mounted router
        freezes together with its parent.
        """
        sub_router = handler if isinstance(handler, Router) else None
        if sub_router is not None:
            handler = sub_router.dispatch
        mount_pattern = prefix if prefix.endswith("/") else prefix + "/"
        self._add(mount_pattern, handler, middleware=middleware, strip_prefix=True)
        if sub_router is not None:
            self._mounted.append(sub_router)

    def _add(
        self,
        pattern: str,
        handler: Handler,
        *,
        middleware: Sequence[Middleware],
        strip_prefix: bool,
    ) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started serving requests. "
                "Register routes before the first request."
            )
            raise RuntimeError(msg)

        methods, path = parse_pattern(pattern)
        segments, subtree = parse_path(path)

        shape = "/" + "/".join(
            f"{{{seg.param_type}}}" if seg.is_param else seg.value for seg in segments
        )
        if subtree and shape != "/":
            shape += "/"
        for method in sorted(methods) if methods else ["*"]:
            key = (method, shape)
            if key in self._keys:
                msg = f"Route pattern {pattern!r} conflicts with an existing registration."
                raise ConfigurationError(msg)
            self._keys.add(key)

        if middleware:
            handler = chain(handler, middleware)

        self._routes.append(
            Route(
                pattern=pattern,
                path=path,
                handler=handler,
                methods=methods,
                segments=segments,
                subtree=subtree,
                strip_prefix=strip_prefix,
            )
        )

    def _freeze(self) -> None:
        """Freeze this router and every router mounted below it."""
        self._frozen = True
        for sub_router in self._mounted:
            if not sub_router._frozen:
                sub_router._freeze()

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the most specific route for *method* and *path*.

        Raises ``NotFound`` if no pattern matches the path and
        ``MethodNotAllowed`` if some do, but none for this method.
        """
        parts = _split_path(path)
        candidates = [m for r in self._routes if (m := _match_route(r, path, parts))]
        allowed = [m for m in candidates if m.route.allows(method)]
        if allowed:
            # max() keeps the earliest registration among equals
            return max(allowed, key=lambda m: m.route.specificity)

        if candidates:
            methods: set[str] = set()
            for m in candidates:
                methods |= m.route.methods or set()
            raise MethodNotAllowed(frozenset(methods))

        raise NotFound(f"No route matches {method} {path!r}")

    def _slash_routes(self, path: str) -> list[Route]:
        """Routes that match ``path + "/"`` but not *path* itself.

        These are subtree and remainder patterns such as ``/p/`` and
        ``/p/{rest...}`` for a request to ``/p``.
        """
        if path.endswith("/"):
            return []
        with_slash = path + "/"
        parts, slash_parts = _split_path(path), _split_path(with_slash)
        return [
            route
            for route in self._routes
            if _match_route(route, with_slash, slash_parts) is not None
            and _match_route(route, path, parts) is None
        ]

    def _slash_redirect(self, request: Request) -> Response:
        location = request.root_path + request.path + "/"
        if request.query.raw:
            location += "?" + request.query.raw.decode("latin-1")
        return Response(status=301).with_header("Location", location)

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Route *request* to its handler and return the response."""
        try:
            match: RouteMatch | None = self.match(request.method, request.path)
        except NotFound:
            match = None

        # An exact route wins; otherwise /p redirects to a /p/ subtree
        # even when a shallower subtree such as / would also match.
        if match is None or match.route.subtree:
            slash_routes = self._slash_routes(request.path)
            if any(route.allows(request.method) for route in slash_routes):
                return self._slash_redirect(request)
            if match is None and slash_routes:
                methods: set[str] = set()
                for route in slash_routes:
                    methods |= route.methods or set()
                raise MethodNotAllowed(frozenset(methods))
        if match is None:
            raise NotFound(f"No route matches {request.method} {request.path!r}")

        request = request.with_path_params(match.path_params)
        if match.route.strip_prefix:
            request = request.with_path(match.tail, request.root_path + match.head)
        return as_response(await invoke(match.route.handler, request))

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point. The first call freezes the router."""
        if not self._frozen:
            self._freeze()
        if scope["type"] == "lifespan":
            await handle_lifespan(receive, send)
            return
        await handle_request(scope, receive, send, handler=self.dispatch, debug=self.debug)
