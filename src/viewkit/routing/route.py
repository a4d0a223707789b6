"""Route and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass, field

from viewkit.middleware.protocol import Handler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``/users``        (is_param=False)
    Param:     ``/{id}``         (is_param=True, param_name="id")
    Typed:     ``/{id:int}``     (is_param=True, param_type="int")
    Remainder: ``/{rest...}``    (is_param=True, param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    regex: re.Pattern[str] | None = field(default=None, compare=False)

    @property
    def is_rest(self) -> bool:
        return self.param_type == "path"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered pattern and the handler bound to it.

    ``methods`` is ``None`` for patterns without a method prefix, which
    serve every method. ``subtree`` patterns end in ``/`` and also match
    everything below them. ``strip_prefix`` routes are mount points: the
    matched prefix is moved from ``request.path`` to ``request.root_path``
    before the handler runs.
    """

    pattern: str
    path: str
    handler: Handler
    methods: frozenset[str] | None
    segments: tuple[PathSegment, ...]
    subtree: bool = False
    strip_prefix: bool = False

    def allows(self, method: str) -> bool:
        if self.methods is None:
            return True
        return method in self.methods or (method == "HEAD" and "GET" in self.methods)

    @property
    def specificity(self) -> tuple[bool, int, int]:
        """Sort key: exact before subtree, then deeper, then more literal."""
        literal = sum(1 for seg in self.segments if not seg.is_param)
        return (not self.subtree, len(self.segments), literal)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``head`` is the part of the request path consumed by the pattern's
    segments and ``tail`` what remains (always starting with ``/``);
    mount points use them to strip their prefix.
    """

    route: Route
    path_params: dict[str, str]
    head: str = ""
    tail: str = "/"
