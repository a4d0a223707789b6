"""viewkit exception hierarchy.

Shared across the router, the registration layer, and the ASGI pipeline
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class ViewkitError(Exception):
    """Base for all viewkit-specific errors."""


class ConfigurationError(ViewkitError):
    """Raised when routes, views, or templates are wired up incorrectly.

    Always raised at setup time, before any request is served.
    """


class TemplateRenderError(ViewkitError):
    """A template could not be loaded or rendered.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, file_name: str, block_name: str, reason: str) -> None:
        self.file_name = file_name
        self.block_name = block_name
        super().__init__(f"template render error: {file_name}[{block_name}] - {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(ViewkitError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by view code. The ASGI pipeline catches
    these and turns them into a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: a pattern matched the path but not the method.

    Carries an ``Allow`` header listing the methods that would match.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
