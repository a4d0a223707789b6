"""Error pipeline for viewkit requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
Fragment (htmx) requests get a small snippet plus headers that point
htmx at a dedicated error container.
"""

import html
import logging

from viewkit.errors import HTTPError
from viewkit.htmx import is_htmx_request
from viewkit.http.request import Request
from viewkit.http.response import Response

logger = logging.getLogger("viewkit.server")


def default_fragment_error(status: int, detail: str) -> str:
    """Minimal HTML snippet for fragment error responses."""
    return f'<div class="viewkit-error" data-status="{status}">{html.escape(detail)}</div>'


def _with_htmx_error_headers(response: Response, request: Request) -> Response:
    """Add htmx error-handling headers when the request is a fragment.

    - ``HX-Retarget: #viewkit-error``: send error content to a dedicated container
    - ``HX-Reswap: innerHTML``: replace (not append) the error content
    - ``HX-Trigger: viewkitError``: fire a client-side event for custom handling
    """
    if not is_htmx_request(request):
        return response
    return (
        response
        .with_header("HX-Retarget", "#viewkit-error")
        .with_header("HX-Reswap", "innerHTML")
        .with_header("HX-Trigger", "viewkitError")
    )


def _error_response(status: int, detail: str, request: Request) -> Response:
    if is_htmx_request(request):
        body = default_fragment_error(status, detail)
        resp = Response(body=body, status=status)
    else:
        resp = Response(body=detail, status=status, content_type="text/plain; charset=utf-8")
    return _with_htmx_error_headers(resp, request)


def handle_http_error(exc: HTTPError, request: Request, debug: bool) -> Response:
    """Map an HTTPError to a response with the same status."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.full_path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = _error_response(exc.status, detail, request)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors.

    The exception text only reaches the client in debug mode.
    """
    logger.exception("500 %s %s", request.method, request.full_path)
    detail = f"{type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return _error_response(500, detail, request)
