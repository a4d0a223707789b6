"""ASGI handler: translates ASGI scope/messages to viewkit types.

The only component that touches raw ASGI directly. Converts the scope
into a typed Request, runs the handler, maps errors to responses, and
sends the Response back through ASGI send().
"""

from viewkit._internal.asgi import Receive, Scope, Send
from viewkit._internal.invoke import invoke
from viewkit.errors import HTTPError
from viewkit.http.request import Request
from viewkit.middleware.protocol import Handler, as_response
from viewkit.server.errors import handle_http_error, handle_internal_error
from viewkit.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    handler: Handler,
    debug: bool,
) -> None:
    """Process a single HTTP request through *handler*."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = as_response(await invoke(handler, request))
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    await send_response(response, send, head=request.method == "HEAD")


async def handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge ASGI lifespan startup and shutdown.

    The composition layer owns no resources; applications that do manage
    them in their own ASGI wrapper or server hooks.
    """
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
