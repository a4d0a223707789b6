"""Middleware support: the handler/middleware protocol and chaining.

Middleware wraps route handlers::

    async def require_json(request, next):
        if request.content_type != "application/json":
            return Response("Unsupported Media Type", status=415)
        return await next(request)

    register(app, router, "/api/games", GamesPage, middleware=[require_json])
"""

from viewkit.middleware.protocol import Handler, Middleware, Next, chain

__all__ = ["Handler", "Middleware", "Next", "chain"]
