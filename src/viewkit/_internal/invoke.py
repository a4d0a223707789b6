"""Invoke helpers: call sync or async callables uniformly.

Loaders, views, handlers, and render overrides can all be ``def`` or
``async def``. Anything that calls user code goes through ``invoke`` so
the sync/async check lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        def load(self, request, response, app):
            return False

        async def load(self, request, response, app):
            self.items = await store.list()
            return False
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
