"""htmx request detection and response headers.

Request side: predicates and accessors for the ``HX-*`` headers htmx
sends. Response side: ``HtmxResponse``, a chainable wrapper that sets
htmx control headers on a ``ResponseWriter``.

Every setter is an independent header write; call them before the body
is written::

    HtmxResponse(response).trigger("gameSaved").push_url("/games/42")
"""

import json as json_module
from typing import Any

from viewkit.http.request import Request
from viewkit.http.writer import ResponseWriter

# Request headers
HX_REQUEST = "HX-Request"
HX_BOOSTED = "HX-Boosted"
HX_TARGET = "HX-Target"
HX_TRIGGER = "HX-Trigger"
HX_TRIGGER_NAME = "HX-Trigger-Name"
HX_CURRENT_URL = "HX-Current-URL"
HX_PROMPT = "HX-Prompt"

# Response headers (HX-Trigger is shared with the request side)
HX_TRIGGER_AFTER_SETTLE = "HX-Trigger-After-Settle"
HX_TRIGGER_AFTER_SWAP = "HX-Trigger-After-Swap"
HX_REDIRECT = "HX-Redirect"
HX_LOCATION = "HX-Location"
HX_REFRESH = "HX-Refresh"
HX_PUSH_URL = "HX-Push-Url"
HX_REPLACE_URL = "HX-Replace-Url"
HX_RETARGET = "HX-Retarget"
HX_RESWAP = "HX-Reswap"
HX_RESELECT = "HX-Reselect"

# htmx stops polling when a polled endpoint answers with this status
STOP_POLLING_STATUS = 286


# -- Request side --


def is_htmx_request(request: Request) -> bool:
    """True if the request was issued by htmx (``HX-Request: true``)."""
    return request.headers.get(HX_REQUEST) == "true"


def is_boosted_request(request: Request) -> bool:
    """True if the request comes from a boosted link or form."""
    return request.headers.get(HX_BOOSTED) == "true"


def htmx_target(request: Request) -> str:
    return request.headers.get(HX_TARGET, "") or ""


def htmx_trigger(request: Request) -> str:
    return request.headers.get(HX_TRIGGER, "") or ""


def htmx_trigger_name(request: Request) -> str:
    return request.headers.get(HX_TRIGGER_NAME, "") or ""


def htmx_current_url(request: Request) -> str:
    return request.headers.get(HX_CURRENT_URL, "") or ""


def htmx_prompt(request: Request) -> str:
    return request.headers.get(HX_PROMPT, "") or ""


# -- Response side --


def _event_value(event: str | dict[str, Any]) -> str:
    return event if isinstance(event, str) else json_module.dumps(event)


def _url_value(url: str | bool) -> str:
    if isinstance(url, str):
        return url
    return "true" if url else "false"


class HtmxResponse:
    """Chainable htmx response-header setters for a ``ResponseWriter``."""

    __slots__ = ("_response",)

    def __init__(self, response: ResponseWriter) -> None:
        self._response = response

    def trigger(self, event: str | dict[str, Any]) -> "HtmxResponse":
        """Trigger a client-side event.

        Accepts an event name or a dict keyed by event name::

            .trigger("closeModal")
            .trigger({"showToast": {"message": "Saved!"}})
        """
        self._response.set_header(HX_TRIGGER, _event_value(event))
        return self

    def trigger_with_data(self, event: str, data: Any) -> "HtmxResponse":
        """Trigger *event* with a JSON payload (``{event: data}``)."""
        return self.trigger({event: data})

    def trigger_after_settle(self, event: str | dict[str, Any]) -> "HtmxResponse":
        self._response.set_header(HX_TRIGGER_AFTER_SETTLE, _event_value(event))
        return self

    def trigger_after_swap(self, event: str | dict[str, Any]) -> "HtmxResponse":
        self._response.set_header(HX_TRIGGER_AFTER_SWAP, _event_value(event))
        return self

    def redirect(self, url: str) -> "HtmxResponse":
        """Client-side redirect with a full page load."""
        self._response.set_header(HX_REDIRECT, url)
        return self

    def location(
        self,
        url: str,
        *,
        target: str | None = None,
        swap: str | None = None,
        source: str | None = None,
    ) -> "HtmxResponse":
        """Navigate via AJAX, like following a boosted link.

        With only *url* the header is the plain URL; *target*, *swap* or
        *source* switch it to a JSON object.
        """
        if target is None and swap is None and source is None:
            self._response.set_header(HX_LOCATION, url)
            return self
        spec: dict[str, Any] = {"path": url}
        if target is not None:
            spec["target"] = target
        if swap is not None:
            spec["swap"] = swap
        if source is not None:
            spec["source"] = source
        return self.location_with_context(spec)

    def location_with_context(self, spec: dict[str, Any]) -> "HtmxResponse":
        """Set ``HX-Location`` to an arbitrary JSON context object."""
        self._response.set_header(HX_LOCATION, json_module.dumps(spec))
        return self

    def refresh(self) -> "HtmxResponse":
        self._response.set_header(HX_REFRESH, "true")
        return self

    def push_url(self, url: str | bool) -> "HtmxResponse":
        """Push a URL onto the history stack (``False`` suppresses the push)."""
        self._response.set_header(HX_PUSH_URL, _url_value(url))
        return self

    def replace_url(self, url: str | bool) -> "HtmxResponse":
        self._response.set_header(HX_REPLACE_URL, _url_value(url))
        return self

    def retarget(self, selector: str) -> "HtmxResponse":
        self._response.set_header(HX_RETARGET, selector)
        return self

    def reswap(self, strategy: str) -> "HtmxResponse":
        self._response.set_header(HX_RESWAP, strategy)
        return self

    def reselect(self, selector: str) -> "HtmxResponse":
        self._response.set_header(HX_RESELECT, selector)
        return self

    def stop_polling(self) -> "HtmxResponse":
        """Answer with status 286, which ends an htmx polling loop."""
        self._response.write_status(STOP_POLLING_STATUS)
        return self
