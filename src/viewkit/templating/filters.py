"""Built-in viewkit template filters.

Auto-registered on every environment viewkit creates. They cover the
helpers server-rendered page templates keep reaching for: raw HTML
passthrough, JSON for inline scripts, and query-string building for
pagination and filter links.
"""

import html
import json
import logging
from typing import Any
from urllib.parse import quote, urlencode

from kida.template import Markup

logger = logging.getLogger("viewkit.templating")


def safe_html(value: str) -> Markup:
    """Mark *value* as trusted HTML so autoescape leaves it alone."""
    return Markup(value)


def to_json(value: Any) -> Markup:
    """Serialize *value* as JSON for use inside ``<script>`` tags.

    Unserializable values render as ``null`` and are logged.

    Example:
        <script>const game = {{ view.game | to_json }};</script>
    """
    if value is None:
        return Markup("null")
    try:
        payload = json.dumps(value, default=str)
    except (TypeError, ValueError):
        logger.warning("Cannot serialize %s to JSON", type(value).__name__, exc_info=True)
        return Markup("null")
    # Keep "</script>" from closing the surrounding tag
    return Markup(payload.replace("</", "<\\/"))


def indented(code: str, nspaces: int = 0) -> Markup:
    """Render multi-line text with ``<br/>`` line breaks, escaping each line.

    Each line is prefixed with *nspaces* non-breaking spaces.

    Example:
        {{ game.notes | indented(4) }}
    """
    indent = "&nbsp;" * max(nspaces, 0)
    lines = str(code).strip().split("\n")
    return Markup("<br/>".join(indent + html.escape(line) for line in lines))


def default_if_empty(value: Any, fallback: Any) -> Any:
    """Return *fallback* when *value* is ``None`` or an empty string."""
    if value is None or value == "":
        return fallback
    return value


def qs(base: str, **params: Any) -> str:
    """Append query-string parameters to a URL path.

    Omits parameters whose values are ``None`` or ``""`` so optional
    filters need no guards. Zero is kept: ``page=0`` is a real page.

    Example:
        {{ "/games" | qs(page=p, q=filtering.query, sort=filtering.sort) }}
        → "/games?page=2&sort=name"
    """
    filtered = {k: v for k, v in params.items() if v is not None and v != ""}
    if not filtered:
        return base
    encoded = urlencode({k: str(v) for k, v in filtered.items()}, quote_via=quote)
    sep = "&" if "?" in base else "?"
    return f"{base}{sep}{encoded}"


# All built-in viewkit filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "default_if_empty": default_if_empty,
    "indented": indented,
    "qs": qs,
    "safe_html": safe_html,
    "to_json": to_json,
}
