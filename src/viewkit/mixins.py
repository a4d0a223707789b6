"""Reusable per-request page state.

Each mixin is a small dataclass with a ``load`` method. Views hold the
ones they need as fields and pass them to ``load_all`` in the order
they depend on each other. Templates reach them through the view::

    <body class="{{ page.body_class }}">
    {% for p in pagination.pages %}...{% endfor %}
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from viewkit import htmx
from viewkit.http.request import Request
from viewkit.http.writer import ResponseWriter
from viewkit.views import LoaderFunc

logger = logging.getLogger("viewkit.mixins")

DEFAULT_BODY_CLASS = (
    "h-screen flex flex-col bg-gray-50 dark:bg-gray-900 text-gray-900 dark:text-gray-100"
)
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
PAGE_WINDOW = 5
DEFAULT_SORT = "modified_desc"
DEFAULT_VIEW_MODE = "table"


@dataclass
class BasePage:
    """Common page metadata: title, body classes, navigation, splash screen."""

    title: str = ""
    body_class: str = ""
    active_tab: str = ""
    custom_header: bool = False  # Skip the default header
    disable_splash_screen: bool = False
    splash_title: str = ""
    splash_message: str = ""
    body_data_attributes: str = ""

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        if not self.body_class:
            self.body_class = DEFAULT_BODY_CLASS
        return False


@dataclass
class WithPagination:
    """Page number and size from the query string, plus the page window.

    ``page`` is 0-indexed. Call ``set_total`` once the item count is known
    to fill the navigation fields.
    """

    current_page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    total_count: int = 0
    has_prev_page: bool = False
    has_next_page: bool = False
    pages: list[int] = field(default_factory=list)

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        self.current_page = max(request.query.get_int("page", 0), 0)
        page_size = request.query.get_int("pageSize", DEFAULT_PAGE_SIZE)
        if page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        self.page_size = min(page_size, MAX_PAGE_SIZE)
        return False

    @property
    def offset(self) -> int:
        """Row offset for the current page."""
        return self.current_page * self.page_size

    @property
    def prev_page(self) -> int:
        return max(self.current_page - 1, 0)

    @property
    def next_page(self) -> int:
        return self.current_page + 1

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0 or self.page_size <= 0:
            return 0
        return -(-self.total_count // self.page_size)

    @property
    def paginator(self) -> "WithPagination":
        """Self, so shared pagination templates can use ``paginator.*``."""
        return self

    def set_total(self, total: int, has_more: bool) -> None:
        self.total_count = total
        self.has_next_page = has_more
        self.has_prev_page = self.current_page > 0
        self.eval_pages()

    def eval_pages(self) -> None:
        """Compute up to five page numbers centred on the current page."""
        self.pages = []
        total_pages = self.total_pages
        if total_pages <= 1:
            return

        start = max(self.current_page - 2, 0)
        end = start + PAGE_WINDOW
        if end > total_pages:
            end = total_pages
            start = max(end - PAGE_WINDOW, 0)
        self.pages = list(range(start, end))


@dataclass
class WithFiltering:
    """Search text, sort order, and display mode from ``q``/``sort``/``view``."""

    query: str = ""
    sort: str = ""
    view_mode: str = ""

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        self.query = request.query.get("q", "") or ""
        self.sort = request.query.get("sort", DEFAULT_SORT) or DEFAULT_SORT
        self.view_mode = request.query.get("view", DEFAULT_VIEW_MODE) or DEFAULT_VIEW_MODE
        return False


class AuthUser(Protocol):
    """A user record that can describe itself as a profile dict."""

    def profile(self) -> dict[str, Any]: ...


class AuthProvider(Protocol):
    """The two lookups ``WithAuth`` needs from an auth service."""

    def get_logged_in_user_id(self, request: Request) -> str:
        """Return the current user's id, or ``""`` when logged out."""
        ...

    def get_user_by_id(self, user_id: str) -> AuthUser | None: ...


@dataclass
class WithAuth:
    """Who is looking at the page.

    ``load`` does nothing: auth depends on the application's provider, so
    views call ``load_with_auth`` or chain ``auth_loader(...)`` instead.
    """

    logged_in_user_id: str = ""
    username: str = ""
    is_logged_in: bool = False
    is_owner: bool = False

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        return False

    def load_with_auth(self, request: Request, provider: AuthProvider) -> bool:
        """Fill the fields from *provider*.

        Being logged out is not an error, and neither is a failed profile
        lookup: the page still renders, just without a username.
        """
        self.logged_in_user_id = provider.get_logged_in_user_id(request) or ""
        self.is_logged_in = self.logged_in_user_id != ""
        if not self.is_logged_in:
            return False

        try:
            user = provider.get_user_by_id(self.logged_in_user_id)
        except Exception:
            logger.debug("Profile lookup failed for user %s", self.logged_in_user_id, exc_info=True)
            return False
        if user is not None:
            username = user.profile().get("username")
            if isinstance(username, str):
                self.username = username
        return False


def auth_loader(auth: WithAuth, provider: AuthProvider) -> LoaderFunc[Any]:
    """Adapt ``auth.load_with_auth`` into a loader for ``load_all``::

        await load_all(request, response, app,
                       self.page, auth_loader(self.auth, app.context.auth))
    """

    def load(request: Request, response: ResponseWriter, app: Any) -> bool:
        return auth.load_with_auth(request, provider)

    return load


@dataclass
class WithHtmx:
    """The htmx request headers, copied verbatim."""

    is_htmx: bool = False
    is_boosted: bool = False
    target: str = ""
    trigger: str = ""
    trigger_name: str = ""
    current_url: str = ""
    prompt: str = ""

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        self.is_htmx = htmx.is_htmx_request(request)
        self.is_boosted = htmx.is_boosted_request(request)
        self.target = htmx.htmx_target(request)
        self.trigger = htmx.htmx_trigger(request)
        self.trigger_name = htmx.htmx_trigger_name(request)
        self.current_url = htmx.htmx_current_url(request)
        self.prompt = htmx.htmx_prompt(request)
        return False

    def should_render_fragment(self) -> bool:
        """Partial swaps get a fragment; boosted navigations get full pages."""
        return self.is_htmx and not self.is_boosted
