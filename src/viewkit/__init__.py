"""viewkit: typed server-rendered pages on top of ASGI and kida.

A page is a view class that loads its own per-request state and renders
one template (or one block of it). Shared state lives in reusable
mixins; htmx requests can be answered with fragments of the same
template.

Basic usage::

    from dataclasses import dataclass, field
    from viewkit import App, BasePage, load_all

    @dataclass
    class HomePage:
        page: BasePage = field(default_factory=BasePage)

        async def load(self, request, response, app):
            return await load_all(request, response, app, self.page)

    app = App(MyServices())
    router = app.router().page("/", HomePage).build()  # an ASGI app
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "AuthProvider",
    "AuthUser",
    "BasePage",
    "ConfigurationError",
    "EntityListingData",
    "HTTPError",
    "HtmxAware",
    "HtmxResponse",
    "Loader",
    "LoginConfig",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "PageGroup",
    "Request",
    "Response",
    "ResponseWriter",
    "RouteBuilder",
    "Router",
    "SampleLoginPage",
    "SampleProfilePage",
    "SampleRegisterPage",
    "SortOption",
    "StaticFiles",
    "TemplateRef",
    "TemplateRenderError",
    "View",
    "ViewSpec",
    "ViewkitError",
    "WithAuth",
    "WithFiltering",
    "WithHtmx",
    "WithPagination",
    "auth_loader",
    "load_all",
    "parse_template_spec",
    "register",
    "register_adaptive",
    "register_group",
    "register_handler",
    "setup_templates",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import viewkit`` cheap and avoids loading kida until an
    ``App`` or template helper is actually used.
    """
    if name == "App":
        from viewkit.app import App

        return App

    if name == "AppConfig":
        from viewkit.config import AppConfig

        return AppConfig

    if name == "Request":
        from viewkit.http.request import Request

        return Request

    if name == "Response":
        from viewkit.http.response import Response

        return Response

    if name == "ResponseWriter":
        from viewkit.http.writer import ResponseWriter

        return ResponseWriter

    if name in ("HtmxAware", "Loader", "PageGroup", "View", "ViewSpec", "load_all"):
        from viewkit import views as _views

        return getattr(_views, name)

    if name in (
        "AuthProvider",
        "AuthUser",
        "BasePage",
        "WithAuth",
        "WithFiltering",
        "WithHtmx",
        "WithPagination",
        "auth_loader",
    ):
        from viewkit import mixins as _mixins

        return getattr(_mixins, name)

    if name == "HtmxResponse":
        from viewkit.htmx import HtmxResponse

        return HtmxResponse

    if name == "Router":
        from viewkit.routing.router import Router

        return Router

    if name == "RouteBuilder":
        from viewkit.routing.builder import RouteBuilder

        return RouteBuilder

    if name in ("register", "register_adaptive", "register_group", "register_handler"):
        from viewkit.routing import register as _register

        return getattr(_register, name)

    if name in ("TemplateRef", "parse_template_spec"):
        from viewkit.templating import spec as _spec

        return getattr(_spec, name)

    if name == "setup_templates":
        from viewkit.templating.integration import setup_templates

        return setup_templates

    if name == "StaticFiles":
        from viewkit.static import StaticFiles

        return StaticFiles

    if name in ("EntityListingData", "SortOption"):
        from viewkit import listing as _listing

        return getattr(_listing, name)

    if name in ("LoginConfig", "SampleLoginPage", "SampleProfilePage", "SampleRegisterPage"):
        from viewkit import pages as _pages

        return getattr(_pages, name)

    if name in ("Middleware", "Next"):
        from viewkit.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "TemplateRenderError",
        "ViewkitError",
    ):
        from viewkit import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
