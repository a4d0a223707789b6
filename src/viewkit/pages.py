"""Sample account pages.

Starting points for login, registration, and profile screens. Subclass
them (or copy their fields) and pair them with your own templates::

    @dataclass
    class LoginPage(SampleLoginPage):
        pass

    app.router().page("/login", LoginPage, template="auth/LoginPage")
"""

from dataclasses import dataclass, field
from typing import Any

from viewkit.http.request import Request
from viewkit.http.writer import ResponseWriter
from viewkit.mixins import BasePage


@dataclass(frozen=True, slots=True)
class LoginConfig:
    """Which login methods the login page offers."""

    enable_email_login: bool = False
    enable_google_login: bool = False
    enable_github_login: bool = False
    enable_microsoft_login: bool = False
    enable_apple_login: bool = False


@dataclass
class SampleLoginPage:
    page: BasePage = field(default_factory=BasePage)
    callback_url: str = ""
    csrf_token: str = ""
    config: LoginConfig = field(default_factory=LoginConfig)

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        self.page.load(request, response, app)
        self.page.disable_splash_screen = True
        self.callback_url = request.query.get("callbackURL", "") or ""
        return False


@dataclass
class SampleRegisterPage:
    """Registration form state. ``errors`` maps field names to messages."""

    page: BasePage = field(default_factory=BasePage)
    callback_url: str = ""
    csrf_token: str = ""
    name: str = ""
    email: str = ""
    password: str = ""
    verify_password: str = ""
    errors: dict[str, str] = field(default_factory=dict)

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        self.page.load(request, response, app)
        self.callback_url = request.query.get("callbackURL", "") or ""
        return False


@dataclass
class SampleProfilePage:
    """The signed-in user's profile, plus email verification feedback.

    ``load`` only handles the query flags; fill the user fields from your
    own auth service after calling it.
    """

    page: BasePage = field(default_factory=BasePage)
    user_id: str = ""
    email: str = ""
    email_verified: bool = False
    username: str = ""
    profile: dict[str, Any] = field(default_factory=dict)
    verification_sent: bool = False
    verification_error: str = ""

    def load(self, request: Request, response: ResponseWriter, app: Any) -> bool:
        self.page.load(request, response, app)
        self.page.title = "Profile"
        self.page.active_tab = "profile"
        self.page.disable_splash_screen = True

        if request.query.get("verification_sent") == "true":
            self.verification_sent = True
        if verification_error := request.query.get("verification_error"):
            self.verification_error = verification_error
        return False
