import logging
from collections.abc import Callable

import httpx

from .api import ApiError, NotesClient
from .normalize import ViewUser

logger = logging.getLogger(__name__)

HOME_PATH = "/"
LOGIN_PATH = "/login"


class SessionContext:
    """Per-session holder of the signed-in user.

    Starts signed out; ``restore`` re-checks a saved token against the
    server before trusting it.
    """

    def __init__(self, client: NotesClient, navigate: Callable[[str], None] | None = None):
        self.client = client
        self._navigate = navigate or (lambda path: None)
        self.current_user: ViewUser | None = None
        self.is_loading = True
        self.error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def is_admin(self) -> bool:
        return self.current_user is not None and self.current_user.role == "ADMIN"

    @property
    def token(self) -> str | None:
        return self.client.token

    def clear_error(self) -> None:
        self.error = None

    def restore(self, token: str | None) -> bool:
        self.is_loading = True
        try:
            if not token:
                return False
            self.client.token = token
            try:
                self.current_user = self.client.me()
            except (ApiError, httpx.HTTPError) as exc:
                logger.info("Stored session rejected: %s", exc)
                self.client.token = None
                self.current_user = None
                return False
            return True
        finally:
            self.is_loading = False

    def login(self, username: str, password: str) -> bool:
        self.is_loading = True
        self.error = None
        try:
            user, token = self.client.login(username, password)
        except ApiError as exc:
            self.error = exc.message
            return False
        except httpx.HTTPError as exc:
            logger.error("Login request failed: %s", exc)
            self.error = "An unexpected error occurred during login."
            return False
        finally:
            self.is_loading = False
        self.client.token = token
        self.current_user = user
        self._navigate(HOME_PATH)
        return True

    def logout(self) -> None:
        self.current_user = None
        self.client.token = None
        self._navigate(LOGIN_PATH)

    def guard(self, path: str) -> bool:
        """Whether ``path`` may be shown now.

        Protected paths are held back while the session is still loading and
        redirect to the login page once it is known there is no user.
        """
        if self.current_user is not None or path == LOGIN_PATH:
            return True
        if self.is_loading:
            return False
        self._navigate(LOGIN_PATH)
        return False
