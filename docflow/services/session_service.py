# docflow/services/session_service.py

from enum import Enum
from typing import Optional

from loguru import logger

from docflow.core.config import settings
from docflow.core.errors import ApiError, AuthError
from docflow.core.roles import landing_path_for
from docflow.core.storage import Navigator, TokenStorage
from docflow.models.enums import Role
from docflow.schemas.auth import Session
from docflow.schemas.user import User
from docflow.services.api_gateway import DocflowApi


class SessionState(str, Enum):
    Unauthenticated = "unauthenticated"
    Authenticating = "authenticating"
    Authenticated = "authenticated"


class SessionManager:
    """
    Owns the bearer token and the current user.

    unauthenticated -> authenticating -> authenticated -> unauthenticated

    login() and logout() are the only writers of the token; a failed
    profile refresh drops straight back to unauthenticated.
    """

    def __init__(self, api: DocflowApi, tokens: TokenStorage, navigator: Navigator):
        self.api = api
        self.tokens = tokens
        self.navigator = navigator
        self.state = SessionState.Unauthenticated
        self.user: Optional[User] = None

    # ------------------------------------------------------------
    # Snapshot read by the authorization gate
    # ------------------------------------------------------------
    @property
    def token(self) -> Optional[str]:
        if self.state != SessionState.Authenticated:
            return None
        return self.tokens.get_token()

    @property
    def role(self) -> Optional[Role]:
        return self.user.role if self.user else None

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.Authenticated and self.user is not None

    @property
    def session(self) -> Optional[Session]:
        token = self.token
        if not token or self.user is None:
            return None
        return Session(token=token, user=self.user)

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------
    async def initialize(self) -> Optional[User]:
        """Fresh load: refresh the profile if a token was persisted."""
        if not self.tokens.get_token():
            self._teardown()
            return None
        try:
            return await self.get_current_user()
        except AuthError:
            return None

    async def login(self, email: str, password: str) -> Session:
        self.state = SessionState.Authenticating
        try:
            token, user = await self.api.login(email, password)
        except ApiError as exc:
            logger.warning(f"Login failed for {email}: {exc.message}")
            self._teardown()
            raise AuthError("invalid_credentials", exc.message or "Invalid credentials") from exc

        self.tokens.set_token(token)
        self.tokens.set_role(user.role.value)
        self.user = user
        self.state = SessionState.Authenticated
        logger.info(f"Signed in as {user.email} ({user.role.value})")

        # full navigation so edge gating re-evaluates with the new cookie
        self.navigator.navigate(landing_path_for(user.role))
        return Session(token=token, user=user)

    async def get_current_user(self) -> User:
        if not self.tokens.get_token():
            self._teardown()
            raise AuthError("unauthenticated", "No active session")

        if self.state == SessionState.Unauthenticated:
            self.state = SessionState.Authenticating
        try:
            user = await self.api.get_me()
        except ApiError as exc:
            # not transient: the token is invalid or expired
            logger.warning(f"Profile refresh failed, dropping session: {exc.message}")
            self._teardown()
            raise AuthError("unauthenticated", exc.message) from exc

        self.user = user
        self.tokens.set_role(user.role.value)
        self.state = SessionState.Authenticated
        return user

    def logout(self) -> None:
        if self.state != SessionState.Unauthenticated:
            logger.info("Signing out")
        self._teardown()
        self.navigator.navigate(settings.LOGIN_PATH)

    def expire(self) -> None:
        """Backend rejected the token mid-session."""
        if self.state != SessionState.Unauthenticated:
            logger.info("Session expired")
        self._teardown()

    def _teardown(self) -> None:
        self.tokens.clear()
        self.user = None
        self.state = SessionState.Unauthenticated
