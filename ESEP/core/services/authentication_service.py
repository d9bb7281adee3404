"""
Authentication Service
Admin login against the admin_users table and the session object handed to pages
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.repositories.admin_user_repository import AdminUserRepository
from core.models.entities import AdminUser
from core.models.roles import Action, Capabilities, Section
from utils.exceptions import AuthenticationException, AuthorizationException, ValidationException
from utils.helpers import LoggingUtils


@dataclass(frozen=True)
class AdminSession:
    """Logged-in admin plus the capabilities of their role"""
    user: AdminUser
    capabilities: Capabilities
    login_time: datetime

    @classmethod
    def start(cls, user: AdminUser) -> "AdminSession":
        return cls(user=user, capabilities=Capabilities.for_role(user.role), login_time=datetime.now())

    @property
    def username(self) -> str:
        return self.user.username

    @property
    def role(self):
        return self.capabilities.role

    def can(self, action: Action) -> bool:
        return self.capabilities.allows(action)

    def can_open(self, section: Section) -> bool:
        return self.capabilities.can_open(section)

    def require(self, action: Action):
        """Raise AuthorizationException when the role lacks the action"""
        if not self.can(action):
            LoggingUtils.log_security_event(
                "action_denied",
                username=self.username,
                details={'role': self.role.value, 'action': action.value}
            )
            raise AuthorizationException(
                f"{self.role.value} is not allowed to {action.value.replace('_', ' ')}"
            )


SESSION_KEY = "admin_session"


class SessionStore:
    """One admin session per client, kept under a single key of a state mapping
    (Streamlit's session_state in the app)."""

    def __init__(self, state, auth: "AuthenticationService" = None):
        self.state = state
        self.auth = auth

    def login(self, username: str, password: str) -> AdminSession:
        session = (self.auth or AuthenticationService()).login(username, password)
        self.state[SESSION_KEY] = session
        return session

    def current(self) -> Optional[AdminSession]:
        return self.state.get(SESSION_KEY)

    def current_user(self) -> Optional[AdminUser]:
        session = self.current()
        return session.user if session else None

    def logout(self):
        session = self.current()
        if session is not None:
            LoggingUtils.log_security_event("logout", username=session.username)
        if SESSION_KEY in self.state:
            del self.state[SESSION_KEY]


class AuthenticationService:
    """Service class for admin authentication"""

    def __init__(self, admin_repo: AdminUserRepository = None):
        self.admin_repo = admin_repo or AdminUserRepository()

    def login(self, username: str, password: str) -> AdminSession:
        """Authenticate an admin and open a session.

        Credentials are compared in plain text against the stored values.
        """
        if not username or not password:
            raise ValidationException("Username and password are required")

        try:
            user = self.admin_repo.authenticate(username, password)
            if not user.is_active:
                raise AuthenticationException("Invalid username or password")
        except AuthenticationException:
            LoggingUtils.log_security_event("login_failed", username=username)
            raise

        # Sessions never carry the password
        user = replace(user, password='')
        LoggingUtils.log_security_event(
            "login_success",
            username=user.username,
            details={'role': user.role}
        )
        return AdminSession.start(user)
