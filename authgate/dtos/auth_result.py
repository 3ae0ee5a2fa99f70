"""Data transfer objects describing authentication responses."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LoginMode(str, Enum):
    """Select which account field identifies the user at login."""

    USERNAME = "username"
    EMAIL = "email"


class AuthenticationStatus(str, Enum):
    """Enumerate the possible outcomes of a login attempt."""

    AUTHENTICATED = "authenticated"
    UNKNOWN_IDENTIFIER = "unknown_identifier"
    WRONG_PASSWORD = "wrong_password"
    NOT_ACTIVATED = "not_activated"


@dataclass(slots=True)
class AuthenticationResult:
    """Represent the result of an authentication attempt.

    ``status`` keeps the precise reason for internal callers while ``message``
    is safe to show to the person logging in.
    """

    status: AuthenticationStatus
    message: str
    username: Optional[str] = None
    sessionToken: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the login established a session."""

        return self.status == AuthenticationStatus.AUTHENTICATED
