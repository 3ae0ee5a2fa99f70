"""Form model behind the login screen."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from authgate.dtos.auth_result import AuthenticationResult, LoginMode
from authgate.dtos.user_record import Credentials
from authgate.services.auth_service import AuthService

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class LoginForm:
    """Collect login input, validate it and report errors per field.

    Rejected logins always record their message under ``password`` so the
    screen never hints whether the identifier exists.
    """

    def __init__(self, auth_service: AuthService, mode: LoginMode = LoginMode.USERNAME) -> None:
        self._auth_service = auth_service
        self.mode = mode
        self.username = ""
        self.email = ""
        self.password = ""
        self.errors: Dict[str, List[str]] = {}
        self.result: Optional[AuthenticationResult] = None
        self._session_token: Optional[str] = None

    @property
    def identifier_field(self) -> str:
        return "email" if self.mode == LoginMode.EMAIL else "username"

    @property
    def identifier(self) -> str:
        return getattr(self, self.identifier_field).strip()

    @property
    def is_guest(self) -> bool:
        """Return ``True`` while the form holds no live session."""

        return self._auth_service.is_guest(self._session_token)

    @property
    def session_token(self) -> Optional[str]:
        return self._session_token

    def add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def has_errors(self, field: Optional[str] = None) -> bool:
        if field is None:
            return bool(self.errors)
        return field in self.errors

    def validate(self) -> bool:
        """Check required fields and the email format, filling ``errors``."""

        self.errors = {}
        identifier = self.identifier
        if not identifier:
            self.add_error(self.identifier_field, f"{self.identifier_field.capitalize()} cannot be blank.")
        elif self.mode == LoginMode.EMAIL and not EMAIL_PATTERN.match(identifier):
            self.add_error("email", "Email is not a valid email address.")
        if not self.password:
            self.add_error("password", "Password cannot be blank.")
        return not self.errors

    def login(self) -> bool:
        """Validate the input and log the user in.

        Returns:
            ``True`` when a session was established, ``False`` otherwise.
        """

        if not self.validate():
            return False

        self.result = self._auth_service.attempt_login(
            Credentials(identifier=self.identifier, password=self.password),
            self.mode,
        )
        if not self.result.succeeded:
            self.add_error("password", self.result.message)
            return False

        # one live session per form
        self.logout()
        self._session_token = self.result.sessionToken
        return True

    def logout(self) -> None:
        """Close the current session, if any."""

        if self._session_token is None:
            return
        self._auth_service.logout(self._session_token)
        self._session_token = None
