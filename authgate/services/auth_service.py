"""Business logic for authenticating users by username or email."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from authgate.daos.database import DatabaseConnectorError
from authgate.daos.user_dao import UserDAOError
from authgate.dtos.auth_result import AuthenticationResult, AuthenticationStatus, LoginMode
from authgate.dtos.user_record import Credentials, UserRecord
from authgate.services.password_hasher import DEFAULT_ITERATIONS, dummy_hash, verify_password
from authgate.services.session_store import SessionStoreError


logger = logging.getLogger(__name__)

# OSError covers ConnectionError and TimeoutError from third-party backends
INFRASTRUCTURE_ERRORS = (DatabaseConnectorError, UserDAOError, SessionStoreError, OSError)


class AuthInfrastructureError(RuntimeError):
    """Raised when the user directory or the session backend fails."""


class UserDirectory(Protocol):
    """Lookup contract satisfied by :class:`authgate.daos.user_dao.UserDAO`."""

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...


class SessionManager(Protocol):
    """Session contract satisfied by :class:`authgate.services.session_store.SessionStore`."""

    def create(self, account: UserRecord) -> str:
        ...

    def destroy(self, token: Optional[str]) -> None:
        ...

    def is_guest(self, token: Optional[str]) -> bool:
        ...


class AuthService:
    """Decide whether a set of credentials may log in.

    The service keeps no per-call state, so one instance can serve concurrent
    requests. Rejections are returned as results; only collaborator failures
    raise :class:`AuthInfrastructureError`.
    """

    NOT_ACTIVATED_MESSAGE = "Your account has not been activated yet."
    SUCCESS_MESSAGE = "Login successful."

    def __init__(
        self,
        user_directory: UserDirectory,
        session_manager: SessionManager,
        password_iterations: int = DEFAULT_ITERATIONS,
    ) -> None:
        """Store the collaborators used for lookups and session creation.

        ``password_iterations`` sizes the hash checked for unknown identifiers so
        they take as long as a wrong password.
        """
        self._user_directory = user_directory
        self._session_manager = session_manager
        self._password_iterations = password_iterations

    @staticmethod
    def invalid_credentials_message(mode: LoginMode) -> str:
        """Return the generic text shared by unknown identifiers and wrong passwords."""
        field = "email" if mode == LoginMode.EMAIL else "username"
        return f"Incorrect {field} or password."

    def attempt_login(self, credentials: Credentials, mode: LoginMode) -> AuthenticationResult:
        """Authenticate the provided credentials returning a structured response."""
        account = self._lookup(credentials.identifier, mode)

        if account is None:
            verify_password(credentials.password, dummy_hash(self._password_iterations))
            return self._reject(
                AuthenticationStatus.UNKNOWN_IDENTIFIER,
                self.invalid_credentials_message(mode),
                credentials.identifier,
            )

        if not account.activated:
            return self._reject(
                AuthenticationStatus.NOT_ACTIVATED,
                self.NOT_ACTIVATED_MESSAGE,
                credentials.identifier,
            )

        if not verify_password(credentials.password, account.passwordHash):
            return self._reject(
                AuthenticationStatus.WRONG_PASSWORD,
                self.invalid_credentials_message(mode),
                credentials.identifier,
            )

        try:
            token = self._session_manager.create(account)
        except INFRASTRUCTURE_ERRORS as exc:
            logger.error("Unable to open a session for %s: %s", account.username, exc)
            raise AuthInfrastructureError("Unable to establish the session.") from exc

        logger.info("User %s logged in", account.username)
        return AuthenticationResult(
            status=AuthenticationStatus.AUTHENTICATED,
            message=self.SUCCESS_MESSAGE,
            username=account.username,
            sessionToken=token,
        )

    def logout(self, token: Optional[str]) -> None:
        """Close the session identified by ``token``."""
        try:
            self._session_manager.destroy(token)
        except INFRASTRUCTURE_ERRORS as exc:
            logger.error("Unable to close the session: %s", exc)
            raise AuthInfrastructureError("Unable to close the session.") from exc
        logger.info("Session closed")

    def is_guest(self, token: Optional[str]) -> bool:
        """Return ``True`` when ``token`` does not identify a live session."""
        try:
            return self._session_manager.is_guest(token)
        except INFRASTRUCTURE_ERRORS as exc:
            logger.error("Unable to check the session: %s", exc)
            raise AuthInfrastructureError("Unable to check the session.") from exc

    def _lookup(self, identifier: str, mode: LoginMode) -> Optional[UserRecord]:
        try:
            if mode == LoginMode.EMAIL:
                return self._user_directory.get_by_email(identifier)
            return self._user_directory.get_by_username(identifier)
        except INFRASTRUCTURE_ERRORS as exc:
            logger.error("Unable to look up %s %s: %s", mode.value, identifier, exc)
            raise AuthInfrastructureError("Unable to reach the user directory.") from exc

    @staticmethod
    def _reject(status: AuthenticationStatus, message: str, identifier: str) -> AuthenticationResult:
        logger.warning("Login rejected for %s: %s", identifier, status.value)
        return AuthenticationResult(status=status, message=message)
