"""Controller that wires configuration, storage and login forms together."""

from __future__ import annotations

from typing import Optional

from authgate.config.auth_config import AuthConfiguration
from authgate.daos.database import DatabaseConnector
from authgate.daos.user_dao import UserDAO
from authgate.dtos.auth_result import LoginMode
from authgate.controllers.login_form import LoginForm
from authgate.services.auth_service import AuthService
from authgate.services.session_store import SessionStore


class AuthenticationController:
    """Hand out login forms bound to the configured login mode."""

    def __init__(self, auth_service: AuthService, mode: LoginMode) -> None:
        """Persist the service and the mode every new form uses."""

        self._auth_service = auth_service
        self._mode = mode

    @classmethod
    def from_configuration(
        cls,
        configuration: Optional[AuthConfiguration] = None,
        session_store: Optional[SessionStore] = None,
    ) -> "AuthenticationController":
        """Build the SQL Server backed controller described by ``configuration``."""

        configuration = configuration or AuthConfiguration()
        user_connector = DatabaseConnector(configuration=configuration).connection_factory()
        auth_service = AuthService(
            UserDAO(user_connector),
            session_store or SessionStore(),
            password_iterations=configuration.get_password_iterations(),
        )
        return cls(auth_service, configuration.get_login_mode())

    @property
    def mode(self) -> LoginMode:
        return self._mode

    @property
    def auth_service(self) -> AuthService:
        return self._auth_service

    def create_form(self) -> LoginForm:
        """Return an empty form for a new login attempt."""

        return LoginForm(self._auth_service, self._mode)
