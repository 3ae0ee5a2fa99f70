"""Data access object for reading user records from SQL Server."""

import importlib
from contextlib import closing
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Tuple, Type

if TYPE_CHECKING:  # pragma: no cover - only used for typing
    import pymssql

from authgate.daos.database import DatabaseConnectorError
from authgate.dtos.user_record import AccountStatus, UserRecord


class UserDAOError(RuntimeError):
    """Raised when the DAO fails to fetch or parse a user record."""


class UserDAO:
    """Retrieve users from SQL Server using a provided connection factory."""

    _SELECT_COLUMNS = "username, email, display_name, password_hash, status"

    def __init__(self, connection_factory: Callable[[], "pymssql.Connection"]) -> None:
        """Store the connection factory for later usage."""
        self._connection_factory = connection_factory

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Return the user associated to the username or ``None`` if missing."""
        return self._fetch_one("username", username)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Return the user owning the email address or ``None`` if missing."""
        return self._fetch_one("email", email)

    @staticmethod
    def _error_types() -> Tuple[Type[BaseException], ...]:
        try:
            pymssql = importlib.import_module("pymssql")
        except ModuleNotFoundError:
            return (DatabaseConnectorError,)
        return (DatabaseConnectorError, pymssql.Error)

    def _fetch_one(self, column: str, value: str) -> Optional[UserRecord]:
        # column is always one of the literals above, never caller input
        query = f"SELECT {self._SELECT_COLUMNS} FROM dbo.users WHERE {column} = %s"
        try:
            with closing(self._connection_factory()) as connection:
                with closing(connection.cursor(as_dict=True)) as cursor:
                    cursor.execute(query, (value,))
                    row = cursor.fetchone()
        except self._error_types() as exc:
            raise UserDAOError("Unable to query the user in the database.") from exc

        if not row:
            return None
        return self._row_to_record(row)

    @staticmethod
    def _row_to_record(row: Mapping[str, Any]) -> UserRecord:
        """Convert a dictionary row into a user record."""
        return UserRecord(
            username=row.get("username"),
            email=row.get("email"),
            displayName=row.get("display_name"),
            passwordHash=row.get("password_hash"),
            status=AccountStatus.from_db_value(row.get("status")),
        )
