"""Data transfer objects for accounts and the credentials used to reach them."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class AccountStatus(IntEnum):
    """Activation states stored in the ``status`` column of the users table."""

    DELETED = 0
    NOT_ACTIVATED = 1
    ACTIVATED = 10

    @classmethod
    def from_db_value(cls, value: object) -> "AccountStatus":
        """Translate a raw column value, treating unknown values as not activated."""

        try:
            return cls(int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls.NOT_ACTIVATED


@dataclass(slots=True)
class UserRecord:
    """Represent a single row from the users table."""

    username: str
    email: Optional[str]
    displayName: Optional[str]
    passwordHash: Optional[str]
    status: AccountStatus = AccountStatus.NOT_ACTIVATED

    @property
    def activated(self) -> bool:
        return self.status == AccountStatus.ACTIVATED


@dataclass(slots=True, frozen=True)
class Credentials:
    """Identifier and plaintext password supplied at login."""

    identifier: str
    password: str = field(repr=False)
