"""Shared in-memory doubles replacing the users table and its fixtures."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Dict, List, Optional

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from authgate.dtos.user_record import AccountStatus, UserRecord
from authgate.services.auth_service import AuthService
from authgate.services.password_hasher import hash_password
from authgate.services.session_store import SessionStore

FAST_ITERATIONS = 1_000


def make_user(username: str, password: str, status: AccountStatus = AccountStatus.ACTIVATED) -> UserRecord:
    return UserRecord(
        username=username,
        email=f"{username}@example.com",
        displayName=username.capitalize(),
        passwordHash=hash_password(password, iterations=FAST_ITERATIONS),
        status=status,
    )


class FakeUserDAO:
    """Minimal in-memory DAO mirroring the users fixture data."""

    def __init__(self, users: List[UserRecord]) -> None:
        self._users: Dict[str, UserRecord] = {user.username: user for user in users}
        self.lookups: List[tuple] = []

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        self.lookups.append(("username", username))
        return self._users.get(username)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        self.lookups.append(("email", email))
        for user in self._users.values():
            if user.email == email:
                return user
        return None


class CountingSessionStore(SessionStore):
    """Session store that remembers every account it opened a session for."""

    def __init__(self) -> None:
        super().__init__()
        self.created: List[str] = []

    def create(self, account: UserRecord) -> str:
        token = super().create(account)
        self.created.append(account.username)
        return token


@pytest.fixture
def users() -> List[UserRecord]:
    return [
        make_user("member", "member123"),
        make_user("tester", "test123", AccountStatus.NOT_ACTIVATED),
        make_user("ghost", "ghost123", AccountStatus.DELETED),
    ]


@pytest.fixture
def user_dao(users: List[UserRecord]) -> FakeUserDAO:
    return FakeUserDAO(users)


@pytest.fixture
def session_store() -> CountingSessionStore:
    return CountingSessionStore()


@pytest.fixture
def auth_service(user_dao: FakeUserDAO, session_store: CountingSessionStore) -> AuthService:
    return AuthService(user_dao, session_store, password_iterations=FAST_ITERATIONS)
