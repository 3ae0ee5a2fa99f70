"""Tests for the in-process session token store."""

import pytest

from authgate.dtos.user_record import AccountStatus, UserRecord
from authgate.services.session_store import SessionStore, SessionStoreError


def _account(username: str = "member") -> UserRecord:
    return UserRecord(
        username=username,
        email=f"{username}@example.com",
        displayName=None,
        passwordHash=None,
        status=AccountStatus.ACTIVATED,
    )


def test_created_token_is_not_guest() -> None:
    store = SessionStore()

    token = store.create(_account())

    assert store.is_guest(token) is False
    assert store.get_username(token) == "member"


def test_missing_and_unknown_tokens_are_guests() -> None:
    store = SessionStore()

    assert store.is_guest(None) is True
    assert store.is_guest("") is True
    assert store.is_guest("not-a-token") is True
    assert store.get_username("not-a-token") is None


def test_destroy_is_idempotent() -> None:
    store = SessionStore()
    token = store.create(_account())

    store.destroy(token)
    store.destroy(token)
    store.destroy(None)

    assert store.is_guest(token) is True
    assert store.count() == 0


def test_each_login_gets_its_own_token() -> None:
    store = SessionStore()

    first = store.create(_account())
    second = store.create(_account())

    assert first != second
    store.destroy(first)
    assert store.is_guest(second) is False


def test_account_without_username_is_refused() -> None:
    with pytest.raises(SessionStoreError):
        SessionStore().create(_account(""))
