"""Unit tests for the identity store adapter."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from src.identity.core.exceptions import Conflict, NotFound, StoreUnavailable
from src.identity.core.services.database.identity_store import IdentityStore
from src.identity.entities.core.provider_account import (
    ProviderAccount,
    ProviderAccountTable,
)
from src.identity.entities.core.user import User, UserTable


def _signup(email: str, provider: str = "magic", account_id: str | None = None):
    user = User(email=email)
    account = ProviderAccount(
        user_id=user.id, provider=provider, provider_account_id=account_id or email
    )
    return user, account


class TestIdentityStoreFind:
    def test_find_user_by_email(self, identity_store: IdentityStore):
        user, account = _signup("ann@example.com")
        identity_store.create_user_with_account(user, account)

        assert identity_store.find_user_by_email("ann@example.com") == user

    def test_find_user_by_email_raises_not_found(self, identity_store: IdentityStore):
        with pytest.raises(NotFound) as exc_info:
            identity_store.find_user_by_email("nobody@example.com")

        assert exc_info.value.entity == "User"
        assert exc_info.value.criteria == {"email": "nobody@example.com"}

    def test_find_user_by_id_raises_not_found(self, identity_store: IdentityStore):
        with pytest.raises(NotFound):
            identity_store.find_user_by_id("missing")

    def test_find_provider_account(self, identity_store: IdentityStore):
        user, account = _signup("ann@example.com", "google", "g123")
        identity_store.create_user_with_account(user, account)

        found = identity_store.find_provider_account("google", "g123")

        assert found.id == account.id
        assert found.user_id == user.id

    def test_find_provider_account_raises_not_found(
        self, identity_store: IdentityStore
    ):
        with pytest.raises(NotFound):
            identity_store.find_provider_account("google", "missing")


class TestIdentityStoreCreate:
    def test_create_user_with_account_persists_both(
        self, identity_store: IdentityStore, session: Session
    ):
        user, account = _signup("ann@example.com")

        identity_store.create_user_with_account(user, account)

        assert session.get(UserTable, user.id) is not None
        assert session.get(ProviderAccountTable, account.id) is not None

    def test_duplicate_email_raises_conflict(self, identity_store: IdentityStore):
        identity_store.create_user_with_account(*_signup("ann@example.com"))

        with pytest.raises(Conflict):
            identity_store.create_user_with_account(
                *_signup("ann@example.com", "google", "g123")
            )

    def test_failed_signup_leaves_no_partial_identity(
        self, identity_store: IdentityStore, session: Session
    ):
        """A conflicting account must roll back the user created alongside it."""
        identity_store.create_user_with_account(
            *_signup("ann@example.com", "google", "g123")
        )
        user, account = _signup("bob@example.com", "google", "g123")

        with pytest.raises(Conflict):
            identity_store.create_user_with_account(user, account)

        assert session.get(UserTable, user.id) is None
        emails = session.exec(select(UserTable.email)).all()
        assert emails == ["ann@example.com"]

    def test_account_must_belong_to_user(self, identity_store: IdentityStore):
        user = User(email="ann@example.com")
        account = ProviderAccount(
            user_id="someone-else", provider="magic", provider_account_id="x"
        )

        with pytest.raises(ValueError):
            identity_store.create_user_with_account(user, account)

    def test_create_provider_account_duplicate_raises_conflict(
        self, identity_store: IdentityStore
    ):
        user, account = _signup("ann@example.com")
        identity_store.create_user_with_account(user, account)
        linked = ProviderAccount(
            user_id=user.id, provider="google", provider_account_id="g123"
        )
        identity_store.create_provider_account(linked)

        with pytest.raises(Conflict):
            identity_store.create_provider_account(
                ProviderAccount(
                    user_id=user.id, provider="google", provider_account_id="g123"
                )
            )

    def test_create_provider_account_for_missing_user_raises_not_found(
        self, identity_store: IdentityStore, session: Session
    ):
        orphan = ProviderAccount(
            user_id="no-such-user", provider="google", provider_account_id="g1"
        )

        with pytest.raises(NotFound) as exc_info:
            identity_store.create_provider_account(orphan)

        assert exc_info.value.entity == "User"
        assert exc_info.value.criteria == {"id": "no-such-user"}
        assert session.exec(select(ProviderAccountTable)).all() == []

    def test_list_provider_accounts(self, identity_store: IdentityStore):
        user, account = _signup("ann@example.com")
        identity_store.create_user_with_account(user, account)

        accounts = identity_store.list_provider_accounts(user.id)

        assert [a.provider for a in accounts] == ["magic"]


class TestIdentityStoreFailures:
    @pytest.fixture
    def broken_store(self) -> IdentityStore:
        db = MagicMock()
        db.session_scope.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )
        db.health_check.return_value = False
        return IdentityStore(db)

    def test_database_errors_become_store_unavailable(self, broken_store):
        with pytest.raises(StoreUnavailable):
            broken_store.find_user_by_email("ann@example.com")

    def test_ping_raises_when_unreachable(self, broken_store):
        with pytest.raises(StoreUnavailable):
            broken_store.ping()

    def test_ping_healthy_store(self, identity_store: IdentityStore):
        identity_store.ping()
