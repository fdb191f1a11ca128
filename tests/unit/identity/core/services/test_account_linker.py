"""Unit tests for the account linker."""

import pytest

from src.identity.core.exceptions import Conflict, InvalidProfile
from src.identity.core.models.profile import ProviderProfile
from src.identity.core.services.database.identity_store import IdentityStore
from src.identity.core.services.user.account_linker import (
    AccountLinker,
    normalize_token,
)
from src.identity.entities.core.provider_account import ProviderAccount
from src.identity.entities.core.user import User
from src.identity.runtime.config.config_data import ConfigData, IdentityConfig
from src.identity.runtime.context import with_context


@pytest.fixture
def magic_user(identity_store: IdentityStore) -> User:
    user = User(email="ann@example.com")
    account = ProviderAccount(
        user_id=user.id, provider="magic", provider_account_id="ann@example.com"
    )
    return identity_store.create_user_with_account(user, account)


@pytest.fixture
def profile(google_profile) -> ProviderProfile:
    return ProviderProfile.parse(google_profile)


class TestNormalizeToken:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [("abc", "abc"), ("", None), (None, None)],
    )
    def test_normalize_token(self, token, expected):
        assert normalize_token(token) == expected


class TestAccountLinker:
    @pytest.mark.asyncio
    async def test_link_provider_account(
        self, account_linker: AccountLinker, identity_store: IdentityStore, magic_user, profile
    ):
        account = await account_linker.link_provider_account(
            magic_user, "access", "refresh", profile
        )

        stored = identity_store.find_provider_account("google", "g123")
        assert stored.id == account.id
        assert stored.user_id == magic_user.id
        assert stored.provider_access_token == "access"
        assert stored.provider_refresh_token == "refresh"

    @pytest.mark.asyncio
    async def test_absent_tokens_are_stored_as_none(
        self, account_linker: AccountLinker, identity_store: IdentityStore, magic_user, profile
    ):
        await account_linker.link_provider_account(magic_user, "", None, profile)

        stored = identity_store.find_provider_account("google", "g123")
        assert stored.provider_access_token is None
        assert stored.provider_refresh_token is None

    @pytest.mark.asyncio
    async def test_relinking_raises_conflict(
        self, account_linker: AccountLinker, magic_user, profile
    ):
        await account_linker.link_provider_account(magic_user, "a", None, profile)

        with pytest.raises(Conflict):
            await account_linker.link_provider_account(magic_user, "a", None, profile)

    @pytest.mark.asyncio
    async def test_link_or_get_returns_existing_link(
        self, account_linker: AccountLinker, magic_user, profile
    ):
        first = await account_linker.link_provider_account(
            magic_user, "a", None, profile
        )

        again = await account_linker.link_or_get_provider_account(
            magic_user, "b", None, profile
        )

        assert again.id == first.id

    @pytest.mark.asyncio
    async def test_link_or_get_rejects_account_owned_by_other_user(
        self, account_linker: AccountLinker, identity_store: IdentityStore, magic_user, profile
    ):
        other = User(email="bob@example.com")
        identity_store.create_user_with_account(
            other,
            ProviderAccount(
                user_id=other.id, provider="magic", provider_account_id=other.email
            ),
        )
        await account_linker.link_provider_account(other, None, None, profile)

        with pytest.raises(Conflict):
            await account_linker.link_or_get_provider_account(
                magic_user, None, None, profile
            )

    @pytest.mark.asyncio
    async def test_disallowed_provider_raises_invalid_profile(
        self, account_linker: AccountLinker, magic_user, profile
    ):
        override = ConfigData(identity=IdentityConfig(allowed_providers=["github"]))

        with with_context(override):
            with pytest.raises(InvalidProfile):
                await account_linker.link_provider_account(
                    magic_user, None, None, profile
                )
