from loguru import logger

from src.identity.core.exceptions import Conflict, InvalidProfile, NotFound
from src.identity.core.models.profile import ProviderProfile
from src.identity.core.services.database.identity_store import IdentityStore
from src.identity.entities.core.provider_account import ProviderAccount
from src.identity.entities.core.user import User
from src.identity.runtime.context import get_config


def normalize_token(token: str | None) -> str | None:
    """Map a missing or blank token to None so it is stored as absent."""
    return token if token else None


class AccountLinker:
    def __init__(self, store: IdentityStore):
        self._store = store

    def build_account(
        self,
        user: User,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProviderProfile,
    ) -> ProviderAccount:
        if not get_config().identity.is_provider_allowed(profile.provider):
            raise InvalidProfile(f"Provider '{profile.provider}' is not allowed")

        return ProviderAccount(
            user_id=user.id,
            provider=profile.provider,
            provider_account_id=profile.id,
            provider_refresh_token=normalize_token(refresh_token),
            provider_access_token=normalize_token(access_token),
        )

    async def link_provider_account(
        self,
        user: User,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProviderProfile,
    ) -> ProviderAccount:
        """Create a provider account owned by ``user``.

        Raises:
            NotFound: If ``user`` is not registered
            Conflict: If the provider account is already linked to any user
            InvalidProfile: If the profile's provider is not allowed
        """
        account = self.build_account(user, access_token, refresh_token, profile)
        try:
            created = self._store.create_provider_account(account)
        except Conflict:
            logger.warning(
                "Provider account already linked",
                provider=profile.provider,
                user_id=user.id,
            )
            raise

        logger.info(
            "Linked provider account",
            provider=created.provider,
            user_id=user.id,
        )
        return created

    async def link_or_get_provider_account(
        self,
        user: User,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProviderProfile,
    ) -> ProviderAccount:
        """Link the account, treating an existing link to the same user as success.

        Raises:
            Conflict: If the provider account belongs to a different user
        """
        try:
            return await self.link_provider_account(
                user, access_token, refresh_token, profile
            )
        except Conflict as conflict:
            try:
                existing = self._store.find_provider_account(
                    profile.provider, profile.id
                )
            except NotFound:
                # The conflicting account was removed before it could be read
                raise conflict from None
            if existing.user_id != user.id:
                raise
            return existing
