from collections.abc import Mapping
from typing import Any

from loguru import logger

from src.identity.core.exceptions import Conflict, InvalidEmail, InvalidProfile
from src.identity.core.models.email import normalize_email
from src.identity.core.models.profile import ProviderProfile
from src.identity.core.services.database.identity_store import IdentityStore
from src.identity.core.services.user.account_linker import AccountLinker
from src.identity.core.services.user.user_resolver import UserResolver
from src.identity.entities.core.provider_account import ProviderAccount
from src.identity.entities.core.user import User
from src.identity.runtime.context import get_config

ProfileInput = ProviderProfile | Mapping[str, Any]


class IdentityService:
    """Entry point for the authentication flow layer.

    Creation methods raise ``Conflict`` when the identity already exists.
    The ``resolve_*`` methods implement find-or-create: a ``Conflict`` from a
    lost signup race is answered by resolving the user that won it.
    """

    def __init__(
        self,
        store: IdentityStore,
        resolver: UserResolver | None = None,
        linker: AccountLinker | None = None,
    ):
        self._store = store
        self._resolver = resolver or UserResolver(store)
        self._linker = linker or AccountLinker(store)

    async def find_user_by_email(self, email: str) -> User | None:
        return await self._resolver.find_by_email(email)

    async def find_user_by_id(self, user_id: str) -> User | None:
        return await self._resolver.find_by_id(user_id)

    async def create_user_magic(self, email: str) -> User:
        """Create a user and its magic-link provider account.

        The email doubles as the provider account ID.

        Raises:
            InvalidEmail: If the email is blank
            Conflict: If the email is already registered
        """
        email = normalize_email(email)
        if email is None:
            raise InvalidEmail("Email is required for magic-link signup")

        user = User(email=email)
        account = ProviderAccount(
            user_id=user.id,
            provider=get_config().identity.magic_provider,
            provider_account_id=email,
        )
        try:
            created = self._store.create_user_with_account(user, account)
        except Conflict:
            logger.warning("Magic-link signup for an existing identity")
            raise

        logger.info("Created user via magic link", user_id=created.id)
        return created

    async def create_user_sso(
        self,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProfileInput,
    ) -> User:
        """Create a user and its first SSO provider account.

        Raises:
            InvalidProfile: If the profile is malformed, has no email, or
                comes from a provider that is not allowed
            Conflict: If the email or the provider account is already registered
        """
        profile = ProviderProfile.parse(profile)
        email = profile.primary_email
        if email is None:
            raise InvalidProfile(
                f"Profile from provider '{profile.provider}' has no email address"
            )

        user = User(
            email=email,
            name=profile.display_name,
            image=profile.primary_photo,
        )
        account = self._linker.build_account(user, access_token, refresh_token, profile)
        try:
            created = self._store.create_user_with_account(user, account)
        except Conflict:
            logger.warning(
                "SSO signup for an existing identity", provider=profile.provider
            )
            raise

        logger.info(
            "Created user via SSO", user_id=created.id, provider=profile.provider
        )
        return created

    async def create_provider_account(
        self,
        user: User,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProfileInput,
    ) -> ProviderAccount:
        """Link an additional provider account to an existing user.

        Raises:
            NotFound: If ``user`` is not registered
            Conflict: If the provider account is already linked
        """
        return await self._linker.link_provider_account(
            user, access_token, refresh_token, ProviderProfile.parse(profile)
        )

    async def resolve_user_magic(self, email: str) -> User:
        """Return the user registered under ``email``, creating it if needed."""
        user = await self._resolver.find_by_email(email)
        if user is not None:
            return user

        try:
            return await self.create_user_magic(email)
        except Conflict:
            user = await self._resolver.find_by_email(email)
            if user is None:
                # The conflicting row is a provider account, not this email
                raise
            return user

    async def resolve_user_sso(
        self,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProfileInput,
    ) -> User:
        """Return the user for an SSO login, linking or creating as needed.

        Resolution order: the external identity itself, then the profile's
        email (linking the provider to that user), then a new signup.
        """
        profile = ProviderProfile.parse(profile)

        user = await self._resolve_existing_sso(access_token, refresh_token, profile)
        if user is not None:
            return user

        try:
            return await self.create_user_sso(access_token, refresh_token, profile)
        except Conflict:
            user = await self._resolve_existing_sso(
                access_token, refresh_token, profile
            )
            if user is None:
                raise
            return user

    async def _resolve_existing_sso(
        self,
        access_token: str | None,
        refresh_token: str | None,
        profile: ProviderProfile,
    ) -> User | None:
        user = await self._resolver.find_by_provider_account(
            profile.provider, profile.id
        )
        if user is not None:
            return user

        if profile.primary_email is None:
            raise InvalidProfile(
                f"Profile from provider '{profile.provider}' has no email address"
            )

        user = await self._resolver.find_by_email(profile.primary_email)
        if user is None:
            return None

        await self._linker.link_or_get_provider_account(
            user, access_token, refresh_token, profile
        )
        return user
