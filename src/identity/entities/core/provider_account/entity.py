"""Provider account domain entity."""

from pydantic import Field

from src.identity.entities._base import Entity


class ProviderAccount(Entity):
    """Provider account mapping one external identity to an internal user.

    The pair (provider, provider_account_id) identifies the external account
    and is unique across the system. Tokens are ``None`` when the provider
    did not issue them.
    """

    user_id: str = Field(description="Internal user ID owning this account")
    provider: str = Field(description="Provider name, e.g. 'magic' or 'google'")
    provider_account_id: str = Field(
        description="Account identifier assigned by the provider"
    )
    provider_refresh_token: str | None = Field(
        default=None, repr=False, description="Refresh token issued by the provider"
    )
    provider_access_token: str | None = Field(
        default=None, repr=False, description="Access token issued by the provider"
    )
