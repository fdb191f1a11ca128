"""Provider profile models consumed by signup and account linking."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.identity.core.exceptions import InvalidProfile
from src.identity.core.models.email import normalize_email


class ProfileValue(BaseModel):
    """A single ``{"value": ...}`` entry of a provider profile list."""

    model_config = ConfigDict(extra="ignore")

    value: str = Field(description="Email address or photo URL")


class ProviderProfile(BaseModel):
    """Profile returned by an SSO provider after the OAuth handshake.

    Accepts the passport-style payload shape (``displayName``, ``emails``,
    ``photos``) as well as snake_case field names.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    provider: str = Field(min_length=1, description="Provider key, e.g. 'google'")
    id: str = Field(min_length=1, description="Account ID assigned by the provider")
    display_name: str | None = Field(
        default=None, alias="displayName", description="Display name"
    )
    emails: list[ProfileValue] = Field(default_factory=list)
    photos: list[ProfileValue] = Field(default_factory=list)

    @property
    def primary_email(self) -> str | None:
        """First email entry, or None when the provider returned none."""
        if not self.emails:
            return None
        return normalize_email(self.emails[0].value)

    @property
    def primary_photo(self) -> str | None:
        """First photo entry, or None when the provider returned none."""
        if not self.photos:
            return None
        return self.photos[0].value or None

    @classmethod
    def parse(cls, payload: "ProviderProfile | Mapping[str, Any]") -> "ProviderProfile":
        """Validate an untyped provider payload.

        Raises:
            InvalidProfile: If required fields are missing or malformed
        """
        if isinstance(payload, cls):
            return payload
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidProfile(f"Malformed provider profile: {e}") from e
