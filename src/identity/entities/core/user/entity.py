"""User domain entity."""

from typing import Any

from pydantic import Field

from src.identity.entities._base import Entity


class User(Entity):
    """User entity representing a person in the system.

    A user is created by a magic-link or SSO signup and owns zero or more
    provider accounts.
    """

    email: str | None = Field(default=None, description="User's unique email address")
    name: str | None = Field(default=None, description="User's display name")
    image: str | None = Field(default=None, description="User's avatar image URL")

    def __eq__(self, other: Any) -> bool:
        """Compare users by identity attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.email == other.email
            and self.name == other.name
            and self.image == other.image
        )

    def __hash__(self) -> int:
        """Hash based on identity attributes, ignoring timestamps."""
        return hash((self.id, self.email, self.name, self.image))
