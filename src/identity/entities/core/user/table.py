"""User database table model."""

from sqlalchemy import Column, String
from sqlmodel import Field

from src.identity.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    The unique constraint on ``email`` is what keeps concurrent signups for
    the same address from producing two users.
    """

    email: str | None = Field(
        default=None,
        sa_column=Column(String(320), unique=True, nullable=True, index=True),
    )
    name: str | None = None
    image: str | None = None
