"""Provider account database table model."""

from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field

from src.identity.entities._base import EntityTable


class ProviderAccountTable(EntityTable, table=True):
    """Database persistence model for provider accounts."""

    __table_args__ = (
        UniqueConstraint(
            "provider", "provider_account_id", name="uq_account_provider_account_id"
        ),
    )

    user_id: str = Field(foreign_key="usertable.id", ondelete="CASCADE", index=True)
    provider: str = Field(sa_column=Column(String(64), nullable=False, index=True))
    provider_account_id: str = Field(
        sa_column=Column(String(512), nullable=False, index=True)
    )
    provider_refresh_token: str | None = Field(default=None)
    provider_access_token: str | None = Field(default=None)
