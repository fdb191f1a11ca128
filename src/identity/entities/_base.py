"""Shared identifier and timestamp columns for identity records.

``Entity`` is what services pass around; ``EntityTable`` is its persisted
twin. Repositories convert between them with ``model_validate``.
"""

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    id: str = PydanticField(default_factory=new_id, description="UUID of the record")
    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)


class EntityTable(SQLModel, table=False):
    """Columns every identity table carries.

    The id is assigned by the entity before insert so a user and its first
    provider account can reference each other within one transaction.
    """

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        sa_column_kwargs={"onupdate": sa.func.now()},
    )
