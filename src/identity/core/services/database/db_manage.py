"""Schema management for the identity tables."""

from loguru import logger
from sqlmodel import SQLModel

from src.identity.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, db_session_service: DbSessionService | None = None):
        self._db = db_session_service or DbSessionService()

    def create_all(self) -> None:
        """Create all database tables."""
        from src.identity.entities.core.provider_account import (  # noqa: F401
            ProviderAccountTable,
        )
        from src.identity.entities.core.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._db.engine)
        logger.info("Database initialized with tables.")
