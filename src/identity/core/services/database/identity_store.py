"""Identity store adapter over the User and ProviderAccount tables.

Each operation runs in its own transaction. Database exceptions are
translated here and nowhere else: unique-constraint violations become
``Conflict``, misses (including a missing owner when linking an account)
become ``NotFound`` and every other database failure becomes
``StoreUnavailable``.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from src.identity.core.exceptions import Conflict, NotFound, StoreUnavailable
from src.identity.core.services.database.db_session import DbSessionService
from src.identity.entities.core.provider_account import (
    ProviderAccount,
    ProviderAccountRepository,
)
from src.identity.entities.core.user import User, UserRepository


class IdentityStore:
    def __init__(self, db_session_service: DbSessionService):
        self._db = db_session_service

    @contextmanager
    def _transaction(self, entity: str) -> Iterator[Session]:
        try:
            with self._db.session_scope() as session:
                yield session
        except IntegrityError as e:
            raise Conflict(entity, str(e.orig)) from e
        except SQLAlchemyError as e:
            logger.error(
                "Identity store operation failed",
                entity=entity,
                error_type=type(e).__name__,
            )
            raise StoreUnavailable(f"Identity store unavailable: {e}") from e

    def find_user_by_email(self, email: str) -> User:
        with self._transaction("User") as session:
            user = UserRepository(session).get_by_email(email)
        if user is None:
            raise NotFound("User", {"email": email})
        return user

    def find_user_by_id(self, user_id: str) -> User:
        with self._transaction("User") as session:
            user = UserRepository(session).get(user_id)
        if user is None:
            raise NotFound("User", {"id": user_id})
        return user

    def find_provider_account(
        self, provider: str, provider_account_id: str
    ) -> ProviderAccount:
        with self._transaction("ProviderAccount") as session:
            account = ProviderAccountRepository(session).get_by_provider_account_id(
                provider, provider_account_id
            )
        if account is None:
            raise NotFound(
                "ProviderAccount",
                {"provider": provider, "provider_account_id": provider_account_id},
            )
        return account

    def list_provider_accounts(self, user_id: str) -> list[ProviderAccount]:
        with self._transaction("ProviderAccount") as session:
            return ProviderAccountRepository(session).list_for_user(user_id)

    def create_user_with_account(self, user: User, account: ProviderAccount) -> User:
        """Insert a user and its first provider account in one transaction.

        Raises:
            Conflict: If the email or the provider account is already taken;
                neither row is persisted
        """
        if account.user_id != user.id:
            raise ValueError("Provider account must belong to the user being created")

        with self._transaction("User") as session:
            UserRepository(session).create(user)
            # Users must hit the table before the account referencing them
            session.flush()
            ProviderAccountRepository(session).create(account)
        return user

    def create_provider_account(self, account: ProviderAccount) -> ProviderAccount:
        """Insert a provider account for an existing user.

        Raises:
            NotFound: If the owning user does not exist
            Conflict: If the (provider, provider_account_id) pair is taken
        """
        with self._transaction("ProviderAccount") as session:
            if UserRepository(session).get(account.user_id) is None:
                raise NotFound("User", {"id": account.user_id})
            ProviderAccountRepository(session).create(account)
        return account

    def ping(self) -> None:
        if not self._db.health_check():
            raise StoreUnavailable("Identity store is not reachable")
