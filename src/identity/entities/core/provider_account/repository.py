"""Provider account repository for data access operations."""

from sqlmodel import Session, select

from .entity import ProviderAccount
from .table import ProviderAccountTable


class ProviderAccountRepository:
    """Data-access layer for provider accounts."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_provider_account_id(
        self, provider: str, provider_account_id: str
    ) -> ProviderAccount | None:
        statement = select(ProviderAccountTable).where(
            (ProviderAccountTable.provider == provider)
            & (ProviderAccountTable.provider_account_id == provider_account_id)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return ProviderAccount.model_validate(row, from_attributes=True)

    def list_for_user(self, user_id: str) -> list[ProviderAccount]:
        statement = (
            select(ProviderAccountTable)
            .where(ProviderAccountTable.user_id == user_id)
            .order_by(ProviderAccountTable.created_at)
        )
        rows = self._session.exec(statement).all()
        return [ProviderAccount.model_validate(row, from_attributes=True) for row in rows]

    def create(self, account: ProviderAccount) -> ProviderAccount:
        """Stage a new provider account row; the caller owns the transaction."""
        row = ProviderAccountTable.model_validate(account, from_attributes=True)
        self._session.add(row)
        return account
