from src.identity.core.exceptions import NotFound
from src.identity.core.models.email import normalize_email
from src.identity.core.services.database.identity_store import IdentityStore
from src.identity.entities.core.user import User


class UserResolver:
    """Read-only user lookups.

    A miss is an expected outcome and yields ``None``; ``StoreUnavailable``
    still propagates so callers can tell absence from failure.
    """

    def __init__(self, store: IdentityStore):
        self._store = store

    async def find_by_email(self, email: str) -> User | None:
        """Look up a user by email, normalized the same way signups store it."""
        email = normalize_email(email)
        if email is None:
            return None
        try:
            return self._store.find_user_by_email(email)
        except NotFound:
            return None

    async def find_by_id(self, user_id: str) -> User | None:
        try:
            return self._store.find_user_by_id(user_id)
        except NotFound:
            return None

    async def find_by_provider_account(
        self, provider: str, provider_account_id: str
    ) -> User | None:
        """Resolve the user owning an external identity."""
        try:
            account = self._store.find_provider_account(provider, provider_account_id)
            return self._store.find_user_by_id(account.user_id)
        except NotFound:
            return None
