"""Provider account entity module.

- ProviderAccount: Domain entity linking an external identity to a user
- ProviderAccountTable: Database persistence model
- ProviderAccountRepository: Data access layer
"""

from .entity import ProviderAccount
from .repository import ProviderAccountRepository
from .table import ProviderAccountTable

__all__ = ["ProviderAccount", "ProviderAccountTable", "ProviderAccountRepository"]
