"""Core services exports."""

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .database.identity_store import IdentityStore

# User Services
from .user.account_linker import AccountLinker
from .user.identity_service import IdentityService
from .user.user_resolver import UserResolver

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    "IdentityStore",
    # User Services
    "AccountLinker",
    "IdentityService",
    "UserResolver",
]
