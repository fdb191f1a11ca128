"""Identity error hierarchy.

Lookups that miss raise ``NotFound`` inside the store adapter and are turned
into ``None`` by the resolver. Everything else is surfaced to callers of the
identity service.
"""


class IdentityError(Exception):
    """Base class for identity errors."""


class NotFound(IdentityError):
    """A lookup matched no record."""

    def __init__(self, entity: str, criteria: dict[str, str]):
        self.entity = entity
        self.criteria = criteria
        super().__init__(f"{entity} not found for {criteria}")


class Conflict(IdentityError):
    """A create violated a uniqueness invariant.

    Raised for a duplicate email or a duplicate (provider,
    provider_account_id) pair. Callers racing on the same identity should
    re-resolve instead of failing.
    """

    def __init__(self, entity: str, detail: str | None = None):
        self.entity = entity
        self.detail = detail
        message = f"{entity} already exists"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidProfile(IdentityError):
    """The provider profile cannot be used to create or link an account."""


class StoreUnavailable(IdentityError):
    """The identity store failed for reasons other than a uniqueness violation."""


class InvalidEmail(IdentityError):
    """The email address is blank after normalization."""
