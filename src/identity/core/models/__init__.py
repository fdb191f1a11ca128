"""Identity boundary models."""

from .email import normalize_email
from .profile import ProfileValue, ProviderProfile

__all__ = ["ProviderProfile", "ProfileValue", "normalize_email"]
