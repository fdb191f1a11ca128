"""Identity resolution and provider account linking.

This package resolves users by email or identifier, creates users through
magic-link and SSO signups, and links additional provider accounts to
existing users.
"""

__version__ = "0.1.0"
