def normalize_email(email: str | None) -> str | None:
    """Return the stored form of an email address.

    Surrounding whitespace is removed and case is kept. Blank input yields
    None. Every write and every lookup goes through this function.
    """
    if email is None:
        return None
    return email.strip() or None
