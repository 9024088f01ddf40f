"""Email Validation — structural check on user-supplied addresses.

Invariants:
    - Syntax only: never performs DNS or deliverability lookups
    - Never raises; returns False for None, empty, or malformed input
"""

from email_validator import EmailNotValidError, validate_email


def is_valid_email(email: str | None) -> bool:
    if not email or not isinstance(email, str):
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
