"""
Identifier helpers - telling emails from usernames, canonical lookup keys.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email


def normalize_email(value: str) -> Optional[str]:
    """
    Return the normalized form of an email address, or None if invalid.

    Only syntax is checked; no DNS lookups are made.
    """
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        return None


def is_email(value: Optional[str]) -> bool:
    return bool(value) and normalize_email(value) is not None


def email_key(value: str) -> str:
    """
    Case-insensitive key used for email uniqueness and lookup.

    Valid addresses are normalized first so that equivalent spellings
    (punycode domains, Unicode forms) share a key with the stored form.
    """
    value = value.strip()
    return (normalize_email(value) or value).lower()


def username_key(value: str) -> str:
    """Case-insensitive key used for username uniqueness and lookup."""
    return value.strip().lower()
