"""
Record validation shared by the store adapters.
"""

from typing import Dict, Any, List, Optional

from local_passport.domain.identifiers import normalize_email
from local_passport.domain.user import User
from local_passport.errors import ValidationError

USER_FIELDS = {"email", "username", "metadata", "is_active"}


def build_user(attributes: Dict[str, Any]) -> User:
    """
    Build a new User from raw attributes, checking field formats.

    Raises:
        ValidationError: If email is malformed, username is blank or an
            email address, or unknown attributes are given
    """
    invalid: Dict[str, List[str]] = {}

    unknown = set(attributes) - USER_FIELDS
    for name in sorted(unknown):
        invalid[name] = ["unknown"]

    email: Optional[str] = attributes.get("email")
    if email is not None:
        normalized = normalize_email(email)
        if normalized is None:
            invalid["email"] = ["email"]
        email = normalized

    username: Optional[str] = attributes.get("username")
    if username is not None:
        username = username.strip()
        if not username:
            invalid["username"] = ["required"]
        elif normalize_email(username) is not None:
            # Logins route email-shaped identifiers to the email lookup
            invalid["username"] = ["email"]

    if invalid:
        raise ValidationError(
            f"User validation failed: invalid {', '.join(sorted(invalid))}.",
            invalid_attributes=invalid,
        )

    user = User.create(email=email, username=username, metadata=attributes.get("metadata"))
    if "is_active" in attributes:
        user.is_active = bool(attributes["is_active"])
    return user


def unique_violation(fields: List[str]) -> ValidationError:
    """Build the error raised when email/username is already taken."""
    return ValidationError(
        f"User validation failed: {', '.join(fields)} already in use.",
        invalid_attributes={name: ["unique"] for name in fields},
    )


def duplicate_passport(protocol: str, user_id: str) -> ValidationError:
    return ValidationError(
        f"Passport validation failed: user {user_id} already has a {protocol} passport.",
        invalid_attributes={"protocol": ["unique"]},
    )
