"""
Local Passport - Username/password authentication

Hexagonal architecture for registering users, attaching local passports
(password credentials) to them and validating logins, with tokens and
sessions for the signed-in user.

Usage:
    from local_passport import AuthClient, AuthRequest

    client = AuthClient.from_settings(backend="memory")

    # Register
    request = AuthRequest(params={"email": "alice@example.com", "password": "s3cret-pass"})
    user = client.register(request)

    # Login
    result = client.login(AuthRequest(), "alice@example.com", "s3cret-pass")
    token = result["token"]
"""

__version__ = "0.1.0"

from local_passport.sdk.client import AuthClient
from local_passport.protocols.local import LocalProtocol, Flash
from local_passport.domain.user import User
from local_passport.domain.passport import Passport, Protocol
from local_passport.domain.session import Session
from local_passport.domain.request import AuthRequest
from local_passport.config import AuthSettings, get_settings
from local_passport.errors import (
    PassportError,
    ValidationError,
    MissingFieldError,
    AuthenticationError,
    NotAuthenticatedError,
)

__all__ = [
    "AuthClient",
    "LocalProtocol",
    "Flash",
    "User",
    "Passport",
    "Protocol",
    "Session",
    "AuthRequest",
    "AuthSettings",
    "get_settings",
    "PassportError",
    "ValidationError",
    "MissingFieldError",
    "AuthenticationError",
    "NotAuthenticatedError",
]
