"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from local_passport.domain.user import User
from local_passport.domain.passport import Passport, Protocol
from local_passport.domain.session import Session, SessionStatus
from local_passport.domain.request import AuthRequest, FlashMessages

__all__ = [
    "User",
    "Passport",
    "Protocol",
    "Session",
    "SessionStatus",
    "AuthRequest",
    "FlashMessages",
]
