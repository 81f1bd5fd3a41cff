"""
Ports - Interfaces for user storage, passport storage, tokens and sessions.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from local_passport.ports.user_port import UserStorePort
from local_passport.ports.passport_port import PassportStorePort
from local_passport.ports.auth_port import AuthenticationPort
from local_passport.ports.session_port import SessionPort

__all__ = [
    # Records
    "UserStorePort",
    "PassportStorePort",
    # Tokens & Sessions
    "AuthenticationPort",
    "SessionPort",
]
