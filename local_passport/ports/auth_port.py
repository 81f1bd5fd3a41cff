"""
Authentication Port - Interface for bearer tokens issued after login.

Implementations:
- JWTAuthAdapter: signed JWT tokens
"""

from abc import ABC, abstractmethod
from typing import Optional
from local_passport.domain.user import User


class AuthenticationPort(ABC):
    """Port: Issue, check and revoke tokens for signed-in users."""

    @abstractmethod
    def authenticate(self, token: str) -> Optional[User]:
        """
        Resolve a token to the user it was issued for.

        Args:
            token: Bearer token

        Returns:
            User carried by the token if valid, None otherwise
        """
        pass

    @abstractmethod
    def create_token(self, user: User, expires_in: int = 3600) -> str:
        """
        Issue a token for a user.

        Args:
            user: Signed-in user
            expires_in: Token lifetime in seconds

        Returns:
            Token string
        """
        pass

    @abstractmethod
    def verify_token(self, token: str) -> bool:
        """Return True if the token is valid and not revoked."""
        pass

    @abstractmethod
    def revoke_token(self, token: str) -> bool:
        """
        Revoke a token.

        Returns:
            True if revoked, False if it was already revoked
        """
        pass
