"""
Session Port - Interface for login session storage.

Implementations:
- RedisSessionAdapter: Redis-backed sessions
- MemorySessionAdapter: In-memory sessions (testing only)
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from local_passport.domain.session import Session


class SessionPort(ABC):
    """Port: Manage login sessions."""

    @abstractmethod
    def create(
        self,
        user_id: str,
        ttl: int = 3600,
        protocol: str = "local",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Session:
        """
        Open a session for a signed-in user.

        Args:
            user_id: Signed-in user
            ttl: Time-to-live in seconds
            protocol: Protocol the user authenticated with
            metadata: Optional session metadata

        Returns:
            Created session
        """
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session by ID.

        Returns:
            Session if found and valid, None otherwise
        """
        pass

    @abstractmethod
    def update(self, session_id: str, metadata: Dict[str, Any]) -> bool:
        """
        Merge metadata into a session.

        Returns:
            True if updated, False if not found
        """
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """
        Delete a session.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Session]:
        """List the valid sessions of a user."""
        pass

    @abstractmethod
    def extend(self, session_id: str, ttl: int) -> bool:
        """
        Extend a session's expiry.

        Returns:
            True if extended, False if not found or the cap was reached
        """
        pass

    @abstractmethod
    def cleanup_expired(self) -> int:
        """
        Remove expired sessions.

        Returns:
            Number of sessions removed
        """
        pass
