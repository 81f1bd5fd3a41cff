"""
User Store Port - Interface for persisting user records.

Implementations:
- MemoryUserStore: In-memory store (testing/development)
- RedisUserStore: Redis-backed store
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from local_passport.domain.user import User


class UserStorePort(ABC):
    """Port: Create, look up and remove users."""

    @abstractmethod
    def create(self, attributes: Dict[str, Any]) -> User:
        """
        Create and persist a new user.

        Args:
            attributes: User fields (email, username, metadata)

        Returns:
            Created user with its assigned user_id

        Raises:
            ValidationError: If email is malformed, or email/username is taken.
                invalid_attributes names the offending fields.
        """
        pass

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        """
        Get a user by ID.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    def find_one(self, **criteria: Any) -> Optional[User]:
        """
        Find the first user matching all criteria.

        Supported criteria: user_id, email, username.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    def update(self, user: User) -> User:
        """
        Persist changes to an existing user.

        Raises:
            ValidationError: If the change breaks a uniqueness rule
            KeyError: If the user does not exist
        """
        pass

    @abstractmethod
    def destroy(self, user_id: str) -> bool:
        """
        Delete a user.

        Returns:
            True if deleted, False if not found
        """
        pass
