"""
Passport Store Port - Interface for persisting passports.

Implementations:
- MemoryPassportStore: In-memory store (testing/development)
- RedisPassportStore: Redis-backed store
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from local_passport.domain.passport import Passport, Protocol


class PassportStorePort(ABC):
    """Port: Store the passports that belong to each user."""

    @abstractmethod
    def create(self, passport: Passport) -> Passport:
        """
        Persist a new passport.

        Raises:
            ValidationError: If the user already has a passport for this
                protocol and provider
        """
        pass

    @abstractmethod
    def find_one(self, protocol: Protocol, user_id: str) -> Optional[Passport]:
        """
        Find a user's passport for a protocol.

        Returns:
            Passport if found, None otherwise
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Passport]:
        """List every passport owned by a user."""
        pass

    @abstractmethod
    def destroy(self, passport_id: str) -> bool:
        """
        Delete a passport.

        Returns:
            True if deleted, False if not found
        """
        pass
