"""
Memory Store Adapters - In-memory user and passport storage.
"""

import logging
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple

from local_passport.adapters.validation import build_user, unique_violation, duplicate_passport
from local_passport.domain.identifiers import email_key, username_key
from local_passport.domain.passport import Passport, Protocol
from local_passport.domain.user import User
from local_passport.ports.passport_port import PassportStorePort
from local_passport.ports.user_port import UserStorePort

logger = logging.getLogger(__name__)


class MemoryUserStore(UserStorePort):
    """
    In-memory user storage.

    WARNING: Only for testing and local development. Users are lost on
    restart and nothing is shared between processes.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._by_email: Dict[str, str] = {}
        self._by_username: Dict[str, str] = {}
        # Keys each user is indexed under; records are shared and may be
        # mutated by callers before update()
        self._keys: Dict[str, Tuple[Optional[str], Optional[str]]] = {}

    def _taken(self, user: User, ignore_id: Optional[str] = None) -> List[str]:
        taken = []
        if user.email and self._by_email.get(email_key(user.email), ignore_id) != ignore_id:
            taken.append("email")
        if user.username and self._by_username.get(username_key(user.username), ignore_id) != ignore_id:
            taken.append("username")
        return taken

    def _index(self, user: User):
        keys = (
            email_key(user.email) if user.email else None,
            username_key(user.username) if user.username else None,
        )
        if keys[0]:
            self._by_email[keys[0]] = user.user_id
        if keys[1]:
            self._by_username[keys[1]] = user.user_id
        self._keys[user.user_id] = keys

    def _unindex(self, user_id: str):
        email, username = self._keys.pop(user_id, (None, None))
        if email:
            self._by_email.pop(email, None)
        if username:
            self._by_username.pop(username, None)

    def create(self, attributes: Dict[str, Any]) -> User:
        """Validate and store a new user."""
        user = build_user(attributes)

        taken = self._taken(user)
        if taken:
            raise unique_violation(taken)

        self._users[user.user_id] = user
        self._index(user)
        logger.debug("store.user.created", extra={"user_id": user.user_id})
        return user

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def find_one(self, **criteria: Any) -> Optional[User]:
        """Find a user by user_id, email and/or username."""
        candidates = None
        if "user_id" in criteria:
            candidates = {criteria["user_id"]}
        if "email" in criteria:
            found = self._by_email.get(email_key(criteria["email"] or ""))
            candidates = self._narrow(candidates, found)
        if "username" in criteria:
            found = self._by_username.get(username_key(criteria["username"] or ""))
            candidates = self._narrow(candidates, found)

        if not candidates:
            return None
        return self._users.get(next(iter(candidates)))

    @staticmethod
    def _narrow(candidates, found):
        matches = {found} if found else set()
        return matches if candidates is None else candidates & matches

    def update(self, user: User) -> User:
        """Persist changes to an existing user, re-indexing email/username."""
        current = self._users.get(user.user_id)
        if current is None:
            raise KeyError(user.user_id)

        taken = self._taken(user, ignore_id=user.user_id)
        if taken:
            raise unique_violation(taken)

        self._unindex(user.user_id)
        user.updated_at = datetime.utcnow()
        self._users[user.user_id] = user
        self._index(user)
        return user

    def destroy(self, user_id: str) -> bool:
        user = self._users.pop(user_id, None)
        if not user:
            return False

        self._unindex(user_id)
        logger.debug("store.user.destroyed", extra={"user_id": user_id})
        return True


class MemoryPassportStore(PassportStorePort):
    """
    In-memory passport storage.

    WARNING: Only for testing and local development.
    """

    def __init__(self):
        self._passports: Dict[str, Passport] = {}
        self._user_passports: Dict[str, List[str]] = {}

    @staticmethod
    def _slot(passport: Passport) -> Tuple[str, Optional[str]]:
        return passport.protocol.value, passport.provider

    def create(self, passport: Passport) -> Passport:
        """Store a passport, one per user/protocol/provider."""
        for existing in self.list_by_user(passport.user_id):
            if self._slot(existing) == self._slot(passport):
                raise duplicate_passport(passport.protocol.value, passport.user_id)

        self._passports[passport.passport_id] = passport
        self._user_passports.setdefault(passport.user_id, []).append(passport.passport_id)
        logger.debug(
            "store.passport.created",
            extra={"passport_id": passport.passport_id, "protocol": passport.protocol.value},
        )
        return passport

    def find_one(self, protocol: Protocol, user_id: str) -> Optional[Passport]:
        for passport in self.list_by_user(user_id):
            if passport.protocol is protocol:
                return passport
        return None

    def list_by_user(self, user_id: str) -> List[Passport]:
        return [self._passports[pid] for pid in self._user_passports.get(user_id, [])]

    def destroy(self, passport_id: str) -> bool:
        passport = self._passports.pop(passport_id, None)
        if not passport:
            return False

        owned = self._user_passports.get(passport.user_id, [])
        owned.remove(passport_id)
        if not owned:
            del self._user_passports[passport.user_id]
        return True
