"""
Redis Store Adapters - Redis-backed user and passport storage.

Layout (all keys under a common prefix):
    {prefix}user:{user_id}              JSON user document
    {prefix}user:email:{email}          user_id (unique index)
    {prefix}user:username:{username}    user_id (unique index)
    {prefix}passport:{passport_id}      JSON passport document
    {prefix}user:{user_id}:passports    set of passport_ids
    {prefix}user:{user_id}:passport:{protocol}:{provider}
                                        passport_id (unique slot)
"""

import json
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


def _connect(redis_url: str):
    try:
        import redis
    except ImportError:
        raise ImportError("redis package required: pip install redis")
    return redis.Redis.from_url(redis_url, decode_responses=True)


class RedisUserStore(UserStorePort):
    """
    Redis-backed user storage.

    Email and username uniqueness is claimed with SET NX on index keys,
    so concurrent registrations of the same address cannot both succeed.
    """

    def __init__(self, redis_client=None, prefix: str = "passport:", redis_url: str = "redis://localhost:6379/0"):
        """
        Initialize Redis user store.

        Args:
            redis_client: Redis client instance (decode_responses=True)
            prefix: Key prefix shared with RedisPassportStore
            redis_url: Used to connect lazily when no client is given
        """
        self._redis = redis_client
        self._prefix = prefix
        self._redis_url = redis_url

    def _get_redis(self):
        if self._redis is None:
            self._redis = _connect(self._redis_url)
        return self._redis

    def _key(self, user_id: str) -> str:
        return f"{self._prefix}user:{user_id}"

    def _email_key(self, email: str) -> str:
        return f"{self._prefix}user:email:{email_key(email)}"

    def _username_key(self, username: str) -> str:
        return f"{self._prefix}user:username:{username_key(username)}"

    def _claim(self, user: User) -> Tuple[List[str], List[str]]:
        """
        Claim index keys for user; release everything on conflict.

        Returns:
            (keys newly claimed, names of fields owned by another user)
        """
        redis = self._get_redis()
        claimed, taken = [], []

        for name, value, key_fn in (
            ("email", user.email, self._email_key),
            ("username", user.username, self._username_key),
        ):
            if not value:
                continue
            key = key_fn(value)
            if redis.set(key, user.user_id, nx=True):
                claimed.append(key)
            elif redis.get(key) != user.user_id:
                taken.append(name)

        if taken and claimed:
            redis.delete(*claimed)
            claimed = []
        return claimed, taken

    def _save(self, user: User):
        self._get_redis().set(self._key(user.user_id), json.dumps(user.to_dict()))

    def _save_or_release(self, user: User, claimed: List[str]):
        try:
            self._save(user)
        except Exception:
            # No document was written, so the new index keys would be orphaned
            if claimed:
                self._get_redis().delete(*claimed)
            raise

    def create(self, attributes: Dict[str, Any]) -> User:
        """Validate and store a new user."""
        user = build_user(attributes)

        claimed, taken = self._claim(user)
        if taken:
            raise unique_violation(taken)

        self._save_or_release(user, claimed)
        logger.debug("store.user.created", extra={"user_id": user.user_id})
        return user

    def get(self, user_id: str) -> Optional[User]:
        data = self._get_redis().get(self._key(user_id))
        if not data:
            return None

        try:
            return User.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError):
            logger.warning("store.user.corrupt", extra={"user_id": user_id})
            return None

    def find_one(self, **criteria: Any) -> Optional[User]:
        """Find a user by user_id, email and/or username."""
        redis = self._get_redis()
        user_id = criteria.get("user_id")

        for name, key_fn in (("email", self._email_key), ("username", self._username_key)):
            if name not in criteria:
                continue
            found = redis.get(key_fn(criteria[name] or ""))
            if not found or (user_id and found != user_id):
                return None
            user_id = found

        return self.get(user_id) if user_id else None

    def update(self, user: User) -> User:
        """Persist changes, moving email/username index keys if they changed."""
        current = self.get(user.user_id)
        if current is None:
            raise KeyError(user.user_id)

        claimed, taken = self._claim(user)
        if taken:
            raise unique_violation(taken)

        user.updated_at = datetime.utcnow()
        self._save_or_release(user, claimed)

        stale = []
        if current.email and (not user.email or email_key(current.email) != email_key(user.email)):
            stale.append(self._email_key(current.email))
        if current.username and (not user.username or username_key(current.username) != username_key(user.username)):
            stale.append(self._username_key(current.username))
        if stale:
            self._get_redis().delete(*stale)
        return user

    def destroy(self, user_id: str) -> bool:
        user = self.get(user_id)
        if not user:
            return False

        keys = [self._key(user_id)]
        if user.email:
            keys.append(self._email_key(user.email))
        if user.username:
            keys.append(self._username_key(user.username))

        self._get_redis().delete(*keys)
        logger.debug("store.user.destroyed", extra={"user_id": user_id})
        return True


class RedisPassportStore(PassportStorePort):
    """
    Redis-backed passport storage.

    Each user/protocol/provider slot is claimed with SET NX before the
    passport is written, so concurrent connects cannot both succeed.
    """

    def __init__(self, redis_client=None, prefix: str = "passport:", redis_url: str = "redis://localhost:6379/0"):
        self._redis = redis_client
        self._prefix = prefix
        self._redis_url = redis_url

    def _get_redis(self):
        if self._redis is None:
            self._redis = _connect(self._redis_url)
        return self._redis

    def _key(self, passport_id: str) -> str:
        return f"{self._prefix}passport:{passport_id}"

    def _user_key(self, user_id: str) -> str:
        return f"{self._prefix}user:{user_id}:passports"

    def _slot_key(self, passport: Passport) -> str:
        return f"{self._prefix}user:{passport.user_id}:passport:{passport.protocol.value}:{passport.provider or ''}"

    def _load(self, passport_id: str) -> Optional[Passport]:
        data = self._get_redis().get(self._key(passport_id))
        if not data:
            return None

        try:
            return Passport.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError):
            logger.warning("store.passport.corrupt", extra={"passport_id": passport_id})
            return None

    def create(self, passport: Passport) -> Passport:
        """Store a passport, one per user/protocol/provider."""
        redis = self._get_redis()
        slot = self._slot_key(passport)
        if not redis.set(slot, passport.passport_id, nx=True):
            raise duplicate_passport(passport.protocol.value, passport.user_id)

        try:
            redis.set(self._key(passport.passport_id), json.dumps(passport.to_dict(include_sensitive=True)))
            redis.sadd(self._user_key(passport.user_id), passport.passport_id)
        except Exception:
            redis.delete(slot, self._key(passport.passport_id))
            raise
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
        redis = self._get_redis()
        user_key = self._user_key(user_id)

        passports = []
        for passport_id in sorted(redis.smembers(user_key)):
            passport = self._load(passport_id)
            if passport:
                passports.append(passport)
            else:
                # Drop dangling index entries
                redis.srem(user_key, passport_id)

        passports.sort(key=lambda p: p.created_at)
        return passports

    def destroy(self, passport_id: str) -> bool:
        passport = self._load(passport_id)
        if not passport:
            return False

        redis = self._get_redis()
        slot = self._slot_key(passport)
        keys = [self._key(passport_id)]
        if redis.get(slot) == passport_id:
            keys.append(slot)
        redis.delete(*keys)
        redis.srem(self._user_key(passport.user_id), passport_id)
        return True
