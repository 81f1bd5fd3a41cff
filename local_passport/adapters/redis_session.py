"""
Redis Session Adapter - Redis-backed login sessions.
"""

import json
import logging
from typing import Optional, List, Dict, Any
from local_passport.ports.session_port import SessionPort
from local_passport.domain.session import Session

logger = logging.getLogger(__name__)


class RedisSessionAdapter(SessionPort):
    """
    Redis-backed session storage.

    Sessions are stored as JSON with a Redis TTL that tracks expires_at,
    so Redis drops them on its own once they lapse.
    """

    def __init__(
        self,
        redis_client=None,
        prefix: str = "passport:session:",
        redis_url: str = "redis://localhost:6379/0",
        max_duration: int = 86400,
    ):
        """
        Initialize Redis session adapter.

        Args:
            redis_client: Redis client instance (decode_responses=True)
            prefix: Key prefix for sessions
            redis_url: Used to connect lazily when no client is given
            max_duration: Cap on total session lifetime in seconds
        """
        self._redis = redis_client
        self._prefix = prefix
        self._redis_url = redis_url
        self._max_duration = max_duration

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            try:
                import redis
            except ImportError:
                raise ImportError("redis package required: pip install redis")
            self._redis = redis.Redis.from_url(self._redis_url, decode_responses=True)
        return self._redis

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    def _user_key(self, user_id: str) -> str:
        return f"{self._prefix}user:{user_id}"

    def _save(self, session: Session) -> bool:
        ttl = session.remaining_seconds()
        if ttl <= 0:
            return False
        self._get_redis().setex(self._key(session.session_id), ttl, json.dumps(session.to_dict()))
        return True

    def create(
        self,
        user_id: str,
        ttl: int = 3600,
        protocol: str = "local",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Session:
        session = Session.create(
            user_id=user_id,
            ttl=ttl,
            protocol=protocol,
            max_duration=self._max_duration,
            metadata=metadata,
        )

        redis = self._get_redis()
        user_key = self._user_key(user_id)
        self._save(session)

        # Index keeps the longest-lived member alive
        redis.sadd(user_key, session.session_id)
        if redis.ttl(user_key) < ttl:
            redis.expire(user_key, ttl)

        return session

    def get(self, session_id: str) -> Optional[Session]:
        data = self._get_redis().get(self._key(session_id))
        if not data:
            return None

        try:
            session = Session.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError):
            logger.warning("session.corrupt", extra={"session_id": session_id})
            return None

        return session if session.is_valid() else None

    def update(self, session_id: str, metadata: Dict[str, Any]) -> bool:
        session = self.get(session_id)
        if not session:
            return False

        session.metadata.update(metadata)
        session.touch()
        return self._save(session)

    def delete(self, session_id: str) -> bool:
        session = self.get(session_id)
        if not session:
            return False

        redis = self._get_redis()
        redis.delete(self._key(session_id))
        redis.srem(self._user_key(session.user_id), session_id)
        return True

    def list_by_user(self, user_id: str) -> List[Session]:
        redis = self._get_redis()
        user_key = self._user_key(user_id)

        sessions = []
        for session_id in redis.smembers(user_key):
            session = self.get(session_id)
            if session:
                sessions.append(session)
            else:
                redis.srem(user_key, session_id)

        return sessions

    def extend(self, session_id: str, ttl: int) -> bool:
        session = self.get(session_id)
        if not session or not session.extend(ttl):
            return False

        redis = self._get_redis()
        user_key = self._user_key(session.user_id)
        remaining = session.remaining_seconds()
        if redis.ttl(user_key) < remaining:
            redis.expire(user_key, remaining)
        return self._save(session)

    def cleanup_expired(self) -> int:
        """Redis expires sessions itself; nothing to sweep."""
        return 0
