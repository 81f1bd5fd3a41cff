"""
Memory Session Adapter - In-memory login sessions (testing only).
"""

from typing import Optional, List, Dict, Any
from local_passport.ports.session_port import SessionPort
from local_passport.domain.session import Session


class MemorySessionAdapter(SessionPort):
    """
    In-memory session storage.

    WARNING: Only for testing. Sessions are lost on restart.
    Not suitable for production or multi-process deployments.
    """

    def __init__(self, max_duration: int = 86400):
        """
        Args:
            max_duration: Cap on total session lifetime in seconds
        """
        self._max_duration = max_duration
        self._sessions: Dict[str, Session] = {}
        self._user_sessions: Dict[str, List[str]] = {}

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

        self._sessions[session.session_id] = session
        self._user_sessions.setdefault(user_id, []).append(session.session_id)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session, dropping it if it has expired."""
        session = self._sessions.get(session_id)
        if not session:
            return None

        if not session.is_valid():
            self.delete(session_id)
            return None

        return session

    def update(self, session_id: str, metadata: Dict[str, Any]) -> bool:
        session = self.get(session_id)
        if not session:
            return False

        session.metadata.update(metadata)
        session.touch()
        return True

    def delete(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        owned = self._user_sessions.get(session.user_id, [])
        if session_id in owned:
            owned.remove(session_id)
        if not owned:
            self._user_sessions.pop(session.user_id, None)

        return True

    def list_by_user(self, user_id: str) -> List[Session]:
        # Copy: get() may delete expired entries while we iterate
        session_ids = list(self._user_sessions.get(user_id, []))
        return [s for s in (self.get(sid) for sid in session_ids) if s]

    def extend(self, session_id: str, ttl: int) -> bool:
        session = self.get(session_id)
        if not session:
            return False

        return session.extend(ttl)

    def cleanup_expired(self) -> int:
        expired_ids = [
            sid for sid, sess in self._sessions.items()
            if not sess.is_valid()
        ]

        for session_id in expired_ids:
            self.delete(session_id)

        return len(expired_ids)
