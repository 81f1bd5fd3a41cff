"""
Session Domain Model - A login session opened after a successful login.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime, timedelta
from enum import Enum
import secrets


class SessionStatus(Enum):
    """Session lifecycle states."""
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"


@dataclass
class Session:
    """
    Session entity - a signed-in user agent.

    Domain rules:
    - session_id is cryptographically random
    - a session is valid only while ACTIVE and before expires_at
    - extensions never push expires_at past created_at + max_duration
    """
    session_id: str
    user_id: str
    created_at: datetime
    expires_at: datetime
    status: SessionStatus = SessionStatus.ACTIVE

    # How the user signed in
    protocol: str = "local"
    max_duration: int = 86400

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    last_activity: Optional[datetime] = None

    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        user_id: str,
        ttl: int = 3600,
        protocol: str = "local",
        max_duration: int = 86400,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "Session":
        """
        Open a new session with a generated ID.

        Args:
            user_id: Signed-in user
            ttl: Time-to-live in seconds
            protocol: Protocol the user authenticated with
            max_duration: Hard cap on total session lifetime in seconds
            ip_address: Client IP
            user_agent: Client user agent
            metadata: Optional metadata

        Returns:
            New session instance
        """
        now = datetime.utcnow()
        return cls(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=min(ttl, max_duration)),
            status=SessionStatus.ACTIVE,
            protocol=protocol,
            max_duration=max_duration,
            ip_address=ip_address,
            user_agent=user_agent,
            last_activity=now,
            metadata=metadata or {},
        )

    def is_valid(self) -> bool:
        if self.status != SessionStatus.ACTIVE:
            return False
        return datetime.utcnow() < self.expires_at

    def remaining_seconds(self) -> int:
        return max(0, int((self.expires_at - datetime.utcnow()).total_seconds()))

    def extend(self, seconds: int) -> bool:
        """
        Push expiry out by ``seconds``.

        Returns:
            True if extended, False if invalid or the cap would be exceeded
        """
        if not self.is_valid():
            return False

        new_expires = self.expires_at + timedelta(seconds=seconds)
        if new_expires > self.created_at + timedelta(seconds=self.max_duration):
            return False

        self.expires_at = new_expires
        return True

    def revoke(self):
        self.status = SessionStatus.REVOKED

    def touch(self):
        """Record activity on the session."""
        self.last_activity = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "status": self.status.value,
            "protocol": self.protocol,
            "max_duration": self.max_duration,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "last_activity": self.last_activity.isoformat() if self.last_activity else None,
            "metadata": self.metadata,
            "is_valid": self.is_valid(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Deserialize from dict."""
        return cls(
            session_id=data["session_id"],
            user_id=data["user_id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            status=SessionStatus(data.get("status", "active")),
            protocol=data.get("protocol", "local"),
            max_duration=data.get("max_duration", 86400),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            last_activity=datetime.fromisoformat(data["last_activity"]) if data.get("last_activity") else None,
            metadata=data.get("metadata", {}),
        )
