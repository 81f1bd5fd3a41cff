"""
User Domain Model - Pure business entity.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime
import secrets


@dataclass
class User:
    """
    User entity - an account that passports attach to.

    Domain rules:
    - user_id is immutable and assigned by the store
    - email and username are unique when set (enforced by adapter)
    - users created through a third-party provider may have no email
    """
    user_id: str
    email: Optional[str] = None
    username: Optional[str] = None

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    last_login: Optional[datetime] = None

    is_active: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def new_id() -> str:
        """Generate a fresh user ID."""
        return f"usr_{secrets.token_hex(12)}"

    @classmethod
    def create(
        cls,
        email: Optional[str] = None,
        username: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "User":
        """
        Create a new user with a generated ID.

        Args:
            email: Email address
            username: Display/login name
            metadata: Optional metadata

        Returns:
            New user instance (not yet persisted)
        """
        now = datetime.utcnow()
        return cls(
            user_id=cls.new_id(),
            email=email,
            username=username,
            created_at=now,
            updated_at=now,
            metadata=metadata or {},
        )

    @property
    def display_name(self) -> str:
        return self.username or self.email or self.user_id

    def record_login(self):
        """Stamp a successful login."""
        self.last_login = datetime.utcnow()
        self.updated_at = self.last_login

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "username": self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "last_login": self.last_login.isoformat() if self.last_login else None,
            "is_active": self.is_active,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Deserialize from dict."""
        return cls(
            user_id=data["user_id"],
            email=data.get("email"),
            username=data.get("username"),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.utcnow(),
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else datetime.utcnow(),
            last_login=datetime.fromisoformat(data["last_login"]) if data.get("last_login") else None,
            is_active=data.get("is_active", True),
            metadata=data.get("metadata", {}),
        )
