"""
Passport Domain Model - A credential owned by a user for one protocol.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime
from enum import Enum
import secrets

from local_passport.domain import hashing
from local_passport.errors import PassportError, ValidationError


class Protocol(Enum):
    """Authentication protocols a passport can belong to."""
    LOCAL = "local"            # Username/email + password
    OAUTH = "oauth"            # OAuth 1.0a provider
    OAUTH2 = "oauth2"          # OAuth 2.0 provider
    OPENID = "openid"          # OpenID provider
    DELEGATED = "delegated"    # Credentials checked by another service


@dataclass
class Passport:
    """
    Passport entity - how a user proves who they are.

    Domain rules:
    - a user has at most one passport per (protocol, user_id)
    - local passports store a password hash, never the plain text
    - the hash is never returned in to_dict() unless explicitly asked
    - third-party passports carry provider/identifier/tokens instead
    """
    passport_id: str
    protocol: Protocol
    user_id: str
    created_at: datetime
    updated_at: datetime

    password: Optional[str] = None  # hash for local passports

    # Third-party protocols
    provider: Optional[str] = None
    identifier: Optional[str] = None
    tokens: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def new_id() -> str:
        return f"pp_{secrets.token_hex(12)}"

    @classmethod
    def create_local(cls, user_id: str, password: Optional[str], min_length: int = 8) -> "Passport":
        """
        Create a local passport, hashing the password.

        Args:
            user_id: Owning user
            password: Plain-text password
            min_length: Minimum accepted password length

        Returns:
            New passport instance (not yet persisted)

        Raises:
            ValidationError: If the password is missing or too short
        """
        if not password:
            raise ValidationError(
                "Passport validation failed: password is required.",
                invalid_attributes={"password": ["required"]},
            )
        if len(password) < min_length:
            raise ValidationError(
                f"Passport validation failed: password must be at least {min_length} characters.",
                invalid_attributes={"password": ["minLength"]},
            )

        now = datetime.utcnow()
        return cls(
            passport_id=cls.new_id(),
            protocol=Protocol.LOCAL,
            user_id=user_id,
            created_at=now,
            updated_at=now,
            password=hashing.hash_password(password),
        )

    @classmethod
    def create_external(
        cls,
        user_id: str,
        protocol: Protocol,
        provider: str,
        identifier: str,
        tokens: Optional[Dict[str, Any]] = None,
    ) -> "Passport":
        """Create a passport issued by a third-party provider."""
        if protocol is Protocol.LOCAL:
            raise ValueError("Use create_local() for local passports")

        now = datetime.utcnow()
        return cls(
            passport_id=cls.new_id(),
            protocol=protocol,
            user_id=user_id,
            created_at=now,
            updated_at=now,
            provider=provider,
            identifier=identifier,
            tokens=tokens or {},
        )

    def validate_password(self, candidate: str) -> bool:
        """
        Check a plain-text password against the stored hash.

        Raises:
            PassportError: If this passport has no password to check against
        """
        if not self.password:
            raise PassportError(f"Passport {self.passport_id} has no password set")
        return hashing.verify_password(candidate or "", self.password)

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """
        Serialize to dict.

        Args:
            include_sensitive: If True, includes the password hash and tokens
                (for persistence only)
        """
        data = {
            "passport_id": self.passport_id,
            "protocol": self.protocol.value,
            "user_id": self.user_id,
            "provider": self.provider,
            "identifier": self.identifier,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "has_password": bool(self.password),
        }
        if include_sensitive:
            data["password"] = self.password
            data["tokens"] = self.tokens
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Passport":
        """Deserialize from dict."""
        return cls(
            passport_id=data["passport_id"],
            protocol=Protocol(data["protocol"]),
            user_id=data["user_id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
            password=data.get("password"),
            provider=data.get("provider"),
            identifier=data.get("identifier"),
            tokens=data.get("tokens", {}),
        )
