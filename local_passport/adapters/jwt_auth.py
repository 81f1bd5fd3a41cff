"""
JWT Authentication Adapter - Tokens handed out after a successful login.
"""

import logging
import secrets
import jwt
from datetime import datetime, timedelta
from typing import Optional, Set, Dict, Any
from local_passport.ports.auth_port import AuthenticationPort
from local_passport.domain.user import User

logger = logging.getLogger(__name__)


class JWTAuthAdapter(AuthenticationPort):
    """
    JWT-based token adapter.

    Uses PyJWT for signing and verification. Every token carries a
    random ``jti``; revocation blacklists that ID in memory, so revoked
    tokens are only rejected by the process that revoked them.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        issuer: str = "local-passport",
    ):
        """
        Initialize JWT adapter.

        Args:
            secret: Signing secret
            algorithm: JWT algorithm (default HS256)
            issuer: Token issuer claim
        """
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._revoked: Set[str] = set()  # TODO: share revoked jti values through Redis

    @classmethod
    def from_settings(cls, settings) -> "JWTAuthAdapter":
        return cls(
            secret=settings.jwt_secret.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
        )

    def _decode(self, token: str) -> Optional[Dict[str, Any]]:
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["sub", "exp", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("token.expired")
            return None
        except jwt.InvalidTokenError as exc:
            logger.debug("token.invalid", extra={"reason": str(exc)})
            return None

        if payload["jti"] in self._revoked:
            return None
        return payload

    def authenticate(self, token: str) -> Optional[User]:
        """
        Resolve a JWT to the user it was issued for.

        The returned user is rebuilt from claims only; callers that need
        the stored record should look it up by user_id.
        """
        payload = self._decode(token)
        if payload is None:
            return None

        return User(
            user_id=payload["sub"],
            email=payload.get("email"),
            username=payload.get("username"),
        )

    def create_token(self, user: User, expires_in: int = 3600) -> str:
        """
        Sign a token for a user.

        Args:
            user: Signed-in user
            expires_in: Token expiration in seconds

        Returns:
            JWT token string
        """
        now = datetime.utcnow()
        payload = {
            "sub": user.user_id,
            "email": user.email,
            "username": user.username,
            "iat": now,
            "exp": now + timedelta(seconds=expires_in),
            "iss": self._issuer,
            "jti": secrets.token_hex(16),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> bool:
        return self._decode(token) is not None

    def revoke_token(self, token: str) -> bool:
        """
        Revoke a token by blacklisting its jti.

        Returns:
            True if revoked, False if invalid or already revoked
        """
        payload = self._decode(token)
        if payload is None:
            return False

        self._revoked.add(payload["jti"])
        logger.info("token.revoked", extra={"user_id": payload["sub"]})
        return True
