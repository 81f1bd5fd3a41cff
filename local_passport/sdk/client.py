"""
Auth Client - High-level SDK for the local login workflow.

Wires the local protocol to token issuing and session storage so a web
handler only has to build an AuthRequest and render the result.
"""

import logging
from typing import Optional, Dict, Any
from local_passport.config import AuthSettings, get_settings
from local_passport.adapters import (
    JWTAuthAdapter,
    MemoryUserStore,
    MemoryPassportStore,
    MemorySessionAdapter,
    RedisUserStore,
    RedisPassportStore,
    RedisSessionAdapter,
)
from local_passport.ports.auth_port import AuthenticationPort
from local_passport.ports.session_port import SessionPort
from local_passport.ports.user_port import UserStorePort
from local_passport.protocols.local import LocalProtocol, Flash
from local_passport.domain.request import AuthRequest
from local_passport.domain.user import User
from local_passport.domain.session import Session

logger = logging.getLogger(__name__)


class AuthClient:
    """
    High-level auth client combining the local protocol, tokens and sessions.

    Example:
        from local_passport import AuthClient, AuthRequest, LocalProtocol
        from local_passport.adapters import (
            JWTAuthAdapter, MemoryUserStore, MemoryPassportStore, MemorySessionAdapter,
        )

        users = MemoryUserStore()
        client = AuthClient(
            protocol=LocalProtocol(users, MemoryPassportStore()),
            users=users,
            auth=JWTAuthAdapter(secret="secret"),
            sessions=MemorySessionAdapter(),
        )

        client.register(AuthRequest(params={"email": "a@b.io", "password": "hunter22"}))
        result = client.login(AuthRequest(), "a@b.io", "hunter22")
        client.logout(result["token"])
    """

    def __init__(
        self,
        protocol: LocalProtocol,
        users: UserStorePort,
        auth: AuthenticationPort,
        sessions: Optional[SessionPort] = None,
        settings: Optional[AuthSettings] = None,
    ):
        """
        Initialize auth client with adapters.

        Args:
            protocol: Local protocol (required)
            users: User store the protocol writes to
            auth: Token adapter (required)
            sessions: Session adapter (optional)
            settings: Defaults for token and session lifetimes
        """
        self._protocol = protocol
        self._users = users
        self._auth = auth
        self._sessions = sessions
        self._settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Optional[AuthSettings] = None, backend: str = "memory") -> "AuthClient":
        """
        Build a client with JWT tokens and the chosen storage backend.

        Args:
            settings: Settings to use (default: environment)
            backend: "memory" or "redis"
        """
        settings = settings or get_settings()

        if backend == "memory":
            users = MemoryUserStore()
            passports = MemoryPassportStore()
            sessions = MemorySessionAdapter(max_duration=settings.session_max_duration)
        elif backend == "redis":
            users = RedisUserStore(prefix=settings.redis_prefix, redis_url=settings.redis_url)
            passports = RedisPassportStore(prefix=settings.redis_prefix, redis_url=settings.redis_url)
            sessions = RedisSessionAdapter(
                prefix=f"{settings.redis_prefix}session:",
                redis_url=settings.redis_url,
                max_duration=settings.session_max_duration,
            )
        else:
            raise ValueError(f"Unknown storage backend: {backend!r}")

        return cls(
            protocol=LocalProtocol(users, passports, settings=settings),
            users=users,
            auth=JWTAuthAdapter.from_settings(settings),
            sessions=sessions,
            settings=settings,
        )

    def register(self, request: AuthRequest) -> User:
        """Register a new user. See LocalProtocol.register."""
        return self._protocol.register(request)

    def connect(self, request: AuthRequest) -> User:
        """Give the signed-in user a local passport. See LocalProtocol.connect."""
        return self._protocol.connect(request)

    def login(
        self,
        request: AuthRequest,
        identifier: str,
        password: str,
        ttl: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Log a user in (validate password, issue token, open session).

        Args:
            request: Request that receives flash messages; on success its
                user is set to the authenticated user
            identifier: Email or username
            password: Plain-text password
            ttl: Token and session TTL in seconds (default: the settings'
                token_ttl for the token and session_ttl for the session)
            metadata: Optional session metadata

        Returns:
            Dict with 'user', 'token' and optionally 'session', or None if
            the login was rejected
        """
        user = self._protocol.login(request, identifier, password)
        if user is None:
            return None

        if not user.is_active:
            request.flash("error", Flash.USER_INACTIVE)
            logger.info("client.login.inactive", extra={"user_id": user.user_id})
            return None

        token_ttl = self._settings.token_ttl if ttl is None else ttl
        session_ttl = self._settings.session_ttl if ttl is None else ttl
        user.record_login()
        self._users.update(user)
        request.user = user

        result: Dict[str, Any] = {
            "user": user,
            "token": self._auth.create_token(user, expires_in=token_ttl),
        }

        if self._sessions:
            session = self._sessions.create(
                user_id=user.user_id,
                ttl=session_ttl,
                protocol=self._protocol.name,
                metadata=metadata,
            )
            result["session"] = session.to_dict()

        return result

    def logout(self, token: str) -> bool:
        """
        Log a user out (revoke token + delete their sessions).

        Returns:
            True if the token was revoked
        """
        user = self._auth.authenticate(token)
        success = self._auth.revoke_token(token)

        if self._sessions and user:
            for session in self._sessions.list_by_user(user.user_id):
                self._sessions.delete(session.session_id)

        if success:
            logger.info("client.logout", extra={"user_id": user.user_id if user else None})
        return success

    def verify(self, token: str) -> Optional[User]:
        """
        Verify a token and return the stored user.

        Returns:
            User if the token is valid and the account still exists and is
            active, None otherwise
        """
        claimed = self._auth.authenticate(token)
        if claimed is None:
            return None

        user = self._users.get(claimed.user_id)
        if user is None or not user.is_active:
            return None
        return user

    def get_session(self, session_id: str) -> Optional[Session]:
        if not self._sessions:
            return None

        return self._sessions.get(session_id)

    def extend_session(self, session_id: str, ttl: Optional[int] = None) -> bool:
        """
        Extend a session's TTL.

        Returns:
            True if extended, False otherwise
        """
        if not self._sessions:
            return False

        if ttl is None:
            ttl = self._settings.session_ttl
        return self._sessions.extend(session_id, ttl)
