"""
Integration tests for the login -> token -> logout flow.
"""

import jwt
import pytest
from local_passport import AuthClient, AuthRequest, AuthSettings, LocalProtocol, Flash, ValidationError
from local_passport.adapters import (
    JWTAuthAdapter,
    MemoryUserStore,
    MemoryPassportStore,
    MemorySessionAdapter,
)


class TestJWTAuthFlow:
    """Test complete JWT authentication workflow."""

    def setup_method(self):
        """Set up test fixtures."""
        self.settings = AuthSettings(_env_file=None, jwt_secret="test-secret-key")
        self.users = MemoryUserStore()
        self.passports = MemoryPassportStore()
        self.auth = JWTAuthAdapter(secret="test-secret-key")
        self.sessions = MemorySessionAdapter()
        self.client = AuthClient(
            protocol=LocalProtocol(self.users, self.passports, settings=self.settings),
            users=self.users,
            auth=self.auth,
            sessions=self.sessions,
            settings=self.settings,
        )
        self.user = self.client.register(AuthRequest(params={
            "email": "alice@example.com",
            "password": "correct horse",
            "username": "alice",
        }))

    def test_login_and_verify(self):
        """Test login and token verification."""
        request = AuthRequest()
        result = self.client.login(request, "alice@example.com", "correct horse", ttl=3600)

        assert result is not None
        assert "token" in result
        assert "session" in result
        assert result["user"].user_id == self.user.user_id
        assert request.user is result["user"]
        assert result["user"].last_login is not None

        verified_user = self.client.verify(result["token"])
        assert verified_user is not None
        assert verified_user.user_id == self.user.user_id
        assert verified_user.email == "alice@example.com"

    def test_rejected_login(self):
        """Test failed logins return None and flash the reason."""
        request = AuthRequest()

        assert self.client.login(request, "alice@example.com", "nope nope") is None
        assert request.flashes.get("error") == [Flash.PASSWORD_WRONG]
        assert request.user is None
        assert self.sessions.list_by_user(self.user.user_id) == []

    def test_inactive_user_cannot_login(self):
        self.user.is_active = False
        self.users.update(self.user)
        request = AuthRequest()

        assert self.client.login(request, "alice", "correct horse") is None
        assert request.flashes.get("error") == [Flash.USER_INACTIVE]

    def test_logout(self):
        """Test logout flow."""
        result = self.client.login(AuthRequest(), "alice", "correct horse")
        token = result["token"]

        assert self.client.verify(token) is not None

        assert self.client.logout(token) is True
        assert self.client.verify(token) is None
        assert self.sessions.list_by_user(self.user.user_id) == []

        # Second logout is a no-op
        assert self.client.logout(token) is False

    def test_token_claims(self):
        """Test tokens carry the user claims and a unique jti."""
        first = self.client.login(AuthRequest(), "alice", "correct horse")["token"]
        second = self.client.login(AuthRequest(), "alice", "correct horse")["token"]

        claims = jwt.decode(first, "test-secret-key", algorithms=["HS256"], issuer="local-passport")
        assert claims["sub"] == self.user.user_id
        assert claims["username"] == "alice"
        assert claims["jti"] != jwt.decode(
            second, "test-secret-key", algorithms=["HS256"], issuer="local-passport"
        )["jti"]

        # Revoking one token leaves the other valid
        self.client.logout(first)
        assert self.auth.verify_token(second)

    def test_verify_rejects_deleted_user(self):
        token = self.client.login(AuthRequest(), "alice", "correct horse")["token"]
        self.users.destroy(self.user.user_id)

        assert self.auth.verify_token(token) is True
        assert self.client.verify(token) is None

    def test_session_management(self):
        """Test session creation and retrieval."""
        result = self.client.login(AuthRequest(), "alice", "correct horse", ttl=3600, metadata={"device": "mobile"})
        session_id = result["session"]["session_id"]

        session = self.client.get_session(session_id)
        assert session is not None
        assert session.user_id == self.user.user_id
        assert session.protocol == "local"
        assert session.metadata["device"] == "mobile"

    def test_session_extend(self):
        """Test session TTL extension."""
        result = self.client.login(AuthRequest(), "alice", "correct horse", ttl=3600)
        session_id = result["session"]["session_id"]
        original_expiry = self.client.get_session(session_id).expires_at

        assert self.client.extend_session(session_id, ttl=1800) is True
        assert self.client.get_session(session_id).expires_at > original_expiry

    def test_default_lifetimes_come_from_settings(self):
        """Test token and session default to their own configured TTLs."""
        settings = AuthSettings(_env_file=None, jwt_secret="test-secret-key", token_ttl=3600, session_ttl=600)
        client = AuthClient(
            protocol=LocalProtocol(self.users, self.passports, settings=settings),
            users=self.users,
            auth=self.auth,
            sessions=self.sessions,
            settings=settings,
        )

        result = client.login(AuthRequest(), "alice", "correct horse")

        claims = jwt.decode(result["token"], "test-secret-key", algorithms=["HS256"], issuer="local-passport")
        assert claims["exp"] - claims["iat"] == 3600
        remaining = client.get_session(result["session"]["session_id"]).remaining_seconds()
        assert 590 <= remaining <= 600

    def test_explicit_zero_ttl_is_kept(self):
        result = self.client.login(AuthRequest(), "alice", "correct horse", ttl=0)

        assert self.client.get_session(result["session"]["session_id"]) is None
        assert self.client.verify(result["token"]) is None

    def test_invalid_token(self):
        """Test handling of invalid tokens."""
        assert self.client.verify("invalid_token") is None
        assert self.client.verify("eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.invalid") is None

        forged = JWTAuthAdapter(secret="other-secret").create_token(self.user)
        assert self.client.verify(forged) is None

    def test_expired_token(self):
        token = self.auth.create_token(self.user, expires_in=-10)

        assert self.client.verify(token) is None
        assert self.auth.revoke_token(token) is False


def test_client_from_settings():
    """Test the memory-backed client built from settings."""
    settings = AuthSettings(_env_file=None, jwt_secret="from-settings", min_password_length=10)
    client = AuthClient.from_settings(settings, backend="memory")

    request = AuthRequest(params={"email": "bob@example.com", "password": "123456789"})
    with pytest.raises(ValidationError):
        client.register(request)
    assert request.flashes.get("error") == [Flash.PASSWORD_INVALID]

    client.register(AuthRequest(params={"email": "bob@example.com", "password": "1234567890"}))
    result = client.login(AuthRequest(), "bob@example.com", "1234567890")
    assert client.verify(result["token"]).email == "bob@example.com"
