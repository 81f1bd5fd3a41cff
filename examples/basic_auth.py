"""
Basic Authentication Example - register, login and logout with in-memory stores.
"""

from local_passport import AuthClient, AuthRequest, AuthSettings, ValidationError
from local_passport.config import configure_logging


def main():
    configure_logging("INFO")

    settings = AuthSettings(jwt_secret="my-secret-key")
    client = AuthClient.from_settings(settings, backend="memory")

    # Register a user
    user = client.register(AuthRequest(params={
        "email": "alice@example.com",
        "username": "alice",
        "password": "correct horse",
    }))
    print(f"Registered: {user.display_name} ({user.user_id})")

    # Registering the same address again is rejected with a flash message
    request = AuthRequest(params={"email": "alice@example.com", "password": "another one"})
    try:
        client.register(request)
    except ValidationError as exc:
        print(f"\nDuplicate registration rejected: {exc}")
        print(f"Flash: {request.flashes.get('error')}")

    # Wrong password
    request = AuthRequest()
    if client.login(request, "alice", "wrong password") is None:
        print(f"\nLogin failed, flash: {request.flashes.get('error')}")

    # Login (token + session)
    result = client.login(AuthRequest(), "alice@example.com", "correct horse", ttl=3600)
    token = result["token"]
    session = result["session"]

    print(f"\nLogin successful!")
    print(f"Token: {token[:50]}...")
    print(f"Session ID: {session['session_id']}")
    print(f"Expires at: {session['expires_at']}")

    verified = client.verify(token)
    print(f"\nToken verified: {verified.display_name if verified else None}")

    extended = client.extend_session(session["session_id"], ttl=1800)
    print(f"Session extended: {extended}")

    client.logout(token)
    print(f"\nLogged out successfully")
    print(f"Token valid after logout: {client.verify(token) is not None}")


if __name__ == "__main__":
    main()
