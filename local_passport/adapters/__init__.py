"""
Adapters - Implementations of ports.

Records:
- MemoryUserStore / MemoryPassportStore: In-memory stores (testing, development)
- RedisUserStore / RedisPassportStore: Redis-backed stores

Tokens & Sessions:
- JWTAuthAdapter: JWT tokens issued after login
- MemorySessionAdapter: In-memory sessions (testing)
- RedisSessionAdapter: Redis-backed sessions
"""

# Records
from local_passport.adapters.memory_store import MemoryUserStore, MemoryPassportStore
from local_passport.adapters.redis_store import RedisUserStore, RedisPassportStore

# Tokens & Sessions
from local_passport.adapters.jwt_auth import JWTAuthAdapter
from local_passport.adapters.memory_session import MemorySessionAdapter
from local_passport.adapters.redis_session import RedisSessionAdapter

__all__ = [
    # Records
    "MemoryUserStore",
    "MemoryPassportStore",
    "RedisUserStore",
    "RedisPassportStore",
    # Tokens & Sessions
    "JWTAuthAdapter",
    "MemorySessionAdapter",
    "RedisSessionAdapter",
]
