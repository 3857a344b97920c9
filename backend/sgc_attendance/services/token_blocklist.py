# backend/sgc_attendance/services/token_blocklist.py
"""Revoked JWT ids.

Kept in Redis when ``REDIS_URL`` is configured so every worker sees a logout;
otherwise kept in process memory (single-process development only).
"""
import time
import redis


class TokenBlocklist:
    """Stores the ``jti`` of tokens ended by logout until the token would expire."""

    KEY_PREFIX = 'sgc:revoked:'

    def __init__(self):
        self._redis = None
        self._memory = {}
        self._ttl = None

    def init_app(self, app) -> None:
        expires = app.config.get('JWT_ACCESS_TOKEN_EXPIRES')
        self._ttl = int(expires.total_seconds()) if expires else None
        self._memory = {}

        redis_url = app.config.get('REDIS_URL')
        self._redis = redis.Redis.from_url(redis_url, decode_responses=True) if redis_url else None

    def revoke(self, jti: str) -> None:
        if self._redis is not None:
            self._redis.set(self.KEY_PREFIX + jti, '1', ex=self._ttl)
            return

        self._prune()
        self._memory[jti] = time.monotonic() + self._ttl if self._ttl else None

    def is_revoked(self, jti: str) -> bool:
        if self._redis is not None:
            return self._redis.exists(self.KEY_PREFIX + jti) > 0

        if jti not in self._memory:
            return False
        expires_at = self._memory[jti]
        if expires_at is not None and expires_at <= time.monotonic():
            del self._memory[jti]
            return False
        return True

    def _prune(self) -> None:
        """Forget ids whose tokens have expired anyway."""
        now = time.monotonic()
        for jti in [j for j, expires_at in self._memory.items()
                    if expires_at is not None and expires_at <= now]:
            del self._memory[jti]

    def __len__(self) -> int:
        return len(self._memory)


token_blocklist = TokenBlocklist()
