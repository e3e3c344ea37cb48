"""In-memory TTL cache for IMS token responses.

Entries live for :attr:`~imsauth.models.CacheConfig.ttl_seconds` (five
minutes by default) from the moment they are stored.  Reads never extend an
entry's life.  Expired entries are dropped lazily when touched and swept on
:meth:`TokenCache.stats`.  There is no size bound: the TTL is the only
eviction policy.

Cache keys are SHA-256 hashes of the JSON array
``[clientId, orgId, scopes, clientSecret, env]`` with scopes sorted, so
that the same scope set in any order resolves to the same entry and a
rotated secret never reuses a token issued for the old one.

See Also:
    :class:`~imsauth.models.CacheConfig` -- the Pydantic model that
    controls ``ttl_seconds``.
"""

from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any, Callable, Optional

from imsauth.models import CacheConfig, Credentials, ImsEnvironment, TokenResponse

_NO_SCOPES = "none"


def make_cache_key(credentials: Credentials, environment: Any = None) -> str:
    """Generate a cache key from credentials, environment and sorted scopes.

    An empty scope list is encoded as ``none`` so it cannot collide with a
    single-scope list.  Fields are JSON-encoded so a separator inside one
    value cannot shift it into the next.  The client secret takes part in
    the key but only through the digest.

    Args:
        credentials: Validated credentials.
        environment: Target environment; unknown values count as ``prod``.

    Returns:
        A hex digest string.
    """
    scope_key = sorted(credentials.scopes) if credentials.scopes else _NO_SCOPES
    env = ImsEnvironment.parse(environment).value
    raw = json.dumps(
        [credentials.client_id, credentials.org_id, scope_key, credentials.client_secret, env]
    )
    return hashlib.sha256(raw.encode()).hexdigest()


class TokenCache:
    """Thread-safe in-memory cache with a fixed time-to-live per entry.

    Args:
        config: Cache configuration.  Defaults to a five minute TTL.
        clock: Monotonic time source in seconds.  Tests inject a fake.

    Example::

        cache = TokenCache(CacheConfig(ttl_seconds=300))
        cache.set(key, {"access_token": "abc", "expires_in": 86399})
        hit = cache.get(key)
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or CacheConfig()
        self._clock = clock
        self._entries: dict[str, tuple[float, TokenResponse]] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._config.ttl_seconds

    def get(self, key: str) -> Optional[TokenResponse]:
        """Return the cached value for *key*, or ``None`` if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: TokenResponse) -> None:
        """Store *value* under *key*, replacing any existing entry.

        The entry expires ``ttl_seconds`` after this call.
        """
        with self._lock:
            self._entries[key] = (self._clock() + self._config.ttl_seconds, value)

    def delete(self, key: str) -> None:
        """Remove a single entry if present."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics after sweeping expired entries.

        Returns:
            A ``dict`` with ``size`` (live entries) and ``ttl_seconds``.
        """
        with self._lock:
            self._purge_expired()
            return {"size": len(self._entries), "ttl_seconds": self._config.ttl_seconds}

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
