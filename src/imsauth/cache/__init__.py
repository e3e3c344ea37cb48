"""In-memory token caching for imsauth.

This package provides :class:`TokenCache`, a time-bounded store for token
responses, and :func:`make_cache_key`, which derives an order-independent
key from credentials, environment and scopes.

The cache is consumed by :class:`~imsauth.manager.TokenManager` and is
controlled by :class:`~imsauth.models.CacheConfig`.
"""

from imsauth.cache.cache import TokenCache, make_cache_key

__all__ = ["TokenCache", "make_cache_key"]
