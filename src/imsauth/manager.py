"""Token manager -- cached access token acquisition.

The :class:`TokenManager` ties the pieces together::

    raw params --> validate --> cache key --> cache hit? --> return cached
                                                  |
                                                  +--> fetch --> store --> return

Each manager owns one :class:`~imsauth.cache.TokenCache` and one
:class:`~imsauth.config.DeploymentContext`.  Construct one at process start
and share it; concurrent callers that miss the cache for the same key will
each fetch, and the last store wins.

Most callers use the module-level :func:`generate_access_token` and
:func:`invalidate_cache`, which delegate to a lazily created default manager
(see :func:`get_manager`, :func:`set_manager`, :func:`reset_manager`).

Credential injection:
    Input may carry credentials under ``__ims_oauth_s2s`` and an environment
    hint under ``__ims_env`` rather than as top-level fields.  The nested
    credentials, when present, take precedence over top-level fields.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from imsauth.cache import TokenCache, make_cache_key
from imsauth.config import DeploymentContext, resolve_environment
from imsauth.constants import IMS_ENV_INPUT, IMS_OAUTH_S2S_INPUT
from imsauth.credentials import validate_credentials
from imsauth.ims import get_access_token_by_client_credentials
from imsauth.models import TokenResponse

logger = logging.getLogger(__name__)


def _unpack_params(params: Any) -> tuple[Any, Any]:
    """Split raw input into (credential params, environment hint)."""
    if not isinstance(params, Mapping):
        return params, None
    hint = params.get(IMS_ENV_INPUT)
    nested = params.get(IMS_OAUTH_S2S_INPUT)
    if nested is not None:
        return nested, hint
    return params, hint


class TokenManager:
    """Cached IMS access token acquisition.

    Args:
        cache: Token cache to use.  A fresh five minute cache when omitted.
        context: Deployment context for the default environment.  Read
            from ``os.environ`` when omitted.
        client: Optional shared :class:`httpx.AsyncClient` for token
            requests.  The manager never closes it.

    Example::

        manager = TokenManager()
        token = await manager.generate_access_token(
            {"clientId": "...", "clientSecret": "...", "orgId": "...", "scopes": ["openid"]}
        )
        token["access_token"]
    """

    def __init__(
        self,
        cache: Optional[TokenCache] = None,
        context: Optional[DeploymentContext] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._cache = cache if cache is not None else TokenCache()
        self._context = context if context is not None else DeploymentContext.from_env()
        self._client = client

    @property
    def cache(self) -> TokenCache:
        return self._cache

    @property
    def context(self) -> DeploymentContext:
        return self._context

    async def generate_access_token(self, params: Any, environment: Any = None) -> TokenResponse:
        """Return an access token, from the cache when possible.

        Validation happens before any network activity.  Only successful
        responses are cached, so a failing credential set hits IMS again on
        the next call.

        Args:
            params: Credential mapping, optionally carrying injected
                credentials and environment hint.
            environment: ``"prod"`` or ``"stage"``.  Overrides the injected
                hint and the deployment default when truthy.

        Returns:
            The token response, identical whether cached or fresh.

        Raises:
            BadCredentialsFormatError: If the credentials are not a mapping.
            BadScopesFormatError: If ``scopes`` is not a list of strings.
            MissingParametersError: If a required field is missing.
            ImsTokenError: If IMS rejects the request.
            GenericError: On transport or parse failure.
        """
        credential_params, hint = _unpack_params(params)
        env = resolve_environment(environment, hint, self._context)
        credentials = validate_credentials(credential_params)

        key = make_cache_key(credentials, env)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Token cache hit for client %s (env %s)", credentials.client_id, env.value)
            return cached

        logger.debug("Token cache miss for client %s (env %s)", credentials.client_id, env.value)
        token = await get_access_token_by_client_credentials(credentials, env, client=self._client)
        self._cache.set(key, token)
        return token

    def invalidate_cache(self) -> None:
        """Drop every cached token so the next call fetches a fresh one."""
        self._cache.clear()


# ---------------------------------------------------------------------------
# Process-wide default manager
# ---------------------------------------------------------------------------

_manager: Optional[TokenManager] = None


def get_manager() -> TokenManager:
    """Return the default :class:`TokenManager`, creating it on first use."""
    global _manager
    if _manager is None:
        _manager = TokenManager()
    return _manager


def set_manager(manager: TokenManager) -> None:
    """Install *manager* as the default used by the module-level functions."""
    global _manager
    _manager = manager


def reset_manager() -> None:
    """Forget the default manager; the next call builds a new one.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _manager
    _manager = None


async def generate_access_token(params: Any, environment: Any = None) -> TokenResponse:
    """Cached token acquisition through the default manager.

    See :meth:`TokenManager.generate_access_token`.
    """
    return await get_manager().generate_access_token(params, environment)


def invalidate_cache() -> None:
    """Clear the default manager's token cache."""
    get_manager().invalidate_cache()
