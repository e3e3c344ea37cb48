"""imsauth -- Adobe IMS client credentials tokens with a short-lived cache.

Exchanges a client ID, client secret and org ID for a bearer access token at
the IMS token endpoint, and caches the response for five minutes keyed by
client, org, environment and scopes.

Typical usage::

    from imsauth import generate_access_token

    token = await generate_access_token(
        {"clientId": "...", "clientSecret": "...", "orgId": "...", "scopes": ["openid"]}
    )
    headers = {"Authorization": f"Bearer {token['access_token']}"}

Modules:
    manager: Cached entry point and the process-wide default manager.
    ims: Uncached token fetch.
    credentials: Input normalisation and validation.
    cache: In-memory TTL cache and cache key derivation.
    config: Deployment context and environment resolution.
    models: Pydantic models shared across the package.
    exceptions: Error hierarchy with stable codes.
"""

from imsauth.cache import TokenCache, make_cache_key
from imsauth.config import DeploymentContext
from imsauth.credentials import get_and_validate_credentials, validate_credentials
from imsauth.exceptions import (
    AuthSDKError,
    BadCredentialsFormatError,
    BadScopesFormatError,
    GenericError,
    ImsTokenError,
    MissingParametersError,
    codes,
    messages,
)
from imsauth.ims import get_access_token_by_client_credentials
from imsauth.manager import TokenManager, generate_access_token, invalidate_cache
from imsauth.models import CacheConfig, Credentials, ImsEnvironment

__version__ = "0.1.0"

__all__ = [
    "AuthSDKError",
    "BadCredentialsFormatError",
    "BadScopesFormatError",
    "CacheConfig",
    "Credentials",
    "DeploymentContext",
    "GenericError",
    "ImsEnvironment",
    "ImsTokenError",
    "MissingParametersError",
    "TokenCache",
    "TokenManager",
    "codes",
    "generate_access_token",
    "get_access_token_by_client_credentials",
    "get_and_validate_credentials",
    "invalidate_cache",
    "make_cache_key",
    "messages",
    "validate_credentials",
]
