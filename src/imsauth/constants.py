"""Fixed values shared across imsauth.

IMS hosts, the token endpoint path, the property names under which a hosting
runtime injects credentials, and the deployment namespace signal used to pick
the default environment.
"""

IMS_BASE_URL_PROD = "https://ims-na1.adobelogin.com"
"""Production IMS host."""

IMS_BASE_URL_STAGE = "https://ims-na1-stg1.adobelogin.com"
"""Staging IMS host."""

IMS_TOKEN_PATH = "/ims/token/v2"
"""Client credentials token endpoint, relative to the IMS host."""

IMS_OAUTH_S2S_INPUT = "__ims_oauth_s2s"
"""Property carrying credentials injected by the hosting runtime."""

IMS_ENV_INPUT = "__ims_env"
"""Property carrying an environment hint injected by the hosting runtime."""

NAMESPACE_ENV_VAR = "__OW_NAMESPACE"
"""Environment variable holding the deployment namespace."""

DEVELOPMENT_NAMESPACE_PREFIX = "development-"
"""Namespaces starting with this prefix default to the staging environment."""

DEFAULT_CACHE_TTL_SECONDS = 300
"""Tokens are cached for five minutes from insertion."""
