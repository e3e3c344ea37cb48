"""Canonical data shapes shared across imsauth modules.

* :class:`Credentials` -- the normalised client identity produced by
  :mod:`imsauth.credentials` and consumed by the fetcher and cache.
* :class:`ImsEnvironment` -- the ``prod`` / ``stage`` selector.
* :class:`ValidationResult` -- success-or-error outcome of credential
  validation, converted to an exception only at the public entry points.
* :class:`CacheConfig` -- token cache settings.

Token responses are not modelled: they are the provider's JSON body, passed
through as a plain ``dict``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from imsauth.constants import DEFAULT_CACHE_TTL_SECONDS
from imsauth.exceptions import AuthSDKError


TokenResponse = dict[str, Any]


class ImsEnvironment(str, enum.Enum):
    """Which IMS deployment to target."""

    PROD = "prod"
    STAGE = "stage"

    @classmethod
    def parse(cls, value: Any) -> ImsEnvironment:
        """Map *value* to a variant; anything unrecognised is ``PROD``.

        Example::

            ImsEnvironment.parse("stage")    # ImsEnvironment.STAGE
            ImsEnvironment.parse("qa")       # ImsEnvironment.PROD
            ImsEnvironment.parse(None)       # ImsEnvironment.PROD
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.STAGE.value:
            return cls.STAGE
        return cls.PROD


class Credentials(BaseModel):
    """Client identity for the client credentials grant.

    Built per call from raw input and discarded afterwards.  The secret is
    excluded from ``repr`` so that logging a model never leaks it.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    org_id: str = Field(min_length=1)
    scopes: list[str] = Field(default_factory=list)

    def details(self) -> dict[str, Any]:
        """Non-secret identifiers for error detail bags and logs."""
        return {
            "clientId": self.client_id,
            "orgId": self.org_id,
            "scopes": list(self.scopes),
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`imsauth.credentials.get_and_validate_credentials`.

    Exactly one of ``credentials`` and ``error`` is set.
    """

    credentials: Optional[Credentials] = None
    error: Optional[AuthSDKError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Credentials:
        """Return the credentials or raise the validation error."""
        if self.error is not None:
            raise self.error
        assert self.credentials is not None
        return self.credentials


class CacheConfig(BaseModel):
    """Token cache settings."""

    ttl_seconds: float = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        gt=0,
        description="Seconds an entry lives after insertion",
    )
