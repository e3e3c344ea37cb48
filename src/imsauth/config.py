"""Deployment context and environment resolution.

The default IMS environment depends on where the code is deployed: a runtime
namespace starting with ``development-`` targets staging, anything else
production.  That signal is captured once in a :class:`DeploymentContext`
instead of being read from ``os.environ`` on every call, so tests and
embedding applications can supply it explicitly.

Resolution precedence (highest first), see :func:`resolve_environment`:

1. An explicit environment argument.
2. An environment hint injected alongside the credentials.
3. The deployment context default.
4. ``prod``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from imsauth.constants import DEVELOPMENT_NAMESPACE_PREFIX, NAMESPACE_ENV_VAR
from imsauth.models import ImsEnvironment

logger = logging.getLogger(__name__)


class DeploymentContext(BaseModel):
    """Where the process is deployed, as far as environment defaults go.

    Example::

        ctx = DeploymentContext(namespace="development-1234")
        ctx.default_environment()   # ImsEnvironment.STAGE
    """

    namespace: Optional[str] = Field(
        default=None, description="Runtime namespace the process is deployed in"
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> DeploymentContext:
        """Build a context from ``__OW_NAMESPACE``.

        Args:
            environ: Mapping to read from.  Defaults to :data:`os.environ`.
        """
        source = os.environ if environ is None else environ
        return cls(namespace=source.get(NAMESPACE_ENV_VAR) or None)

    @property
    def is_development(self) -> bool:
        return bool(self.namespace) and self.namespace.startswith(DEVELOPMENT_NAMESPACE_PREFIX)

    def default_environment(self) -> ImsEnvironment:
        """Return ``STAGE`` in development namespaces, ``PROD`` otherwise."""
        return ImsEnvironment.STAGE if self.is_development else ImsEnvironment.PROD


def resolve_environment(
    explicit: Any = None,
    hint: Any = None,
    context: Optional[DeploymentContext] = None,
) -> ImsEnvironment:
    """Pick the IMS environment for a call.

    Falsy values (``None``, ``""``) at one level fall through to the next.
    A non-empty value that is not a known variant resolves to ``PROD``
    rather than falling through.

    Args:
        explicit: Environment passed by the caller.
        hint: Environment injected next to the credentials.
        context: Deployment context used when neither is given.

    Returns:
        The resolved :class:`~imsauth.models.ImsEnvironment`.
    """
    if explicit:
        return ImsEnvironment.parse(explicit)
    if hint:
        logger.debug("Using injected environment hint %r", hint)
        return ImsEnvironment.parse(hint)
    if context is not None:
        return context.default_environment()
    return ImsEnvironment.PROD
