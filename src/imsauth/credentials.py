"""Credential normalisation and validation.

Raw credential input arrives loosely typed: from application code, from
action parameters, or injected by the hosting runtime.  Both camelCase
(``clientId``) and snake_case (``client_id``) field names are accepted;
camelCase wins when both are set.

:func:`get_and_validate_credentials` never raises for bad input.  It returns
a :class:`~imsauth.models.ValidationResult` so callers can inspect the error
before deciding to raise it; :func:`validate_credentials` is the raising
shorthand used by the public entry points.
"""

from __future__ import annotations

from typing import Any, Mapping

from imsauth.exceptions import (
    BadCredentialsFormatError,
    BadScopesFormatError,
    MissingParametersError,
)
from imsauth.models import Credentials, ValidationResult

# (canonical name, camelCase key, snake_case key)
_FIELDS = (
    ("clientId", "clientId", "client_id"),
    ("clientSecret", "clientSecret", "client_secret"),
    ("orgId", "orgId", "org_id"),
)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _scopes_type_name(raw: Any) -> str | None:
    """Describe why *raw* is not a scope list, or return ``None`` when it is.

    A list holding a non-string is reported with the offending element type,
    e.g. ``list[int]``.
    """
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        return _type_name(raw)
    for scope in raw:
        if not isinstance(scope, str):
            return f"{type(raw).__name__}[{_type_name(scope)}]"
    return None


def get_and_validate_credentials(params: Any) -> ValidationResult:
    """Normalise *params* into :class:`~imsauth.models.Credentials`.

    Args:
        params: A mapping with ``clientId``/``client_id``,
            ``clientSecret``/``client_secret``, ``orgId``/``org_id`` and an
            optional ``scopes`` list.

    Returns:
        A :class:`~imsauth.models.ValidationResult` holding either the
        credentials or one of :class:`BadCredentialsFormatError`,
        :class:`BadScopesFormatError` or :class:`MissingParametersError`.
    """
    if not isinstance(params, Mapping):
        return ValidationResult(
            error=BadCredentialsFormatError(sdk_details={"paramsType": _type_name(params)})
        )

    raw = dict(params)

    bad_scopes_type = _scopes_type_name(raw.get("scopes"))
    if bad_scopes_type is not None:
        return ValidationResult(
            error=BadScopesFormatError(sdk_details={"scopesType": bad_scopes_type})
        )
    scopes = list(raw.get("scopes") or [])

    values = {name: raw.get(camel) or raw.get(snake) for name, camel, snake in _FIELDS}
    missing = [name for name, _, _ in _FIELDS if not values[name]]
    if missing:
        return ValidationResult(
            error=MissingParametersError(
                ", ".join(missing),
                sdk_details={
                    "clientId": values["clientId"],
                    "orgId": values["orgId"],
                    "scopes": scopes,
                },
            )
        )

    credentials = Credentials(
        client_id=str(values["clientId"]),
        client_secret=str(values["clientSecret"]),
        org_id=str(values["orgId"]),
        scopes=scopes,
    )
    return ValidationResult(credentials=credentials)


def validate_credentials(params: Any) -> Credentials:
    """Like :func:`get_and_validate_credentials` but raise on failure.

    Raises:
        BadCredentialsFormatError: If *params* is not a mapping.
        BadScopesFormatError: If ``scopes`` is present but not a list of strings.
        MissingParametersError: If any required field is missing.
    """
    return get_and_validate_credentials(params).unwrap()
