"""IMS client credentials token fetcher.

Performs the OAuth2 Client Credentials grant (:rfc:`6749` section 4.4)
against Adobe IMS: a single form-encoded ``POST`` to ``/ims/token/v2`` with
``grant_type=client_credentials`` plus the client ID, secret, org ID and
optional comma-separated scope list.

Nothing here caches; see :mod:`imsauth.manager` for the cached entry point.
There are no retries: one call is one round trip, and failures surface as
:class:`~imsauth.exceptions.ImsTokenError` (the provider said no) or
:class:`~imsauth.exceptions.GenericError` (anything else went wrong).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from imsauth.constants import IMS_BASE_URL_PROD, IMS_BASE_URL_STAGE, IMS_TOKEN_PATH
from imsauth.credentials import validate_credentials
from imsauth.exceptions import AuthSDKError, GenericError, ImsTokenError
from imsauth.models import Credentials, ImsEnvironment, TokenResponse

logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def get_ims_url(environment: Any = None) -> str:
    """Return the IMS host for *environment*; unknown values map to production."""
    if ImsEnvironment.parse(environment) is ImsEnvironment.STAGE:
        return IMS_BASE_URL_STAGE
    return IMS_BASE_URL_PROD


def build_token_request(credentials: Credentials) -> dict[str, str]:
    """Build the form fields for the token request.

    ``scope`` is only sent when there are scopes, joined with commas in the
    order given.
    """
    data = {
        "grant_type": "client_credentials",
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "org_id": credentials.org_id,
    }
    if credentials.scopes:
        data["scope"] = ",".join(credentials.scopes)
    return data


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _token_error(
    response: httpx.Response,
    credentials: Credentials,
    environment: ImsEnvironment,
) -> ImsTokenError:
    payload = _error_payload(response)
    error = payload.get("error")
    description = payload.get("error_description")
    message = description or error or f"HTTP {response.status_code}"
    return ImsTokenError(
        message,
        sdk_details={
            "statusCode": response.status_code,
            "statusText": response.reason_phrase,
            "error": error,
            "errorDescription": description,
            "xDebugId": response.headers.get("x-debug-id"),
            **credentials.details(),
            "imsEnv": environment.value,
        },
    )


async def _post_token_request(
    client: httpx.AsyncClient,
    credentials: Credentials,
    environment: ImsEnvironment,
) -> TokenResponse:
    url = f"{get_ims_url(environment)}{IMS_TOKEN_PATH}"
    logger.info(
        "Requesting IMS token for client %s (org %s, env %s)",
        credentials.client_id,
        credentials.org_id,
        environment.value,
    )
    response = await client.post(url, data=build_token_request(credentials), headers=_FORM_HEADERS)

    if not response.is_success:
        raise _token_error(response, credentials, environment)

    return response.json()


async def get_access_token_by_client_credentials(
    credentials: Credentials | Any,
    environment: Any = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> TokenResponse:
    """Fetch an access token from IMS without touching any cache.

    Args:
        credentials: A :class:`~imsauth.models.Credentials` instance, or a
            raw mapping that is validated first.
        environment: ``"prod"`` or ``"stage"`` (or an
            :class:`~imsauth.models.ImsEnvironment`).  Anything else,
            including ``None``, targets production.
        client: Optional :class:`httpx.AsyncClient` to send the request
            with.  It is not closed.  When omitted, a client is created for
            this call only.

    Returns:
        The provider's JSON body, unmodified.

    Raises:
        BadCredentialsFormatError: If raw *credentials* is not a mapping.
        BadScopesFormatError: If raw *credentials* has malformed scopes.
        MissingParametersError: If raw *credentials* lacks a required field.
        ImsTokenError: If IMS answers with a non-success status.
        GenericError: On network failure, timeout or an unparsable body.
    """
    if not isinstance(credentials, Credentials):
        credentials = validate_credentials(credentials)
    env = ImsEnvironment.parse(environment)

    try:
        if client is not None:
            return await _post_token_request(client, credentials, env)
        async with httpx.AsyncClient() as owned_client:
            return await _post_token_request(owned_client, credentials, env)
    except AuthSDKError as exc:
        logger.warning("IMS rejected token request: %s", exc.message)
        raise
    except Exception as exc:
        logger.warning("IMS token request failed: %s", exc)
        raise GenericError(
            str(exc),
            sdk_details={
                "originalError": str(exc),
                **credentials.details(),
                "imsEnv": env.value,
            },
        ) from exc
