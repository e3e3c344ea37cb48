"""Exception hierarchy for imsauth.

All exceptions inherit from :class:`AuthSDKError`, which carries a stable
``code`` discriminant, a human-readable ``message`` and a ``sdk_details``
dict with structured context for logging.  Callers branch on ``code`` (or on
the subclass) rather than on message text.

Subclass hierarchy::

    AuthSDKError
    +-- ImsTokenError              (IMS_TOKEN_ERROR)
    +-- MissingParametersError     (MISSING_PARAMETERS)
    +-- BadCredentialsFormatError  (BAD_CREDENTIALS_FORMAT)
    +-- BadScopesFormatError       (BAD_SCOPES_FORMAT)
    +-- GenericError               (GENERIC_ERROR)

The ``sdk_details`` bag never contains the client secret.
"""

from __future__ import annotations

from typing import Any, Optional

SDK_NAME = "AuthSDK"


class AuthSDKError(Exception):
    """Base exception for all imsauth errors.

    Every subclass sets a class-level ``code`` and a ``template``.  The
    template is a ``%``-style format string; *message_values* is
    interpolated into it when the template has a ``%s`` placeholder.

    Args:
        message_values: Value substituted into the class template.
        sdk_details: Structured context (status code, identifiers, scopes).
    """

    code: str = "AUTH_SDK_ERROR"
    template: str = "%s"
    sdk: str = SDK_NAME

    def __init__(
        self,
        message_values: Any = None,
        sdk_details: Optional[dict[str, Any]] = None,
    ):
        if "%s" in self.template:
            self.message = self.template % ("" if message_values is None else message_values)
        else:
            self.message = self.template
        self.sdk_details: dict[str, Any] = dict(sdk_details or {})
        super().__init__(f"[{self.sdk}:{self.code}] {self.message}")

    def to_dict(self) -> dict[str, Any]:
        """Render the error for structured logging."""
        return {
            "sdk": self.sdk,
            "code": self.code,
            "message": self.message,
            "sdkDetails": dict(self.sdk_details),
        }


class ImsTokenError(AuthSDKError):
    """Raised when the IMS token endpoint answers with a non-success status."""

    code = "IMS_TOKEN_ERROR"
    template = "Error calling IMS to get access token: %s"


class MissingParametersError(AuthSDKError):
    """Raised when clientId, clientSecret or orgId is absent after normalisation."""

    code = "MISSING_PARAMETERS"
    template = "Missing required parameters: %s"


class BadCredentialsFormatError(AuthSDKError):
    """Raised when the credentials input is not a mapping."""

    code = "BAD_CREDENTIALS_FORMAT"
    template = "Credentials must be provided as a mapping"


class BadScopesFormatError(AuthSDKError):
    """Raised when ``scopes`` is present but is not a list."""

    code = "BAD_SCOPES_FORMAT"
    template = "Scopes must be an array"


class GenericError(AuthSDKError):
    """Raised for transport, timeout and parse failures while fetching a token."""

    code = "GENERIC_ERROR"
    template = "An unexpected error occurred: %s"


codes: dict[str, type[AuthSDKError]] = {
    cls.code: cls
    for cls in (
        ImsTokenError,
        MissingParametersError,
        BadCredentialsFormatError,
        BadScopesFormatError,
        GenericError,
    )
}
"""Error classes keyed by their ``code``."""

messages: dict[str, str] = {code: cls.template for code, cls in codes.items()}
"""Message templates keyed by error ``code``."""
