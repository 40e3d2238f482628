"""Error types raised while talking to the Alloy connector API."""

from __future__ import annotations

from typing import Any

AUTH_HINT = "Check ALLOY_API_KEY: the connector API rejected the key."
CREDENTIAL_HINT = (
    "Reconnect Zoho CRM in the Alloy dashboard and update ALLOY_CREDENTIAL_ID."
)
UPSTREAM_HINT = "The connector API or Zoho CRM reported a failure; see the message."


class ZohoTasksError(Exception):
    """Base error carrying a user-facing hint and an HTTP status."""

    default_status = 500
    default_hint = ""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint if hint is not None else self.default_hint
        self.status_code = status_code if status_code is not None else self.default_status

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.hint:
            body["hint"] = self.hint
        return body


class ConfigurationError(ZohoTasksError):
    """Local settings are missing or invalid."""

    default_status = 500
    default_hint = "Set ALLOY_API_KEY, ALLOY_USER_ID and ALLOY_CREDENTIAL_ID."


class ValidationError(ZohoTasksError):
    """The incoming request could not be understood."""

    default_status = 400


class AuthenticationError(ZohoTasksError):
    default_status = 401
    default_hint = AUTH_HINT


class CredentialError(ZohoTasksError):
    """The Zoho credential is missing, expired or revoked."""

    default_status = 424
    default_hint = CREDENTIAL_HINT


class UpstreamError(ZohoTasksError):
    default_status = 502
    default_hint = UPSTREAM_HINT


class NotFoundError(UpstreamError):
    default_status = 404
    default_hint = "The task does not exist or was already deleted."


def extract_message(payload: Any, fallback: str) -> str:
    """Pull the most specific error message out of a connector payload."""
    if isinstance(payload, str):
        return payload.strip() or fallback
    if not isinstance(payload, dict):
        return fallback

    message = payload.get("message")
    if isinstance(message, str) and message:
        return message

    error = payload.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict):
        return extract_message(error, fallback)

    data = payload.get("data")
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return extract_message(data[0], fallback)

    return fallback


def _credential_code(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    code = str(payload.get("code", "")).lower()
    return "credential" in code or code in {"invalid_token", "oauth_error"}


def classify_upstream_error(status_code: int, payload: Any) -> ZohoTasksError:
    """Map a non-success connector response to the matching error class."""
    message = extract_message(payload, f"Upstream request failed with status {status_code}")

    # On 401/403 only a token code points at the Zoho credential
    if status_code in (401, 403):
        if _credential_code(payload):
            return CredentialError(message)
        return AuthenticationError(message, status_code=status_code)
    if _credential_code(payload) or "credential" in message.lower():
        return CredentialError(message)
    if status_code == 404:
        return NotFoundError(message)
    return UpstreamError(message, status_code=status_code)
