"""
Exit codes for the zoho-tasks CLI.

Semantic exit codes so scripts can tell a bad API key from a Zoho outage.
"""

from zoho_tasks.errors import (
    AuthenticationError,
    ConfigurationError,
    CredentialError,
    NotFoundError,
    UpstreamError,
    ValidationError,
    ZohoTasksError,
)

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# API key or Zoho credential rejected, or connector settings missing
ERROR_AUTH_FAILURE = 3

# Connector API or Zoho CRM failure
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5


def exit_code_for(error: ZohoTasksError) -> int:
    """Pick the exit code matching an error class."""
    # NotFoundError is an UpstreamError, so it goes first
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, ValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(error, (AuthenticationError, CredentialError, ConfigurationError)):
        return ERROR_AUTH_FAILURE
    if isinstance(error, UpstreamError):
        return ERROR_NETWORK
    return ERROR_GENERAL
