"""Zoho CRM Tasks over the Alloy connector API."""

__version__ = "0.1.0"
