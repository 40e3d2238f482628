"""Clients for the Alloy connector API."""
