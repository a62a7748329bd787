"""Shared service infrastructure."""

from .http_client import HTTPClient, HTTPClientError

__all__ = [
    "HTTPClient",
    "HTTPClientError",
]
