"""
Request authentication.

The single place where credentials are attached to outgoing requests.
Buffered sends, streamed sends and curl rendering all go through
BearerAuthenticator.apply(), so they carry identical headers.
"""

from typing import Dict

import httpx


class BearerAuthenticator:
    """Injects the bearer token and JSON content type into a request."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    def __repr__(self) -> str:
        return "BearerAuthenticator(api_key=***)"

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def apply(self, request: httpx.Request) -> httpx.Request:
        """Mutate the outgoing request headers in place. No I/O."""
        request.headers.update(self.headers())
        return request
