"""
Transport adapter.

Turns a RequestDescriptor into an authenticated httpx request and performs
the exchange, buffered or streamed. No retries, no error classification:
httpx exceptions (and HTTPStatusError for non-2xx) propagate unchanged to
the facade, which hands them to the error normalizer.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from .auth import BearerAuthenticator
from .config import TransportSettings
from .types import RequestDescriptor

logger = logging.getLogger(__name__)


class TransportAdapter:
    """
    Thin wrapper around one httpx.AsyncClient bound to the API base URL.

    Safe for concurrent use: the adapter holds no per-call state.
    """

    def __init__(
        self,
        authenticator: BearerAuthenticator,
        settings: TransportSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._authenticator = authenticator
        self._settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout),
            headers={"User-Agent": settings.user_agent},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    # ── Request construction ──────────────────────────────────

    def build_request(self, descriptor: RequestDescriptor) -> httpx.Request:
        """
        Build the exact request that would be transmitted.

        Used by send(), stream() and curl rendering alike.
        """
        request = self._http.build_request(
            descriptor.method,
            descriptor.path,
            json=descriptor.body.to_body(),
        )
        return self._authenticator.apply(request)

    # ── Exchange ──────────────────────────────────────────────

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """
        Buffered exchange.

        Raises:
            httpx.RequestError: connectivity, timeout, TLS
            httpx.HTTPStatusError: non-2xx status (body already read)
        """
        request = self.build_request(descriptor)
        t0 = time.perf_counter()
        logger.debug(
            "request sent",
            extra={"method": request.method, "path": descriptor.path},
        )
        response = await self._http.send(request)
        logger.debug(
            "response received",
            extra={
                "status_code": response.status_code,
                "dur_ms": int((time.perf_counter() - t0) * 1000),
            },
        )
        response.raise_for_status()
        return response

    @asynccontextmanager
    async def stream(self, descriptor: RequestDescriptor) -> AsyncIterator[httpx.Response]:
        """
        Streamed exchange.

        Yields the open response once a 2xx status is known. The response
        is closed on exit, including on cancellation.

        Raises:
            httpx.RequestError: connectivity, timeout, TLS
            httpx.HTTPStatusError: non-2xx status (error body already read)
        """
        request = self.build_request(descriptor)
        logger.debug(
            "stream opening",
            extra={"method": request.method, "path": descriptor.path},
        )
        response = await self._http.send(request, stream=True)
        try:
            if not response.is_success:
                await response.aread()
                response.raise_for_status()
            yield response
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()
