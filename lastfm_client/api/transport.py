"""
HTTP transport that executes rendered requests with aiohttp.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import aiohttp

from lastfm_client import __version__
from lastfm_client.exceptions import TransportError

from .operations import HttpMethod
from .request_builder import RequestDescription

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of an HTTP response."""

    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Anything able to execute a RequestDescription."""

    async def send(self, request: RequestDescription) -> TransportResponse: ...

    async def close(self) -> None: ...


class AiohttpTransport:
    """
    Executes requests over a lazily created aiohttp session.

    Timeouts come from ``aiohttp.ClientTimeout``; a timed-out or failed exchange is
    raised as TransportError and never retried.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initializes the transport.

        Args:
            timeout: Total timeout for a single request, in seconds.
            session: An existing session to use. It is not closed by ``close()``.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout, connect=min(timeout, 15))
        self._session = session
        self._owns_session = session is None

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": f"lastfm-client/{__version__}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
            self._owns_session = True
        return self._session

    async def send(self, request: RequestDescription) -> TransportResponse:
        session = await self._initialize_session()
        try:
            if request.method is HttpMethod.GET:
                response_ctx = session.get(request.url, headers=request.headers)
            else:
                response_ctx = session.post(
                    request.url,
                    data=(request.body or "").encode("utf-8"),
                    headers=request.headers,
                )
            async with response_ctx as r:
                body = await r.text()
                return TransportResponse(status=r.status, body=body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"Transport failure for {request.operation_name}: {e!r}")
            raise TransportError(
                f"Request for {request.operation_name} failed: {e!r}", cause=e
            ) from e

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
