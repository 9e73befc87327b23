"""HTTP transport built on httpx."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP response as seen by the transport."""
    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)


class HttpTransport:
    """
    Sends requests through a single lazily created ``httpx.AsyncClient``.

    Connection failures and timeouts are turned into :class:`TransportError`;
    HTTP error statuses are returned untouched for the caller to classify.
    Nothing is retried.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            http_client: Pre-configured client to use. Not closed by
                :meth:`aclose` since the caller owns it.
            transport: Low level httpx transport for a client created here
                (for example ``httpx.MockTransport`` in tests).
        """
        self._client = http_client
        self._owns_client = http_client is None
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(transport=self._transport)
            self._owns_client = True
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        content: Optional[bytes] = None,
        params: Optional[Mapping[str, object]] = None,
        timeout: Optional[float] = None,
        auth: Optional[httpx.Auth] = None,
    ) -> TransportResponse:
        """Perform one request.

        ``timeout`` bounds the whole exchange, body included, not only each
        connect or read step.

        Raises:
            TransportError: No HTTP response was received.
        """
        client = self._get_client()
        try:
            response = await asyncio.wait_for(
                client.request(
                    method,
                    url,
                    headers=dict(headers or {}),
                    content=content,
                    params=dict(params) if params else None,
                    timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
                    auth=httpx.USE_CLIENT_DEFAULT if auth is None else auth,
                ),
                timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(f"Request timed out after {timeout}s: {method} {url}")
            raise TransportError(
                f"Request timed out after {timeout}s: {method} {url}", timed_out=True
            ) from e
        except httpx.TransportError as e:
            reason = str(e) or type(e).__name__
            logger.warning(f"Transport failure for {method} {url}: {reason}")
            raise TransportError(f"Transport failure for {method} {url}: {reason}") from e

        return TransportResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
