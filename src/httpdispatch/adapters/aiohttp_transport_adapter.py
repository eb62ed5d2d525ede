# httpdispatch/adapters/aiohttp_transport_adapter.py
import asyncio
import aiohttp
from multidict import CIMultiDict, CIMultiDictProxy
from typing import Dict, Optional

from httpdispatch.core.config import TransportConfig
from httpdispatch.core.exceptions import TransportFailure
from httpdispatch.core.interfaces.request import RequestDescriptor
from httpdispatch.core.interfaces.transport import TransportPort
from httpdispatch.core.models.raw_result import RawResult
from httpdispatch.core.settings import logger


class AioHttpTransportAdapter(TransportPort):
    """aiohttp-backed transport.

    One ClientSession is opened per `async with` block and shared by every
    dispatch running inside it; aiohttp sessions are safe for concurrent use
    from tasks on the same event loop. Any HTTP status is returned as a
    RawResult; only failures to obtain a response become TransportFailure.
    """

    def __init__(self, config: Optional[TransportConfig] = None):
        self._config = config or TransportConfig()
        self._session: Optional[aiohttp.ClientSession] = None
        # Pre-built ClientTimeout applied to every request of the session
        self._default_client_timeout = aiohttp.ClientTimeout(
            total=self._config.timeout_total,
            sock_read=self._config.timeout_sock_read,
            sock_connect=self._config.timeout_sock_connect,
        )

    async def __aenter__(self):
        """Async context manager entry"""
        self._session = aiohttp.ClientSession(timeout=self._default_client_timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
        return False

    def _merge_headers(self, request: RequestDescriptor) -> Dict[str, str]:
        """Config default headers under the descriptor's own, compared case-insensitively."""
        overridden = {name.lower() for name in request.headers}
        merged = {
            name: value
            for name, value in self._config.default_headers.items()
            if name.lower() not in overridden
        }
        merged.update(request.headers)
        return merged

    async def execute(self, request: RequestDescriptor) -> RawResult:
        if self._session is None:
            raise RuntimeError("HTTP session not initialized. Use 'async with' context manager.")

        url = str(request.url)
        method = request.method

        try:
            async with self._session.request(
                method,
                url,
                headers=self._merge_headers(request),
                data=request.body,
            ) as response:
                body = await response.read()
                return RawResult(
                    status=response.status,
                    headers=CIMultiDictProxy(CIMultiDict(response.headers)),
                    body=body,
                )

        except asyncio.TimeoutError as timeout_error:
            logger.error("Timeout when requesting remote service. Method: %s, URL: %s", method, url)
            raise TransportFailure(
                "The request to the remote service timed out.",
                reason="timeout",
                cause=timeout_error,
            )

        except aiohttp.InvalidURL as invalid_url:
            logger.error("Invalid URL for remote service. Method: %s, URL: %s", method, url)
            raise TransportFailure(
                f"The URL is not valid: {url}",
                reason="invalid_url",
                cause=invalid_url,
            )

        except aiohttp.ClientConnectionError as connection_error:
            logger.error(
                "Connection error when requesting remote service. Method: %s, URL: %s, Error: %s",
                method,
                url,
                str(connection_error),
            )
            raise TransportFailure(
                f"Could not connect to the remote service: {connection_error}",
                reason="connection",
                cause=connection_error,
            )

        except aiohttp.ClientError as client_error:
            logger.error(
                "Client error when requesting remote service. Method: %s, URL: %s, Error: %s",
                method,
                url,
                str(client_error),
            )
            raise TransportFailure(
                f"The request to the remote service failed: {client_error}",
                reason="client",
                cause=client_error,
            )

        except Exception as unexpected_error:
            logger.error(
                "Unexpected error for remote service. Method: %s, URL: %s, Error: %s",
                method,
                url,
                str(unexpected_error),
            )
            raise TransportFailure(
                f"An unexpected error occurred while requesting the remote service: {unexpected_error}",
                reason="unexpected",
                cause=unexpected_error,
            )

    async def close(self) -> None:
        """Close the session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
