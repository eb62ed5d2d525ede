"""Dispatcher: transport call, status classification, response decoding.

One dispatch runs the pipeline

    transport.execute -> classify_status -> decode

and always ends in exactly one Outcome. Decoding uses the descriptor's own
`decode_response` when it has one, the injected decoder otherwise. Every
failure along the way is captured here and returned as an error detail;
nothing raised by the transport or the decoder reaches the caller. The
dispatcher keeps no state between dispatches and never retries.
"""

import asyncio
import uuid
from typing import Any, Callable, List, Optional, TypeVar

from httpdispatch.core.config import DispatcherConfig
from httpdispatch.core.exceptions import DecodeFailure, TransportFailure
from httpdispatch.core.interfaces.decoder import ResponseDecoderPort
from httpdispatch.core.interfaces.logging import LoggingPort
from httpdispatch.core.interfaces.request import RequestDescriptor, SelfDecodingRequest
from httpdispatch.core.interfaces.transport import TransportPort
from httpdispatch.core.logging_config import dispatch_id_var
from httpdispatch.core.managers.status_classifier import StatusBand, classify_status
from httpdispatch.core.models.outcome import (
    ClientError,
    DecodeError,
    Failure,
    NoDataError,
    Outcome,
    ServerError,
    Success,
    TransportError,
)
from httpdispatch.core.models.raw_result import RawResult
from httpdispatch.core.settings import logger as default_logger

T = TypeVar("T")


class Dispatcher:
    def __init__(
        self,
        transport: TransportPort,
        decoder: ResponseDecoderPort,
        config: Optional[DispatcherConfig] = None,
        logger: Optional[LoggingPort] = None,
    ):
        self._transport = transport
        self._decoder = decoder
        self._config = config or DispatcherConfig()
        self._logger = logger or default_logger

    @property
    def transport(self) -> TransportPort:
        return self._transport

    @property
    def decoder(self) -> ResponseDecoderPort:
        return self._decoder

    async def __aenter__(self) -> "Dispatcher":
        """Open the transport for the lifetime of the block"""
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._transport.__aexit__(exc_type, exc_val, exc_tb)
        return False

    async def dispatch(self, request: RequestDescriptor[T]) -> Outcome[T]:
        """Perform `request` and return its Outcome. Never raises."""
        token = dispatch_id_var.set(uuid.uuid4().hex[:12])
        try:
            return await self._dispatch(request)
        finally:
            dispatch_id_var.reset(token)

    def dispatch_with_callback(
        self,
        request: RequestDescriptor[T],
        completion: Callable[[Outcome[T]], Any],
    ) -> "asyncio.Task[Outcome[T]]":
        """Schedule `request` on the running loop; call `completion` once with its Outcome."""
        async def _run() -> Outcome[T]:
            outcome = await self.dispatch(request)
            completion(outcome)
            return outcome

        return asyncio.get_running_loop().create_task(_run())

    async def dispatch_all(self, *requests: RequestDescriptor[Any]) -> List[Outcome[Any]]:
        """Dispatch concurrently; outcomes come back in argument order."""
        outcomes = await asyncio.gather(*(self.dispatch(request) for request in requests))
        return list(outcomes)

    async def _dispatch(self, request: RequestDescriptor[T]) -> Outcome[T]:
        self._logger.debug(f"[dispatch] start method={request.method} url={request.url}")

        try:
            raw = await self._transport.execute(request)
        except TransportFailure as failure:
            self._logger.error(
                f"[dispatch] transport failure method={request.method} url={request.url} "
                f"reason={failure.reason} error={failure.message}"
            )
            return Failure(
                TransportError(reason=failure.reason, message=failure.message, cause=failure)
            )
        except Exception as unexpected:
            self._logger.error(
                f"[dispatch] unexpected transport error method={request.method} url={request.url} "
                f"error={unexpected!r}"
            )
            return Failure(
                TransportError(
                    reason="unexpected",
                    message=str(unexpected) or type(unexpected).__name__,
                    cause=unexpected,
                )
            )

        outcome = self._resolve(request, raw)
        self._logger.debug(
            f"[dispatch] done url={request.url} status={raw.status} "
            f"outcome={'success' if outcome.is_success else outcome.kind.value}"
        )
        return outcome

    def _resolve(self, request: RequestDescriptor[T], raw: RawResult) -> Outcome[T]:
        band = classify_status(raw.status)

        if band is StatusBand.CLIENT_ERROR:
            self._logger.warning(
                f"[dispatch] client error url={request.url} status={raw.status} body={self._preview(raw.body)}"
            )
            return Failure(ClientError(status=raw.status, body=raw.body, headers=raw.headers))

        if band is StatusBand.SERVER_ERROR:
            self._logger.warning(
                f"[dispatch] server error url={request.url} status={raw.status} body={self._preview(raw.body)}"
            )
            return Failure(ServerError(status=raw.status, body=raw.body, headers=raw.headers))

        # Success band: an empty payload is never handed to the decoder
        if not raw.has_body:
            self._logger.warning(f"[dispatch] no data received url={request.url} status={raw.status}")
            return Failure(NoDataError(status=raw.status))

        return self._decode(request, raw.body)

    def _decode(self, request: RequestDescriptor[T], data: bytes) -> Outcome[T]:
        response_type = request.response_type
        try:
            if isinstance(request, SelfDecodingRequest):
                value = request.decode_response(data)
            else:
                value = self._decoder.decode(data, response_type)
        except DecodeFailure as failure:
            self._logger.warning(
                f"[dispatch] decode failure url={request.url} error={failure.message}"
            )
            return Failure(
                DecodeError(message=failure.message, response_type=response_type, cause=failure.cause or failure)
            )
        except Exception as unexpected:
            self._logger.warning(
                f"[dispatch] decoder raised url={request.url} error={unexpected!r}"
            )
            return Failure(
                DecodeError(message=str(unexpected), response_type=response_type, cause=unexpected)
            )
        return Success(value)

    def _preview(self, body: Optional[bytes]) -> str:
        if not body:
            return "''"
        limit = self._config.log_body_preview
        return repr(body[:limit].decode("utf-8", errors="replace"))
