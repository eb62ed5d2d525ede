"""Scripted in-memory implementation of TransportPort.

Returns pre-registered RawResult / TransportFailure values keyed by the whole
descriptor (method, url, headers and body) without any network activity.
Suitable for tests and for exercising dispatch logic offline; executed
requests are recorded in order.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from httpdispatch.core.exceptions import TransportFailure
from httpdispatch.core.interfaces.request import RequestDescriptor
from httpdispatch.core.interfaces.transport import TransportPort
from httpdispatch.core.models.raw_result import RawResult

Scripted = Union[RawResult, TransportFailure]
RequestKey = Tuple[str, str, FrozenSet[Tuple[str, str]], Optional[bytes]]


def request_key(request: RequestDescriptor) -> RequestKey:
    """Identity of a descriptor on the wire; header names compare case-insensitively."""
    headers = frozenset((name.lower(), value) for name, value in request.headers.items())
    return (request.method.upper(), str(request.url), headers, request.body)


class ScriptedTransport(TransportPort):
    def __init__(
        self, responses: Optional[Iterable[Tuple[RequestDescriptor, Scripted]]] = None
    ) -> None:
        self._responses: Dict[RequestKey, Scripted] = {}
        for request, scripted in responses or ():
            self.script(request, scripted)
        self.requests: List[RequestDescriptor] = []

    async def __aenter__(self) -> "ScriptedTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    def script(self, request: RequestDescriptor, scripted: Scripted) -> None:
        """Register the result returned whenever `request` is executed."""
        self._responses[request_key(request)] = scripted

    async def execute(self, request: RequestDescriptor) -> RawResult:
        self.requests.append(request)
        scripted = self._responses.get(request_key(request))
        if scripted is None:
            raise TransportFailure(
                f"no scripted response for {request.method} {request.url}",
                reason="unscripted",
            )
        if isinstance(scripted, TransportFailure):
            raise scripted
        return scripted

    async def close(self) -> None:
        return None
