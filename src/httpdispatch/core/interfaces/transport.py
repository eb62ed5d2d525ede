from abc import ABC, abstractmethod

from httpdispatch.core.interfaces.request import RequestDescriptor
from httpdispatch.core.models.raw_result import RawResult

class TransportPort(ABC):
    @abstractmethod
    async def __aenter__(self) -> "TransportPort":
        """Async context manager entry method"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit method"""
        pass

    @abstractmethod
    async def execute(self, request: RequestDescriptor) -> RawResult:
        """Perform the call described by `request` exactly once.

        Returns a RawResult for any answer from the remote endpoint, error
        statuses included. Raises TransportFailure when no answer was
        received (connection refused, timeout, DNS failure, malformed URL).

        Implementations must be safe to call from concurrent dispatches.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connections"""
        pass
