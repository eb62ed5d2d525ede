"""Outcome of one dispatch and the error details a failure can carry.

Every dispatch produces exactly one Outcome: `Success(value)` or
`Failure(error)`. Error details are plain data so callers branch on them
(`match outcome.error: case ClientError(status=404): ...`) instead of catching
exceptions. Underlying exceptions are kept for diagnostics but are excluded
from equality, so dispatching the same request against the same response
yields equal outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, Mapping, Optional, TypeVar, Union

from httpdispatch.core.exceptions import DispatchError

T = TypeVar("T")


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    CLIENT = "client"
    SERVER = "server"
    DECODE = "decode"
    NO_DATA = "no_data"


def _preview(body: Optional[bytes], limit: int = 200) -> str:
    if not body:
        return ""
    return body[:limit].decode("utf-8", errors="replace")


def _with_preview(prefix: str, body: Optional[bytes]) -> str:
    preview = _preview(body)
    return f"{prefix}: {preview}" if preview else prefix


@dataclass(frozen=True)
class TransportError:
    """The call never produced an HTTP response."""

    kind: ClassVar[ErrorKind] = ErrorKind.TRANSPORT

    reason: str
    message: str
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def describe(self) -> str:
        return f"Transport error ({self.reason}): {self.message}"


@dataclass(frozen=True)
class _StatusError:
    status: int
    body: Optional[bytes] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def body_text(self) -> str:
        """Body decoded as UTF-8, undecodable bytes replaced."""
        return (self.body or b"").decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ClientError(_StatusError):
    """The remote endpoint rejected the request (4xx)."""

    kind: ClassVar[ErrorKind] = ErrorKind.CLIENT

    def describe(self) -> str:
        return _with_preview(f"Client error {self.status}", self.body)


@dataclass(frozen=True)
class ServerError(_StatusError):
    """The remote endpoint failed or answered with an unexpected status."""

    kind: ClassVar[ErrorKind] = ErrorKind.SERVER

    def describe(self) -> str:
        return _with_preview(f"Server error {self.status}", self.body)


@dataclass(frozen=True)
class DecodeError:
    """The body did not match the declared response type."""

    kind: ClassVar[ErrorKind] = ErrorKind.DECODE

    message: str
    response_type: Any = None
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def describe(self) -> str:
        type_name = getattr(self.response_type, "__name__", repr(self.response_type))
        return f"Failed to decode response as {type_name}: {self.message}"


@dataclass(frozen=True)
class NoDataError:
    """Success status, but no body was received; nothing was decoded."""

    kind: ClassVar[ErrorKind] = ErrorKind.NO_DATA

    status: int

    def describe(self) -> str:
        return f"No data received (status {self.status})"


ErrorDetail = Union[TransportError, ClientError, ServerError, DecodeError, NoDataError]


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    is_success: ClassVar[bool] = True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: ErrorDetail

    is_success: ClassVar[bool] = False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self):
        """Raise the error detail wrapped in a DispatchError."""
        raise DispatchError(self.error)

    def unwrap_or(self, default: Any) -> Any:
        return default


Outcome = Union[Success[T], Failure]
