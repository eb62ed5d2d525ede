from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from httpdispatch.core.models.outcome import ErrorDetail


class TransportFailure(Exception):
    """Raised by a transport when a call never produced an HTTP response.

    Attributes:
        message: Human-readable error description
        reason: Short machine-readable tag (timeout, connection, invalid_url, ...)
        cause: Underlying library exception, if any
    """
    def __init__(
        self,
        message: str,
        reason: str = "unexpected",
        cause: Optional[BaseException] = None
    ):
        self.message = message
        self.reason = reason
        self.cause = cause
        super().__init__(message)


class DecodeFailure(Exception):
    """Raised by a response decoder when bytes do not match the declared type.

    Attributes:
        message: Human-readable error description
        response_type: Type the decoder was asked to produce
        cause: Underlying parse / validation error
    """
    def __init__(
        self,
        message: str,
        response_type: Any = None,
        cause: Optional[BaseException] = None
    ):
        self.message = message
        self.response_type = response_type
        self.cause = cause
        super().__init__(message)


class DispatchError(Exception):
    """Raised by `Failure.unwrap()` for callers that prefer exceptions.

    The dispatcher itself never raises it; it only wraps an error detail that
    was already delivered as data.
    """
    def __init__(self, error: "ErrorDetail"):
        self.error = error
        super().__init__(error.describe())
