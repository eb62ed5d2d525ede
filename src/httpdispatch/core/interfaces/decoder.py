from typing import Any, Protocol

class ResponseDecoderPort(Protocol):
    """Decode raw response bytes into a declared response type.

    Implementations pick the wire format (JSON by default); the dispatcher
    only guarantees it never passes an empty body.
    """
    def decode(self, data: bytes, response_type: Any) -> Any:  # pragma: no cover - protocol
        """Decode `data` into an instance of `response_type`.

        Raises:
            DecodeFailure: If the bytes are malformed or do not match the type.
        """
        ...
