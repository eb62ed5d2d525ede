"""Protocol for request descriptors.

A descriptor is an immutable value describing one outbound HTTP call and the
type its response body decodes into. The Dispatcher only reads these
attributes; it never mutates a descriptor, so one descriptor may be dispatched
any number of times, concurrently or not.
"""

from typing import Any, Mapping, Optional, Protocol, TypeVar, runtime_checkable

ResponseT_co = TypeVar("ResponseT_co", covariant=True)


class RequestDescriptor(Protocol[ResponseT_co]):
    """Capability set every request descriptor provides.

    - url: absolute target address; `str(url)` yields the wire form
    - method: non-empty HTTP verb, e.g. "GET"
    - headers: name -> value, empty when the request sends none
    - body: raw payload, None when the request carries no body (distinct from b"")
    - response_type: type the success body is decoded into
    - build(): construction function returning a ready-to-dispatch descriptor

    Optionally a descriptor also implements `SelfDecodingRequest`, taking over
    decoding of its own success payload.
    """

    @property
    def url(self) -> Any: ...

    @property
    def method(self) -> str: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def body(self) -> Optional[bytes]: ...

    @property
    def response_type(self) -> Any: ...

    @classmethod
    def build(cls, *args: Any, **kwargs: Any) -> "RequestDescriptor[ResponseT_co]": ...


@runtime_checkable
class SelfDecodingRequest(Protocol[ResponseT_co]):
    """Descriptor that decodes its own success payload.

    `decode_response` receives the non-empty body bytes and returns the value
    of the declared response type. Failures are signalled by raising, ideally
    DecodeFailure; the Dispatcher turns any exception into a DecodeError.
    """

    def decode_response(self, data: bytes) -> ResponseT_co: ...
