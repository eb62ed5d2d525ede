import re
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

ResponseT = TypeVar("ResponseT")

# RFC 9110 token characters
_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class HttpRequest(BaseModel, Generic[ResponseT]):
    """Base model for request descriptors.

    Subclasses bind the response type explicitly and usually provide a
    `build` classmethod computing the URL from construction parameters:

        class UserRequest(HttpRequest[User]):
            response_type: ClassVar[type[User]] = User

            @classmethod
            def build(cls, user_id: int) -> "UserRequest":
                return cls(url=f"https://api.example.com/users/{user_id}")

    A subclass whose payload is not JSON may define `decode_response(data)`;
    the Dispatcher then uses it instead of its configured decoder:

        class FeedRequest(HttpRequest[Feed]):
            def decode_response(self, data: bytes) -> Feed:
                return Feed.from_xml(data)

    Instances are frozen and hashable; headers are exposed as a read-only
    mapping. Without a `response_type` binding, the body decodes to plain
    JSON values.
    """

    model_config = ConfigDict(frozen=True)

    response_type: ClassVar[Any] = Any

    url: HttpUrl
    method: str = "GET"
    headers: Mapping[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None

    @field_validator("method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        method = value.strip().upper()
        if not method or not _METHOD_TOKEN.match(method):
            raise ValueError(f"invalid HTTP method: {value!r}")
        return method

    @field_validator("headers", mode="after")
    @classmethod
    def freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        # the header mapping itself is unhashable; its items are not
        return hash(
            (type(self), self.method, str(self.url), frozenset(self.headers.items()), self.body)
        )

    @classmethod
    def build(cls, **kwargs: Any) -> "HttpRequest[ResponseT]":
        return cls(**kwargs)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive lookup of a request header."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None
