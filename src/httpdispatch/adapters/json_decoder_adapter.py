from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from httpdispatch.core.exceptions import DecodeFailure


@lru_cache(maxsize=256)
def _type_adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors(include_url=False):
        location = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


class JsonResponseDecoder:
    """Pydantic-based JSON decoder implementing ResponseDecoderPort.

    Accepts anything pydantic can validate: BaseModel subclasses, dataclasses,
    TypedDicts and containers of those such as `list[Post]`. In strict mode a
    JSON string is not coerced into an int field, matching what a typed
    client expects from its schema.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def decode(self, data: bytes, response_type: Any) -> Any:
        try:
            adapter = _type_adapter(response_type)
        except Exception as schema_error:
            raise DecodeFailure(
                f"cannot build a JSON schema for {response_type!r}: {schema_error}",
                response_type=response_type,
                cause=schema_error,
            ) from schema_error

        try:
            return adapter.validate_json(data, strict=self.strict)
        except ValidationError as validation_error:
            raise DecodeFailure(
                _summarize(validation_error),
                response_type=response_type,
                cause=validation_error,
            ) from validation_error
