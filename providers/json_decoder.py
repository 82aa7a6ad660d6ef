"""JSON body decoder backed by pydantic."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from rest.errors import BodyDecodeError

T = TypeVar("T")


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into one line, keeping 'line N column M' locations intact."""
    parts: list[str] = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts) or str(exc)


class JsonBodyDecoder(Generic[T]):
    """Decodes JSON text into any type pydantic can validate. Implements BodyDecoder protocol."""

    def __init__(self, response_type: Any) -> None:
        self.response_type = response_type
        self._adapter: TypeAdapter[T] = TypeAdapter(response_type)

    def decode(self, text: str) -> T:
        try:
            return self._adapter.validate_json(text)
        except ValidationError as exc:
            raise BodyDecodeError(describe_validation_error(exc), body=text) from exc
