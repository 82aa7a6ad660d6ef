"""Body decoder protocol: structural subtyping, no ABC needed."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class BodyDecoder(Protocol[T_co]):
    """Any class that turns a response body into a typed value."""

    def decode(self, text: str) -> T_co:
        """Decode text, raising BodyDecodeError when it does not fit."""
        ...
