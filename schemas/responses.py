"""Response envelope and body format detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from schemas.observability import CallOutcome

T = TypeVar("T")


class BodyFormat(str, Enum):
    JSON = "json"
    XML = "xml"
    EMPTY = "empty"
    UNKNOWN = "unknown"


def detect_format(body: str | None) -> BodyFormat:
    """Guess the encoding from the first character only. Leading whitespace is not skipped."""
    if not body:
        return BodyFormat.EMPTY
    if body[0] in "{[":
        return BodyFormat.JSON
    if body[0] == "<":
        return BodyFormat.XML
    return BodyFormat.UNKNOWN


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Everything one call produced. Safe to share where the executor's last-call fields are not."""

    status_code: int
    body: str
    value: T | None = None
    outcome: CallOutcome = "decoded"

    @property
    def body_format(self) -> BodyFormat:
        return detect_format(self.body)

    @property
    def is_empty_ack(self) -> bool:
        return self.outcome == "empty_ack"
