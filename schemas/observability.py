"""Observability schemas for executed REST calls."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

CallOutcome = Literal[
    "decoded",        # 200/201 body decoded as JSON
    "xml_fallback",   # JSON failed, body decoded as XML
    "empty_ack",      # 201 with no body
    "decode_failed",  # body could not be decoded, None returned
    "auth_error",     # non-200/201 status
]


class CallRecord(BaseModel):
    """Record of a single executed call for latency and outcome tracking."""

    call_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    method: str = ""
    url: str = ""
    status_code: int = 0
    latency_ms: float = 0.0
    body_length: int = 0
    outcome: CallOutcome = "decoded"

    @property
    def failed(self) -> bool:
        return self.outcome in ("decode_failed", "auth_error")
