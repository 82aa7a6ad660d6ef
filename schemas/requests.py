"""Outbound request schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, Field, model_validator


class HttpVerb(str, Enum):
    """Verbs the executor is allowed to send."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"


class ApiRequest(BaseModel):
    """A pre-built REST call. The verb is carried explicitly, not inferred from a subclass."""

    method: HttpVerb = HttpVerb.GET
    url: str
    params: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    content: str | bytes | None = None
    json_body: Any = None

    @model_validator(mode="after")
    def check_single_body(self) -> ApiRequest:
        if self.content is not None and self.json_body is not None:
            raise ValueError("content and json_body are mutually exclusive")
        if self.method is HttpVerb.GET and (self.content is not None or self.json_body is not None):
            raise ValueError("GET requests cannot carry a body")
        return self

    @classmethod
    def get(cls, url: str, **kwargs: Any) -> ApiRequest:
        return cls(method=HttpVerb.GET, url=url, **kwargs)

    @classmethod
    def post(cls, url: str, **kwargs: Any) -> ApiRequest:
        return cls(method=HttpVerb.POST, url=url, **kwargs)

    @classmethod
    def put(cls, url: str, **kwargs: Any) -> ApiRequest:
        return cls(method=HttpVerb.PUT, url=url, **kwargs)

    @classmethod
    def patch(cls, url: str, **kwargs: Any) -> ApiRequest:
        return cls(method=HttpVerb.PATCH, url=url, **kwargs)

    def build(self) -> httpx.Request:
        """Materialize the wire request."""
        return httpx.Request(
            self.method.value,
            self.url,
            params=self.params or None,
            headers=self.headers,
            content=self.content,
            json=self.json_body,
        )
