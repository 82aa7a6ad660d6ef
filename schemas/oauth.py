"""OAuth error body as returned by authorization servers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OAuthErrorResponse(BaseModel):
    """`{"error": ..., "error_description": ...}`. Extra fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    error: str | None = None
    error_description: str | None = None

    @property
    def is_recognized(self) -> bool:
        return bool(self.error)
