"""Exceptions raised by the REST executor and its decoders."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemas.oauth import OAuthErrorResponse


class AuthenticationError(Exception):
    """The API answered with a status other than 200/201.

    Carries the raw body verbatim and, when the body was a recognizable OAuth
    error, its ``error`` / ``error_description`` pair.
    """

    def __init__(
        self,
        raw_body: str | None,
        *,
        status_code: int | None = None,
        oauth_error: OAuthErrorResponse | None = None,
    ) -> None:
        self.raw_body = raw_body or ""
        self.status_code = status_code
        self.oauth_error = oauth_error
        super().__init__(str(self))

    @property
    def error(self) -> str | None:
        return self.oauth_error.error if self.oauth_error else None

    @property
    def error_description(self) -> str | None:
        return self.oauth_error.error_description if self.oauth_error else None

    def __str__(self) -> str:
        if self.oauth_error is not None and self.error_description:
            parts = [f"{self.error}: {self.error_description}"]
        elif self.oauth_error is not None:
            parts = [str(self.error)]
        else:
            parts = [self.raw_body or "empty response body"]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class BodyDecodeError(ValueError):
    """A response body could not be decoded into the requested type."""

    def __init__(self, message: str, *, body: str | None = None) -> None:
        self.message = message
        self.body = body
        super().__init__(message)
