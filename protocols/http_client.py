"""HTTP client protocol: anything that can send an httpx.Request and be closed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import httpx


@runtime_checkable
class HttpClient(Protocol):
    """httpx.Client satisfies this; so does any test double with the same two methods."""

    def send(self, request: httpx.Request) -> httpx.Response: ...

    def close(self) -> None: ...
