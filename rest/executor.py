"""Execute bearer-authenticated REST calls and decode the response into a typed value.

Decision by status code:

- 200, or 201 with a body: decode as JSON; if that fails and the body looks
  like XML, decode as XML instead. A body that fits neither is logged and
  yields ``None``.
- 201 without a body: upload acknowledged, ``None``.
- anything else: ``AuthenticationError``, with the OAuth error pair when the
  body is one.

The client handed to ``execute``/``fetch`` is closed before the call returns,
whatever happens.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import ValidationError

from observability.logger import get_logger
from providers.json_decoder import JsonBodyDecoder
from providers.xml_decoder import XmlBodyDecoder
from rest.diagnostics import DEFAULT_CONTEXT_CHARS, log_decode_failure
from rest.errors import AuthenticationError, BodyDecodeError
from schemas.oauth import OAuthErrorResponse
from schemas.observability import CallOutcome, CallRecord
from schemas.responses import ApiResult, BodyFormat, detect_format

if TYPE_CHECKING:
    import httpx

    from observability.metrics import MetricsCollector
    from protocols.decoder import BodyDecoder
    from protocols.http_client import HttpClient
    from schemas.requests import ApiRequest

log = get_logger(__name__)
T = TypeVar("T")


def apply_bearer_token(request: httpx.Request, token: str) -> httpx.Request:
    """Set (not append) the Authorization header."""
    request.headers["Authorization"] = f"Bearer {token}"
    return request


class APIExecutor(Generic[T]):
    """Runs REST calls for one response type with one bearer token.

    ``last_response_body`` and ``http_result_code`` describe the most recent
    call. They are plain instance state, so an executor shared between threads
    sees last-write-wins; use ``fetch`` and its returned ``ApiResult`` there.
    """

    def __init__(
        self,
        response_type: Any,
        auth_token: str,
        *,
        json_decoder: BodyDecoder[T] | None = None,
        xml_decoder: BodyDecoder[T] | None = None,
        metrics: MetricsCollector | None = None,
        context_chars: int = DEFAULT_CONTEXT_CHARS,
    ) -> None:
        self.response_type = response_type
        self.auth_token = auth_token
        self.metrics = metrics
        self.context_chars = context_chars
        self._json: BodyDecoder[T] = json_decoder or JsonBodyDecoder(response_type)
        self._xml: BodyDecoder[T] = xml_decoder or XmlBodyDecoder(response_type)

        self._last_response_body: str = ""
        self._http_result_code: int = 0

    @property
    def last_response_body(self) -> str:
        return self._last_response_body

    @last_response_body.setter
    def last_response_body(self, value: str) -> None:
        self._last_response_body = value

    @property
    def http_result_code(self) -> int:
        return self._http_result_code

    def execute(self, client: HttpClient, request: ApiRequest) -> T | None:
        """Send the request and return the decoded value, or None."""
        return self.fetch(client, request).value

    def fetch(self, client: HttpClient, request: ApiRequest) -> ApiResult[T]:
        """Send the request and return the full result envelope."""
        wire = apply_bearer_token(request.build(), self.auth_token)
        url = str(wire.url)
        start = time.perf_counter()
        status_code: int | None = None
        body = ""
        outcome: CallOutcome = "decoded"

        try:
            response = client.send(wire)
            status_code = response.status_code
            body = response.text

            log.info(
                "executor.response.status",
                method=request.method.value,
                http_version=response.http_version,
                status_code=status_code,
                reason=response.reason_phrase,
            )

            self._http_result_code = status_code
            self._last_response_body = body

            result = self._handle_response(status_code, body, url)
            outcome = result.outcome
            return result
        except AuthenticationError:
            outcome = "auth_error"
            raise
        finally:
            client.close()
            if status_code is not None:
                self._record(request, url, status_code, body, outcome, start)

    def parse_body(self, text: str | None) -> T:
        """Re-decode a previously fetched JSON body without calling the server again."""
        if not text:
            raise ValueError("text must be a non-empty response body")
        return self._json.decode(text)

    def _handle_response(self, status_code: int, body: str, url: str) -> ApiResult[T]:
        if status_code == 200 or (status_code == 201 and body):
            return self._decode_success(status_code, body, url)

        if status_code == 201:
            log.info("executor.upload.acknowledged", url=url)
            return ApiResult(status_code, body, None, "empty_ack")

        log.info("executor.request.failed", url=url, status_code=status_code)
        raise self._authentication_error(status_code, body)

    def _decode_success(self, status_code: int, body: str, url: str) -> ApiResult[T]:
        try:
            return ApiResult(status_code, body, self._json.decode(body), "decoded")
        except BodyDecodeError as exc:
            if detect_format(body) is not BodyFormat.XML:
                log_decode_failure(body, exc, context_chars=self.context_chars, url=url)
                return ApiResult(status_code, body, None, "decode_failed")

        try:
            value = self._xml.decode(body)
        except BodyDecodeError as exc:
            log.error("executor.xml.failed", url=url, error=str(exc))
            return ApiResult(status_code, body, None, "decode_failed")

        log.info("executor.xml.fallback", url=url)
        return ApiResult(status_code, body, value, "xml_fallback")

    @staticmethod
    def _authentication_error(status_code: int, body: str) -> AuthenticationError:
        # JSON arrays ("[{...") and non-JSON bodies are surfaced verbatim.
        if not body.startswith("{"):
            return AuthenticationError(body, status_code=status_code)

        try:
            oauth = OAuthErrorResponse.model_validate_json(body)
        except ValidationError:
            return AuthenticationError(body, status_code=status_code)

        if not oauth.is_recognized:
            return AuthenticationError(body, status_code=status_code)
        return AuthenticationError(body, status_code=status_code, oauth_error=oauth)

    def _record(
        self,
        request: ApiRequest,
        url: str,
        status_code: int,
        body: str,
        outcome: CallOutcome,
        start: float,
    ) -> None:
        if self.metrics is None:
            return
        self.metrics.record(
            CallRecord(
                method=request.method.value,
                url=url,
                status_code=status_code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                body_length=len(body),
                outcome=outcome,
            )
        )
