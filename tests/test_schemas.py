"""Tests for request/response schemas and the authentication error."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rest.errors import AuthenticationError
from schemas.oauth import OAuthErrorResponse
from schemas.requests import ApiRequest, HttpVerb
from schemas.responses import ApiResult, BodyFormat, detect_format


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ('{"id": 1}', BodyFormat.JSON),
        ('[{"id": 1}]', BodyFormat.JSON),
        ("<response/>", BodyFormat.XML),
        ("", BodyFormat.EMPTY),
        (None, BodyFormat.EMPTY),
        ("OK", BodyFormat.UNKNOWN),
        (' {"id": 1}', BodyFormat.UNKNOWN),
    ],
)
def test_detect_format(body, expected):
    assert detect_format(body) is expected


def test_api_result_flags():
    ack = ApiResult(201, "", None, "empty_ack")

    assert ack.is_empty_ack
    assert ack.body_format is BodyFormat.EMPTY


def test_request_constructors_carry_verb():
    assert ApiRequest.get("https://x").method is HttpVerb.GET
    assert ApiRequest.post("https://x").method is HttpVerb.POST
    assert ApiRequest.put("https://x").method is HttpVerb.PUT
    assert ApiRequest.patch("https://x").method is HttpVerb.PATCH


def test_request_build_raw_content():
    wire = ApiRequest.patch(
        "https://x/sobjects/Account/1",
        content='{"Name": "New"}',
        headers={"Content-Type": "application/json"},
    ).build()

    assert wire.method == "PATCH"
    assert wire.content == b'{"Name": "New"}'
    assert wire.headers["Content-Type"] == "application/json"


def test_get_with_body_rejected():
    with pytest.raises(ValidationError):
        ApiRequest.get("https://x", json_body={"a": 1})


def test_content_and_json_are_exclusive():
    with pytest.raises(ValidationError):
        ApiRequest.post("https://x", content="a", json_body={"a": 1})


def test_unsupported_verb_rejected():
    with pytest.raises(ValidationError):
        ApiRequest(method="DELETE", url="https://x")


def test_oauth_error_ignores_extra_fields():
    err = OAuthErrorResponse.model_validate_json(
        '{"error": "invalid_client", "error_description": "unknown", "error_uri": "https://x"}'
    )

    assert err.is_recognized
    assert err.error == "invalid_client"


def test_oauth_error_without_code_is_unrecognized():
    assert not OAuthErrorResponse.model_validate_json('{"message": "x"}').is_recognized


def test_authentication_error_str_raw():
    err = AuthenticationError("Bad Request", status_code=400)

    assert str(err) == "Bad Request | Status: 400"
    assert err.error is None


def test_authentication_error_str_structured():
    oauth = OAuthErrorResponse(error="invalid_grant", error_description="expired")
    err = AuthenticationError('{"error": "invalid_grant"}', status_code=400, oauth_error=oauth)

    assert str(err) == "invalid_grant: expired | Status: 400"


def test_authentication_error_empty_body():
    assert str(AuthenticationError(None)) == "empty response body"
