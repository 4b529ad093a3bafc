# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from halclient.errors import (
    ErrorCategory,
    HalHttpRequestError,
    HalParseError,
    RedirectError,
    ResponseTooLargeError,
    TransportError,
    UnsupportedResponseError,
)
from halclient.http.models import HttpResponse
from halclient.interpreter import Redirect, ResponseInterpreter, is_hal_media_type
from halclient.resources import ParseResult
from halclient.result import HalResult

HAL = "application/hal+json"
ORDER = {"_links": {"self": {"href": "/orders/1"}}, "total": 30}


def hal_response(status_code, body=None, content_type=HAL, reason="", **headers):
    response_headers = dict(headers)
    if content_type is not None:
        response_headers["Content-Type"] = content_type
    text = body if isinstance(body, str) else (json.dumps(body) if body is not None else "")
    return HttpResponse(
        ok=True,
        status_code=status_code,
        reason=reason,
        headers=response_headers,
        text=text,
        content=text.encode("utf-8"),
        url="http://api.example/orders",
    )


class RecordingParser:
    def __init__(self):
        self.calls = []

    def parse(self, text):
        self.calls.append(text)
        return ParseResult(state={"parsed": text})


@pytest.mark.parametrize("content_type", [None, HAL, "text/plain"])
def test_no_content_yields_empty_sentinel_without_parsing(content_type):
    parser = RecordingParser()
    outcome = ResponseInterpreter(parser).interpret(hal_response(204, "garbage", content_type=content_type))
    assert isinstance(outcome, HalResult)
    assert outcome.ok
    resource = outcome.unwrap()
    assert resource.is_empty
    assert dict(resource.links) == {}
    assert dict(resource.embedded) == {}
    assert dict(resource.state) == {}
    assert parser.calls == []


@pytest.mark.parametrize("status_code", [200, 201, 202])
def test_success_without_content_type_is_unsupported(status_code):
    parser = RecordingParser()
    outcome = ResponseInterpreter(parser).interpret(hal_response(status_code, ORDER, content_type=None))
    assert isinstance(outcome.error, UnsupportedResponseError)
    assert outcome.error.media_type is None
    assert "missing the 'Content-Type' header" in str(outcome.error)
    assert parser.calls == []


@pytest.mark.parametrize("content_type", ["text/plain", "application/json", "text/html; charset=utf-8"])
def test_success_with_other_media_type_is_unsupported(content_type):
    outcome = ResponseInterpreter().interpret(hal_response(200, ORDER, content_type=content_type))
    assert isinstance(outcome.error, UnsupportedResponseError)
    expected = content_type.split(";")[0]
    assert outcome.error.media_type == expected
    assert str(outcome.error).endswith(expected)


@pytest.mark.parametrize("content_type", [HAL, "Application/HAL+JSON", "application/hal+json; charset=utf-8"])
def test_success_with_hal_body_returns_parsed_resource(content_type):
    outcome = ResponseInterpreter().interpret(hal_response(200, ORDER, content_type=content_type))
    resource = outcome.unwrap()
    assert resource.is_empty is False
    assert resource["total"] == 30
    assert resource.link("self").href == "/orders/1"


def test_success_wraps_injected_parser_output():
    parser = RecordingParser()
    outcome = ResponseInterpreter(parser).interpret(hal_response(200, "raw body"))
    assert outcome.unwrap()["parsed"] == "raw body"
    assert parser.calls == ["raw body"]


def test_success_parse_failure_propagates_parse_error():
    outcome = ResponseInterpreter().interpret(hal_response(200, "{oops"))
    assert isinstance(outcome.error, HalParseError)
    with pytest.raises(HalParseError):
        outcome.unwrap()


@pytest.mark.parametrize("content_type", [None, "text/html", "application/json"])
def test_error_without_hal_body_has_no_resource(content_type):
    parser = RecordingParser()
    outcome = ResponseInterpreter(parser).interpret(
        hal_response(500, "<h1>boom</h1>", content_type=content_type, reason="Internal Server Error")
    )
    error = outcome.error
    assert isinstance(error, HalHttpRequestError)
    assert error.status_code == 500
    assert error.reason == "Internal Server Error"
    assert error.resource is None
    assert parser.calls == []


def test_not_found_with_hal_body_attaches_resource():
    outcome = ResponseInterpreter().interpret(hal_response(404, {"message": "not found"}, reason="Not Found"))
    error = outcome.error
    assert isinstance(error, HalHttpRequestError)
    assert error.status_code == 404
    assert error.reason == "Not Found"
    assert error.resource is not None
    assert error.resource["message"] == "not found"
    with pytest.raises(HalHttpRequestError) as excinfo:
        outcome.unwrap()
    assert excinfo.value is error


def test_error_with_malformed_hal_body_propagates_parse_error():
    outcome = ResponseInterpreter().interpret(hal_response(422, "not json", reason="Unprocessable Entity"))
    assert isinstance(outcome.error, HalParseError)


@pytest.mark.parametrize("status_code", [302, 303, 307])
def test_redirect_codes_resolve_location(status_code):
    outcome = ResponseInterpreter().interpret(hal_response(status_code, content_type=None, Location="/b"))
    assert outcome == Redirect(location="http://api.example/b", status_code=status_code)


def test_absolute_location_is_kept():
    outcome = ResponseInterpreter().interpret(hal_response(303, content_type=None, Location="https://other.example/x"))
    assert isinstance(outcome, Redirect)
    assert outcome.location == "https://other.example/x"


def test_redirect_without_location_is_redirect_error():
    outcome = ResponseInterpreter().interpret(hal_response(302, content_type=None))
    assert isinstance(outcome.error, RedirectError)
    assert outcome.error.category is ErrorCategory.REDIRECT_ERROR


@pytest.mark.parametrize("status_code", [301, 308])
def test_other_redirect_codes_are_http_errors(status_code):
    outcome = ResponseInterpreter().interpret(hal_response(status_code, content_type=None, Location="/b"))
    assert isinstance(outcome.error, HalHttpRequestError)
    assert outcome.error.status_code == status_code


def test_transport_failure_becomes_transport_error():
    response = HttpResponse(ok=False, error_message="timed out", error_type="ReadTimeout", error_category="TIMEOUT")
    outcome = ResponseInterpreter().interpret(response)
    error = outcome.error
    assert isinstance(error, TransportError)
    assert str(error) == "timed out"
    assert error.error_type == "ReadTimeout"
    assert error.category is ErrorCategory.TIMEOUT


def test_transport_failure_with_unknown_category():
    outcome = ResponseInterpreter().interpret(HttpResponse(ok=False, error_category="SOMETHING_ELSE"))
    assert outcome.error.category is ErrorCategory.UNKNOWN_ERROR
    assert str(outcome.error) == "Request failed without a response"


def test_is_hal_media_type():
    assert is_hal_media_type("application/hal+json")
    assert is_hal_media_type("APPLICATION/HAL+JSON")
    assert not is_hal_media_type("application/json")
    assert not is_hal_media_type(None)


def truncated(response, limit):
    response.meta.update({"body_truncated": True, "body_bytes_read": limit, "body_bytes_limit": limit})
    return response


@pytest.mark.parametrize("status_code", [200, 404])
def test_truncated_hal_body_is_reported_as_too_large(status_code):
    parser = RecordingParser()
    response = truncated(hal_response(status_code, '{"message": "cut sh'), 20)
    outcome = ResponseInterpreter(parser).interpret(response)
    error = outcome.error
    assert isinstance(error, ResponseTooLargeError)
    assert isinstance(error, TransportError)
    assert error.limit == 20
    assert error.category is ErrorCategory.BODY_TOO_LARGE
    assert "20 byte limit" in str(error)
    assert parser.calls == []


def test_truncated_non_hal_error_body_still_yields_http_error():
    response = truncated(hal_response(500, "<html>", content_type="text/html", reason="Internal Server Error"), 6)
    outcome = ResponseInterpreter().interpret(response)
    assert isinstance(outcome.error, HalHttpRequestError)
    assert outcome.error.resource is None


def test_unsupported_media_type_keeps_server_casing():
    outcome = ResponseInterpreter().interpret(hal_response(200, ORDER, content_type="Text/HTML; charset=utf-8"))
    assert outcome.error.media_type == "Text/HTML"
    assert str(outcome.error).endswith("Text/HTML")
