"""Tests for request context and bearer token extraction."""

import pytest

from booking_gateway.auth.context import RequestContext, extract_bearer_token


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc123", "abc123"),
            ("bearer abc123", "abc123"),
            ("Bearer  eyJhbGciOi.eyJzdWIi.c2lnbmF0dXJl", "eyJhbGciOi.eyJzdWIi.c2lnbmF0dXJl"),
            ("Bearer dG9rZW4=", "dG9rZW4="),
        ],
    )
    def test_valid_headers(self, header, expected):
        assert extract_bearer_token(header) == expected

    @pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "Bearer", "Bearer a b"])
    def test_missing_or_other_schemes(self, header):
        assert extract_bearer_token(header) is None


class TestRequestContext:
    def test_auth_headers_with_token(self):
        context = RequestContext(rest=None, token="abc123")  # type: ignore[arg-type]

        assert context.auth_headers() == {"Authorization": "Bearer abc123"}

    def test_auth_headers_without_token(self):
        context = RequestContext(rest=None)  # type: ignore[arg-type]

        assert context.auth_headers() is None
