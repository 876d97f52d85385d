"""Tests for the REST client adapter."""

import httpx
import pytest

from booking_gateway.errors import DownstreamServiceError
from booking_gateway.rest.client import RestClient, RestFailure, RestSuccess, encode_uri

ROLE_URL = "http://roles.local:3001/api/v1/role"


class TestEncodeUri:
    def test_reserved_characters_are_kept(self):
        url = "http://h:1/a/b?x=1&y=2#frag"

        assert encode_uri(url) == url

    def test_spaces_and_unicode_are_escaped(self):
        assert encode_uri("http://h:1/lodging/name/casa azul") == (
            "http://h:1/lodging/name/casa%20azul"
        )
        assert encode_uri("http://h:1/name/ñandú") == "http://h:1/name/%C3%B1and%C3%BA"


class TestRequest:
    @pytest.mark.asyncio
    async def test_success_returns_parsed_body(self, rest_client, downstream):
        downstream.add("GET", f"{ROLE_URL}/7", json={"id": 7, "namerole": "host"})

        result = await rest_client.request(f"{ROLE_URL}/7", "GET")

        assert isinstance(result, RestSuccess)
        assert result.ok
        assert result.status_code == 200
        assert result.data == {"id": 7, "namerole": "host"}
        assert result.unwrap() == {"id": 7, "namerole": "host"}
        assert len(downstream.requests) == 1

    @pytest.mark.asyncio
    async def test_body_is_sent_as_json(self, rest_client, downstream):
        downstream.add("POST", ROLE_URL, status_code=201, json={"id": 1, "namerole": "guest"})

        result = await rest_client.request(ROLE_URL, "POST", {"namerole": "guest"})

        assert result.ok
        assert downstream.last.headers["content-type"] == "application/json"
        assert downstream.last_json() == {"namerole": "guest"}

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self, rest_client, downstream):
        downstream.add("DELETE", f"{ROLE_URL}/3", status_code=204)

        result = await rest_client.request(f"{ROLE_URL}/3", "delete")

        assert result.ok
        assert result.data is None
        assert downstream.last.method == "DELETE"

    @pytest.mark.asyncio
    async def test_full_response(self, rest_client, downstream):
        downstream.add("GET", ROLE_URL, json=[{"id": 1}])

        result = await rest_client.request(ROLE_URL, "GET", full_response=True)

        assert result.data["status_code"] == 200
        assert result.data["body"] == [{"id": 1}]
        assert "content-type" in result.data["headers"]

    @pytest.mark.asyncio
    async def test_error_status_returns_failure(self, rest_client, downstream):
        error = {"id": "E1", "code": 400, "description": "bad"}
        downstream.add("GET", f"{ROLE_URL}/9", status_code=400, json=error)

        result = await rest_client.request(f"{ROLE_URL}/9", "GET")

        assert isinstance(result, RestFailure)
        assert not result.ok
        assert result.status_code == 400
        assert result.error == error
        assert result.message.startswith("400 - ")

    @pytest.mark.asyncio
    async def test_transport_error_returns_failure(self, rest_client, downstream):
        downstream.fail("GET", ROLE_URL, httpx.ConnectError("connection refused"))

        result = await rest_client.request(ROLE_URL, "GET")

        assert isinstance(result, RestFailure)
        assert result.status_code is None
        assert result.error is None
        assert "connection refused" in result.message

    @pytest.mark.asyncio
    async def test_timeout_returns_failure(self, rest_client, downstream):
        downstream.fail("GET", ROLE_URL, httpx.ReadTimeout("timed out"))

        result = await rest_client.request(ROLE_URL, "GET")

        assert not result.ok
        assert "timed out" in result.message

    @pytest.mark.asyncio
    async def test_malformed_body_returns_failure(self, rest_client, downstream):
        downstream.add("GET", ROLE_URL, content=b"<html>oops</html>")

        result = await rest_client.request(ROLE_URL, "GET")

        assert not result.ok
        assert result.status_code == 200
        assert result.error == "<html>oops</html>"

    @pytest.mark.asyncio
    async def test_non_json_error_body_is_kept_as_text(self, rest_client, downstream):
        downstream.add("GET", ROLE_URL, status_code=502, content=b"Bad Gateway")

        result = await rest_client.request(ROLE_URL, "GET")

        assert result.status_code == 502
        assert result.error == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_unwrap_failure_raises(self, rest_client, downstream):
        error = {"id": "E1", "code": 400, "description": "bad"}
        downstream.add("PUT", f"{ROLE_URL}/1", status_code=400, json=error)

        result = await rest_client.request(f"{ROLE_URL}/1", "PUT", {"namerole": ""})

        with pytest.raises(DownstreamServiceError) as exc_info:
            result.unwrap()
        assert exc_info.value.error == error
        assert exc_info.value.status_code == 400
        assert exc_info.value.method == "PUT"
        assert exc_info.value.url == f"{ROLE_URL}/1"

    @pytest.mark.asyncio
    async def test_unsupported_method_is_rejected(self, rest_client):
        with pytest.raises(ValueError, match="Unsupported HTTP method"):
            await rest_client.request(ROLE_URL, "PATCH")  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_url_is_encoded_before_sending(self, rest_client, downstream):
        downstream.add("GET", f"{ROLE_URL}/name/casa%20azul", json=[])

        result = await rest_client.request(f"{ROLE_URL}/name/casa azul", "GET")

        assert result.ok
        assert downstream.last.url.raw_path == b"/api/v1/role/name/casa%20azul"

    @pytest.mark.asyncio
    async def test_extra_headers_are_sent(self, rest_client, downstream):
        downstream.add("POST", ROLE_URL, json={})

        await rest_client.request(ROLE_URL, "POST", {}, headers={"Authorization": "Bearer abc"})

        assert downstream.last.headers["authorization"] == "Bearer abc"


class TestGet:
    @pytest.mark.asyncio
    async def test_path_and_params(self, rest_client, downstream):
        downstream.add("GET", f"{ROLE_URL}/host?active=true&tag=a&tag=b", json=[])

        result = await rest_client.get(ROLE_URL, "host", {"active": True, "tag": ["a", "b"], "x": ""})

        assert result.ok
        assert len(downstream.requests) == 1

    @pytest.mark.asyncio
    async def test_empty_path_targets_base_url(self, rest_client, downstream):
        downstream.add("GET", ROLE_URL, json=[])

        result = await rest_client.get(ROLE_URL)

        assert result.ok
        assert str(downstream.last.url) == ROLE_URL

    @pytest.mark.asyncio
    async def test_numeric_path(self, rest_client, downstream):
        downstream.add("GET", f"{ROLE_URL}/0", json={"id": 0})

        result = await rest_client.get(ROLE_URL, 0)

        assert result.data == {"id": 0}


class TestShowUrls:
    @pytest.mark.asyncio
    async def test_urls_logged_when_enabled(self, downstream, monkeypatch):
        logged = []

        class FakeLogger:
            def info(self, event, **kwargs):
                logged.append((event, kwargs))

            def warning(self, event, **kwargs):
                pass

        monkeypatch.setattr("booking_gateway.rest.client.logger", FakeLogger())
        downstream.add("GET", ROLE_URL, json=[])
        client = RestClient(show_urls=True, transport=httpx.MockTransport(downstream.handler))
        try:
            await client.request(ROLE_URL, "GET")
        finally:
            await client.aclose()

        assert logged == [("Downstream request", {"method": "GET", "url": ROLE_URL})]

    @pytest.mark.asyncio
    async def test_urls_not_logged_by_default(self, rest_client, downstream, monkeypatch):
        logged = []

        class FakeLogger:
            def info(self, event, **kwargs):
                logged.append(event)

            def warning(self, event, **kwargs):
                pass

        monkeypatch.setattr("booking_gateway.rest.client.logger", FakeLogger())
        downstream.add("GET", ROLE_URL, json=[])

        await rest_client.request(ROLE_URL, "GET")

        assert logged == []
