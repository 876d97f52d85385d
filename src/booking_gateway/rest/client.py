"""
HTTP client adapter for the downstream REST services
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal
from urllib.parse import quote

import httpx

from ..errors import DownstreamServiceError
from ..logging import get_logger
from .query import add_params

logger = get_logger(__name__)

Method = Literal["GET", "POST", "PUT", "DELETE"]
ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

# Characters encodeURI leaves alone on top of quote()'s own safe set
_URI_SAFE = ";,/?:@&=+$!*'()#"


def encode_uri(url: str) -> str:
    """Percent-encode a full URL, keeping its reserved delimiters intact."""
    return quote(url, safe=_URI_SAFE)


@dataclass(frozen=True)
class RestSuccess:
    """A 2xx answer from a downstream service."""

    data: Any
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)

    ok: ClassVar[bool] = True

    def unwrap(self) -> Any:
        return self.data


@dataclass(frozen=True)
class RestFailure:
    """A failed downstream call: transport error, non-2xx status or bad body."""

    message: str
    url: str
    method: str
    status_code: int | None = None
    error: Any = None

    ok: ClassVar[bool] = False

    def unwrap(self) -> Any:
        """Raise the failure as a :class:`DownstreamServiceError`."""
        raise DownstreamServiceError(
            self.message,
            error=self.error,
            status_code=self.status_code,
            url=self.url,
            method=self.method,
        )


RestResult = RestSuccess | RestFailure


def _parse_body(response: httpx.Response) -> Any:
    """Parse a JSON response body; an empty body is ``None``.

    Raises:
        ValueError: If the body is not valid JSON
    """
    if not response.content or not response.content.strip():
        return None
    return json.loads(response.content)


class RestClient:
    """Issues single REST requests and never raises for request failures.

    Every call resolves to a :data:`RestResult`; callers decide what a failure
    means. One instance, and its ``httpx.AsyncClient``, is shared by all
    requests for the lifetime of the application.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        show_urls: bool = False,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            client: Pre-built client to use; the adapter does not close it
            show_urls: Log every outgoing URL before the call
            timeout: Per-request timeout in seconds, None to disable
            transport: Transport for the owned client (tests pass a mock)
        """
        self.show_urls = show_urls
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        url: str,
        method: Method,
        body: Any = None,
        full_response: bool = False,
        headers: Mapping[str, str] | None = None,
    ) -> RestResult:
        """Create a request following the given parameters.

        Args:
            url: Target URL, encoded before sending
            method: GET, POST, PUT or DELETE
            body: Object sent as the JSON request body
            full_response: Return status and headers along with the body
            headers: Extra request headers

        Returns:
            RestSuccess with the parsed body (or the full response), or
            RestFailure describing what went wrong

        Raises:
            ValueError: If ``method`` is not supported
        """
        method = method.upper()  # type: ignore[assignment]
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        target = encode_uri(url)
        if self.show_urls:
            logger.info("Downstream request", method=method, url=url)

        try:
            response = await self._client.request(
                method,
                target,
                json=body,
                headers=dict(headers) if headers else None,
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Downstream request failed",
                method=method,
                url=url,
                error=str(e) or type(e).__name__,
            )
            return RestFailure(
                message=str(e) or type(e).__name__,
                url=url,
                method=method,
            )

        try:
            payload = _parse_body(response)
        except ValueError:
            payload = response.text
            if response.is_success:
                logger.warning(
                    "Malformed downstream response",
                    method=method,
                    url=url,
                    status_code=response.status_code,
                )
                return RestFailure(
                    message=f"Malformed JSON response from {method} {url}",
                    url=url,
                    method=method,
                    status_code=response.status_code,
                    error=payload,
                )

        if not response.is_success:
            logger.warning(
                "Downstream service returned an error",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            return RestFailure(
                message=f"{response.status_code} - {response.text}",
                url=url,
                method=method,
                status_code=response.status_code,
                error=payload,
            )

        if full_response:
            data: Any = {
                "status_code": response.status_code,
                "headers": dict(response.headers),
                "body": payload,
            }
        else:
            data = payload
        return RestSuccess(data=data, status_code=response.status_code, headers=response.headers)

    async def get(
        self,
        url: str,
        path: str | int = "",
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RestResult:
        """Generate a GET request with a list of query params.

        Args:
            url: Service URL
            path: Segment appended to the URL, skipped when empty
            parameters: Key values added as the query string
        """
        if path != "" and path is not None:
            url = f"{url}/{path}"
        return await self.request(add_params(url, parameters), "GET", headers=headers)
