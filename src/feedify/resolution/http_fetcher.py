import socket
import time
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from enum import StrEnum
from http import HTTPStatus
from typing import Protocol
from urllib.parse import urljoin

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)


class HTTPHeader(StrEnum):
    CONTENT_TYPE = "Content-Type"
    LOCATION = "Location"
    RETRY_AFTER = "Retry-After"
    USER_AGENT = "User-Agent"


class FetchError(Exception):
    """Transport failure raised by the fetcher itself rather than by httpx."""


class RetriableHTTPError(FetchError):
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"Retriable HTTP error: {response.status_code}")


class HostNotFoundError(FetchError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Host not found: {url}")


@dataclass(frozen=True, slots=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    content_type: str
    body: str

    @property
    def redirected(self) -> bool:
        return self.final_url != self.url


class Fetcher(Protocol):
    async def fetch(self, url: str, *, follow_redirects: bool = False) -> FetchResult: ...


DEFAULT_USER_AGENT = "feedify/0.1 (+https://github.com/feedify)"
DEFAULT_MAX_ATTEMPTS = 3

_DEFAULT_RETRY_AFTER: float = 60.0
_EXPONENTIAL_MAX = 60
_EXPONENTIAL_MIN = 1
_exponential_backoff = wait_exponential(multiplier=_EXPONENTIAL_MIN, max=_EXPONENTIAL_MAX)

_DNS_FAILURE_MARKERS: tuple[str, ...] = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "no address associated with hostname",
    "temporary failure in name resolution",
)


def parse_retry_after(header: str) -> float:
    try:
        return float(header)
    except ValueError:
        pass
    try:
        dt = parsedate_to_datetime(header)
        return max(0.0, dt.timestamp() - time.time())
    except (ValueError, TypeError):
        return _DEFAULT_RETRY_AFTER


def wait_strategy(retry_state: RetryCallState) -> float:
    outcome = retry_state.outcome
    if outcome is None:
        return float(_exponential_backoff(retry_state=retry_state))

    exc = outcome.exception()
    if isinstance(exc, RetriableHTTPError) and exc.response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
        retry_after = exc.response.headers.get(HTTPHeader.RETRY_AFTER)
        if retry_after is None:
            return _DEFAULT_RETRY_AFTER
        return parse_retry_after(retry_after)

    return float(_exponential_backoff(retry_state=retry_state))


def is_host_not_found(exc: BaseException) -> bool:
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, socket.gaierror):
            return True
        current = current.__cause__ or current.__context__
    message = str(exc).lower()
    return any(marker in message for marker in _DNS_FAILURE_MARKERS)


class HttpFetcher:
    def __init__(self, client: httpx.AsyncClient, *, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        self._client = client
        self._max_attempts = max_attempts

    async def fetch(self, url: str, *, follow_redirects: bool = False) -> FetchResult:
        try:
            response = await self._get(url, follow_redirects=follow_redirects)
        except httpx.ConnectError as exc:
            if is_host_not_found(exc):
                raise HostNotFoundError(url) from exc
            raise

        content_type = response.headers.get(HTTPHeader.CONTENT_TYPE, "")

        if response.has_redirect_location:
            location = response.headers[HTTPHeader.LOCATION]
            return FetchResult(
                url=url,
                final_url=urljoin(url, location),
                status_code=response.status_code,
                content_type=content_type,
                body="",
            )

        response.raise_for_status()

        return FetchResult(
            url=url,
            final_url=str(response.url) if response.history else url,
            status_code=response.status_code,
            content_type=content_type,
            body=response.text,
        )

    async def _get(self, url: str, *, follow_redirects: bool) -> httpx.Response:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((httpx.TimeoutException, RetriableHTTPError)),
            wait=wait_strategy,
            stop=stop_after_attempt(self._max_attempts),
            reraise=True,
        ):
            with attempt:
                response = await self._client.get(url, follow_redirects=follow_redirects)
                if response.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
                    raise RetriableHTTPError(response)
                if response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
                    raise RetriableHTTPError(response)
        return response


def build_client(*, timeout_seconds: float = 10.0, user_agent: str = DEFAULT_USER_AGENT) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers={HTTPHeader.USER_AGENT: user_agent},
        follow_redirects=False,
    )
