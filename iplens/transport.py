"""Shared HTTP plumbing for talking to ipinfo.io."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from . import __version__
from .errors import TransportError, RateLimitExceededError, RequestError, ParseError


logger = logging.getLogger(__name__)

USER_AGENT = f"IPLens/{__version__}"


def construct_headers() -> dict[str, str]:
    """Headers sent with every request"""
    return {
        'user-agent': USER_AGENT,
        'content-type': 'application/json',
        'accept': 'application/json',
    }


def bearer_header(token: Optional[str]) -> dict[str, str]:
    """
    Authorization header for a token.

    A missing token is sent as an empty bearer credential; the trailing
    space is dropped since HTTP header values cannot end in whitespace.
    """
    return {'authorization': f"Bearer {token or ''}".rstrip()}


@asynccontextmanager
async def open_client(timeout: float, token: Optional[str] = None,
                      authenticate: bool = True) -> AsyncIterator[httpx.AsyncClient]:
    """Yield a short-lived AsyncClient bound to one deadline.

    Every lookup opens its own client so no connection outlives the call
    that needed it.
    """
    headers = construct_headers()
    if authenticate:
        headers.update(bearer_header(token))

    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout), headers=headers) as client:
        yield client


async def send(client: httpx.AsyncClient, method: str, url: str,
               payload: Optional[Any] = None) -> httpx.Response:
    """
    Send one request and apply the status rules shared by all endpoints.

    Raises:
        TransportError: connection failure, client-side timeout or a
            non-success status other than 429
        RateLimitExceededError: HTTP 429
    """
    try:
        if payload is None:
            response = await client.request(method, url)
        else:
            response = await client.request(method, url, json=payload)
    except httpx.HTTPError as e:
        logger.warning("%s %s failed: %s", method, url, e)
        raise TransportError(f"{method} {url}: {e}") from e

    if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
        logger.warning("%s %s: rate limit exceeded", method, url)
        raise RateLimitExceededError()

    if not response.is_success:
        raise TransportError(
            f"{response.status_code} {response.reason_phrase} for {method} {url}",
            status_code=response.status_code,
        )

    return response


def _error_message(value: Any) -> str:
    if isinstance(value, dict):
        return str(value.get('message') or value.get('title') or value)
    return str(value)


def check_error(data: dict) -> None:
    """Raise RequestError when a decoded object carries an `error` field"""
    if data.get('error'):
        raise RequestError(_error_message(data['error']))


def decode_object(response: httpx.Response) -> dict:
    """
    Decode a JSON object body.

    Raises:
        ParseError: body is not JSON or not an object
        RequestError: body carries an application-level `error` field
    """
    try:
        data = response.json()
    except ValueError as e:
        raise ParseError(f"invalid JSON body: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"expected a JSON object, got {type(data).__name__}")

    check_error(data)
    return data
