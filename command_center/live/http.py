"""Outbound GET with a hard deadline for the live data sources."""

import logging
from typing import Any

import requests

from command_center.config import FETCH_TIMEOUT_MS
from command_center.live.errors import (
    FetchError,
    FetchStatusError,
    FetchTimeoutError,
    MalformedPayloadError,
)

logger = logging.getLogger(__name__)


def fetch_json(session: requests.Session, url: str, timeout_ms: int = FETCH_TIMEOUT_MS) -> Any:
    """
    GET `url` and return the decoded JSON body.

    The connection is released on every path. Raises FetchTimeoutError when
    no response arrives within `timeout_ms`, FetchStatusError on non-2xx,
    MalformedPayloadError when the body is not JSON and FetchError for any
    other transport failure.
    """
    timeout_s = timeout_ms / 1000.0
    logger.debug("GET %s (timeout=%sms)", url, timeout_ms)
    try:
        response = session.get(url, timeout=timeout_s)
    except requests.Timeout as exc:
        raise FetchTimeoutError(f"{url} timed out after {timeout_ms}ms") from exc
    except requests.RequestException as exc:
        raise FetchError(f"{url} request failed: {exc}") from exc

    with response:
        if not 200 <= response.status_code < 300:
            raise FetchStatusError(url, response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedPayloadError(f"{url} returned a non-JSON body") from exc
