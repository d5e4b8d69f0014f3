from __future__ import annotations

import logging

import requests

from taps.errors import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "taps-dashboard/0.1"


def fetch_bytes(url: str, *, timeout: float = 10.0) -> bytes:
    """Download ``url`` and return the raw body.

    There is no retry: any transport error or non-2xx status is raised as
    ``FetchError`` with the original ``requests`` exception chained.
    """
    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
    except requests.exceptions.Timeout as exc:
        raise FetchError(url, f"Request timed out after {timeout:g}s") from exc
    except requests.exceptions.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise FetchError(url, f"HTTP {status}", status_code=status) from exc
    except requests.exceptions.RequestException as exc:
        raise FetchError(url, f"Request failed: {exc}") from exc
    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.content
