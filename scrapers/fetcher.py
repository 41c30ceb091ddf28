"""HTTP fetch layer feeding raw page bodies to the price engine."""

import logging
import time
from typing import Optional

import httpx

from config.settings import Settings
from models.enums import FetchState
from models.fetch import FetchResult
from parsers.blocked_detector import is_blocked

logger = logging.getLogger(__name__)


def interpolate_url(url: str, date: Optional[str]) -> str:
    """Substitute the check date into a '{date}'-templated URL."""
    if not date:
        return url
    return url.replace("{date}", date)


def fetch_page(
    url: str,
    settings: Settings,
    client: Optional[httpx.Client] = None,
) -> FetchResult:
    """GET url and classify the outcome as ok/blocked/http_error/empty/error.

    Network failures are reported through the result state, never raised.
    """
    headers = {"User-Agent": settings.user_agent}
    started = time.monotonic()

    try:
        if client is not None:
            response = client.get(url, headers=headers, follow_redirects=True)
        else:
            response = httpx.get(
                url,
                headers=headers,
                timeout=float(settings.timeout_seconds),
                follow_redirects=True,
            )
    except httpx.RequestError as e:
        logger.error(f"Request failed for {url}: {e}")
        return FetchResult(
            url=url,
            state=FetchState.ERROR,
            error=str(e) or type(e).__name__,
            elapsed=time.monotonic() - started,
            effective_url=url,
        )

    body = response.text
    result = FetchResult(
        url=url,
        state=_classify(response.status_code, body),
        status=response.status_code,
        body=body,
        content_type=response.headers.get("content-type", ""),
        elapsed=time.monotonic() - started,
        effective_url=str(response.url),
    )

    if result.state != FetchState.OK:
        logger.warning(f"Fetch {url}: {describe_failure(result)}")
    else:
        logger.info(f"Fetched {url} ({result.status}, {len(body)} bytes)")

    return result


def _classify(status: int, body: str) -> FetchState:
    if status >= 400:
        return FetchState.HTTP_ERROR
    if not body:
        return FetchState.EMPTY
    if is_blocked(body):
        return FetchState.BLOCKED
    return FetchState.OK


def describe_failure(result: FetchResult) -> Optional[str]:
    """Human-readable reason a fetch result was not usable (None when ok)."""
    if result.state == FetchState.OK:
        return None
    if result.state == FetchState.BLOCKED:
        return "blocked"
    if result.state == FetchState.HTTP_ERROR:
        return f"HTTP {result.status}"
    if result.state == FetchState.EMPTY:
        return "Empty response body"
    message = "Request failed"
    if result.error:
        message += f": {result.error}"
    return message
