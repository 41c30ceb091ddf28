"""Maps a URL's host to the extraction strategy for that site."""

from typing import Optional, Sequence
from urllib.parse import urlparse

from config.host_strategies import HOST_STRATEGIES
from models.errors import ConfigurationError
from models.price import HostStrategy


def extract_host(url: str) -> str:
    """Lower-cased host of url ('' when there is none)."""
    if not url:
        return ""
    try:
        parsed = urlparse(url if "//" in url else f"//{url}")
        host = parsed.hostname
    except ValueError:
        # e.g. an unterminated IPv6 literal
        return ""
    return (host or "").lower()


def resolve_strategy(
    url: str, strategies: Optional[Sequence[HostStrategy]] = None
) -> HostStrategy:
    """Return the first strategy claiming the url's host, else the default one.

    Site patterns are always tried before the default, wherever it is declared.
    """
    if strategies is None:
        strategies = HOST_STRATEGIES

    host = extract_host(url)
    if host:
        for strategy in strategies:
            if strategy.matches_host(host):
                return strategy

    for strategy in strategies:
        if strategy.is_default:
            return strategy

    raise ConfigurationError("No default host strategy configured.")
