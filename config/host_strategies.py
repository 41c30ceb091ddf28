"""Per-site extraction strategies, keyed by booking-site host.

Add a site by appending an entry here. Patterns match the host exactly or any
subdomain of it. The entry whose patterns include "default" is used for every
host nothing else claims.
"""

from models.price import HostStrategy, MarkupSelectors
from parsers.regex_extractor import DEFAULT_TOTAL_REGEX, FALLBACK_TOTAL_REGEXES

HOST_STRATEGIES: list[HostStrategy] = [
    HostStrategy(
        name="robinson",
        host_patterns=["robinson.com"],
        markup_selectors=MarkupSelectors(
            css=[
                ".tcpPrice__value",
                "[data-testid=total-price]",
                ".total-price",
                ".price",
            ],
            structural=[
                "//*[contains(@class, 'tcpPrice')]",
                "//*[contains(text(), 'Gesamtpreis')]/..",
            ],
        ),
        fallback_regexes=[*FALLBACK_TOTAL_REGEXES, DEFAULT_TOTAL_REGEX],
    ),
    HostStrategy(
        name="booking",
        host_patterns=["booking.com"],
        markup_selectors=MarkupSelectors(
            css=[
                "[data-testid=price-and-discounted-price]",
                "span.prco-valign-middle-helper",
                ".bui-price-display__value",
            ],
            structural=[
                "//*[@data-testid='price-for-x-nights']",
                "//*[contains(text(), 'Total')]/..",
            ],
        ),
        fallback_regexes=[DEFAULT_TOTAL_REGEX],
    ),
    HostStrategy(
        name="default",
        host_patterns=["default"],
        markup_selectors=MarkupSelectors(
            css=[
                "[data-testid=total-price]",
                ".total-price",
                ".total",
                "#total-price",
                ".price",
            ],
            structural=[
                "//*[contains(text(), 'Gesamtpreis')]/..",
                "//*[contains(text(), 'Gesamt')]",
                "//*[contains(text(), 'Total')]",
            ],
        ),
        fallback_regexes=[DEFAULT_TOTAL_REGEX, *FALLBACK_TOTAL_REGEXES],
    ),
]
