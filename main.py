"""Booking Price Monitor - Check Orchestrator.

Usage:
    python main.py                                   # Check all active targets
    python main.py --url "https://host/x?d={date}"   # Check a single URL
    python main.py --url URL --regex "/Gesamt[^0-9]*([0-9,.]+)/i"
    python main.py --url URL --html-file dump.html   # Extract from a saved page
    python main.py --api-file response.json          # Parse a saved API response
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from config.settings import Settings
from models.errors import ConfigurationError
from models.target import CheckResult, MonitorTarget, load_targets
from parsers.api_parser import parse_api_response
from parsers.price_engine import extract_price_result
from parsers.regex_extractor import extract_price
from scrapers.fetcher import describe_failure, fetch_page, interpolate_url

logger = logging.getLogger("price_monitor")

NOT_FOUND = "not_found"


def check_body(target: MonitorTarget, url: str, body: str) -> list[CheckResult]:
    """Run extraction for a target against an already-fetched body."""
    if target.rooms:
        results = []
        for room in target.rooms:
            price = extract_price(body, room.extraction_config())
            results.append(
                CheckResult(
                    target_id=target.id,
                    room_name=room.name,
                    url=url,
                    raw=price.raw if price else None,
                    value=price.value if price else None,
                    currency=price.currency if price else None,
                    threshold=room.threshold,
                    error=None if price else NOT_FOUND,
                )
            )
        return results

    price = extract_price_result(body, url=url, price_regex=target.price_regex)
    if price is None:
        return [CheckResult(target_id=target.id, url=url, error=NOT_FOUND)]
    return [
        CheckResult(
            target_id=target.id,
            url=url,
            raw=price.raw,
            value=price.value,
            currency=price.currency,
        )
    ]


def check_target(target: MonitorTarget, settings: Settings) -> list[CheckResult]:
    """Fetch a target's page and extract its price(s)."""
    check_date = target.date or date.today().isoformat()
    url = interpolate_url(target.url, check_date)

    logger.info(f"Fetching {target.id}...")
    fetched = fetch_page(url, settings)
    if not fetched.ok:
        reason = describe_failure(fetched)
        logger.info(f"Skipping {target.id}: {reason}")
        return [CheckResult(target_id=target.id, url=url, error=reason)]

    return check_body(target, url, fetched.body or "")


def check_target_safe(target: MonitorTarget, settings: Settings) -> list[CheckResult]:
    """Check a target with error isolation."""
    try:
        return check_target(target, settings)
    except Exception as e:
        logger.error(f"{target.id} FAILED: {type(e).__name__}: {e}", exc_info=True)
        return [CheckResult(target_id=target.id, url=target.url, error=str(e))]


def report(results: list[CheckResult]) -> None:
    for result in results:
        if result.below_threshold:
            logger.warning(
                f"Price alert: {result.target_id} / {result.room_name} "
                f"{result.raw} ({result.value}) <= {result.threshold}"
            )
        print(result.model_dump_json())


def main(
    url: Optional[str] = None,
    check_date: Optional[str] = None,
    regex: Optional[str] = None,
    html_file: Optional[str] = None,
    api_file: Optional[str] = None,
) -> int:
    settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        if api_file:
            rooms = parse_api_response(Path(api_file).read_text(encoding="utf-8"))
            logger.info(f"{api_file}: {len(rooms)} rooms")
            for room in rooms:
                print(room.model_dump_json())
            return 0

        if url or html_file:
            target = MonitorTarget(id="cli", url=url or "", date=check_date, price_regex=regex)
            if html_file:
                body = Path(html_file).read_text(encoding="utf-8")
                resolved = interpolate_url(target.url, check_date)
                report(check_body(target, resolved, body))
            else:
                report(check_target_safe(target, settings))
            return 0

        targets = load_targets(settings.targets_file)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read input file: {e}")
        return 1

    active = [t for t in targets if t.active]
    logger.info(f"Checking {len(active)} of {len(targets)} targets")

    all_results: list[CheckResult] = []
    for target in active:
        all_results.extend(check_target_safe(target, settings))

    report(all_results)

    found = sum(1 for r in all_results if r.value is not None)
    logger.info(f"Run finished: {found}/{len(all_results)} prices found")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Booking Price Monitor")
    parser.add_argument("--url", type=str, default=None, help="Check a single URL ({date} is interpolated)")
    parser.add_argument("--date", type=str, default=None, help="Date substituted into {date} (default: today)")
    parser.add_argument("--regex", type=str, default=None, help="Explicit price regex, e.g. '/Gesamtpreis[^0-9]*([0-9,.]+)/i'")
    parser.add_argument("--html-file", type=str, default=None, help="Extract from a saved page or JSON dump instead of fetching")
    parser.add_argument("--api-file", type=str, default=None, help="Parse a saved structured API response")
    args = parser.parse_args()
    sys.exit(
        main(
            url=args.url,
            check_date=args.date,
            regex=args.regex,
            html_file=args.html_file,
            api_file=args.api_file,
        )
    )
