"""
Account age from the signup details page.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

import structlog
from dateutil import parser as dateutil_parser

from ..archive import Archive, paths
from ..extractor.markup import nested_label_value, parse_html, sibling_cell_value
from ..extractor.models import AccountAge, Identity
from ..extractor.strategies import compile_patterns, first_success, regex_strategy

logger = structlog.get_logger(__name__)

DATE_LABELS = ("Time", "Date")

SIGNUP_DATE_PATTERNS = compile_patterns(
    [
        r"(?:Time|Date)</td>\s*<td[^>]*>([^<]+)</td>",
        r"(?:Time|Date)\s*<div><div>([^<]+)</div></div>",
        r"(?:Time|Date)</td>[\s\S]*?<div><div>([^<]+)</div></div>",
    ]
)


def calendar_age(signup: datetime, now: datetime) -> Optional[AccountAge]:
    """
    Whole years and months between signup and now.

    Day of month is ignored; a negative month difference borrows a year.

    Examples:
        >>> calendar_age(datetime(2015, 6, 15), datetime(2024, 3, 1))
        AccountAge(years=8, months=9)
    """
    years = now.year - signup.year
    months = now.month - signup.month
    if months < 0:
        years -= 1
        months += 12
    if years < 0:
        return None
    return AccountAge(years=years, months=months)


def parse_signup_date(value: str) -> datetime:
    return dateutil_parser.parse(value)


class AccountAgeExtractor:
    """Computes how long the account has existed."""

    name = "account_age"

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.clock = clock or datetime.now

    def default(self) -> Optional[AccountAge]:
        return None

    def _candidates(self, html: str) -> list[str]:
        soup = parse_html(html)
        candidates: list[str] = []
        for label in DATE_LABELS:
            value = first_success(
                [
                    lambda: sibling_cell_value(soup, label),
                    lambda: nested_label_value(soup, label),
                ]
            )
            if value:
                candidates.append(value)
        raw = regex_strategy(SIGNUP_DATE_PATTERNS)(html)
        if raw:
            candidates.append(raw)
        return candidates

    def age_from_html(self, html: str) -> Optional[AccountAge]:
        now = self.clock()
        for candidate in self._candidates(html):
            signup = first_success([parse_signup_date], candidate)
            if signup is None:
                logger.debug("signup_date_unparsable", value=candidate)
                continue
            return calendar_age(signup, now)
        return None

    async def extract(self, archive: Archive, identity: Identity) -> Optional[AccountAge]:
        html = await archive.read_text(paths.SIGNUP_DETAILS)
        if html is None:
            logger.debug("source_missing", extractor=self.name, path=paths.SIGNUP_DETAILS)
            return self.default()
        return self.age_from_html(html)
