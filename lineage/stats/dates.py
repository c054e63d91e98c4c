#!/usr/bin/env python3
"""
dates.py
--------------------
Date arithmetic for genealogical statistics.

Converts GEDCOM date phrases to comparable Julian day numbers and back to
display strings, computes age spans in days and classifies them into the
compact age codes used by the statistics tags ("80y", "5m", "3d").

A comparable value of 0 is the "date unknown" sentinel. Queries that rank
by date must filter it out explicitly.

Accepted grammar:
    [@#DGREGORIAN@|@#DJULIAN@] [ABT|CAL|EST|INT|BEF|AFT|FROM|TO] [[DD] MON] YYYY [B.C.]
    BET <date> AND <date>
    FROM <date> TO <date>

Examples:
    >>> parse_gedcom_date("1 JAN 1900").jd1
    2415021
    >>> classify_age(29220)
    '80y'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Tuple


UNKNOWN_JD = 0

GREGORIAN = "@#DGREGORIAN@"
JULIAN = "@#DJULIAN@"
CALENDARS = (GREGORIAN, JULIAN)

MONTHS: Tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

MONTH_NAMES = {
    "JAN": "January",
    "FEB": "February",
    "MAR": "March",
    "APR": "April",
    "MAY": "May",
    "JUN": "June",
    "JUL": "July",
    "AUG": "August",
    "SEP": "September",
    "OCT": "October",
    "NOV": "November",
    "DEC": "December",
}

QUALIFIERS = {
    "ABT": "about",
    "CAL": "calculated",
    "EST": "estimated",
    "INT": "interpreted",
    "BEF": "before",
    "AFT": "after",
    "FROM": "from",
    "TO": "to",
}

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.4375

# Julian day of 0001-01-01 (proleptic Gregorian) minus one
_ORDINAL_OFFSET = 1721425

_ESCAPE_RE = re.compile(r"^(@#D[A-Z ]+@)\s*")
_PHRASE_RE = re.compile(r"\(.*\)")
_RANGE_RE = re.compile(r"^BET(?:WEEN)?\s+(.+?)\s+AND\s+(.+)$")
_PERIOD_RE = re.compile(r"^FROM\s+(.+?)\s+TO\s+(.+)$")
_SIMPLE_RE = re.compile(
    r"^(?:(?:(\d{1,2})\s+)?([A-Z]{3})\s+)?(\d{1,4})(?:/\d{2})?\s*(B\.?\s?C\.?|BCE)?$"
)
_AGE_CODE_RE = re.compile(r"^(\d+)([ymd])$")


# ----- Julian day numbers -----
def _astronomical_year(year: int) -> int:
    """Map a historical year (no year 0, B.C. negative) to astronomical numbering."""
    return year + 1 if year < 0 else year


def julian_day(year: int, month: int, day: int, calendar: str = GREGORIAN) -> int:
    """
    Convert a calendar date to a Julian day number.

    Args:
        year: Historical year (negative for B.C.)
        month: Month 1-12
        day: Day of month
        calendar: GEDCOM calendar escape

    Returns:
        Julian day number
    """
    y = _astronomical_year(year)
    a = (14 - month) // 12
    y2 = y + 4800 - a
    m2 = month + 12 * a - 3
    jd = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4
    if calendar == JULIAN:
        return jd - 32083
    return jd - y2 // 100 + y2 // 400 - 32045


def calendar_date(jd: int, calendar: str = GREGORIAN) -> Tuple[int, int, int]:
    """
    Convert a Julian day number back to a calendar date.

    Returns:
        (year, month, day) with B.C. years negative
    """
    if calendar == JULIAN:
        b = 0
        c = jd + 32082
    else:
        a = jd + 32044
        b = (4 * a + 3) // 146097
        c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + m // 10
    if year <= 0:
        year -= 1
    return year, month, day


def days_in_month(year: int, month: int, calendar: str = GREGORIAN) -> int:
    """Number of days in a month of the given calendar."""
    if month == 12:
        next_start = julian_day(year + 1 if year != -1 else 1, 1, 1, calendar)
    else:
        next_start = julian_day(year, month + 1, 1, calendar)
    return next_start - julian_day(year, month, 1, calendar)


def today_julian_day() -> int:
    """Julian day number of the current date, the default reference date."""
    return date.today().toordinal() + _ORDINAL_OFFSET


# ----- Parsed dates -----
@dataclass(frozen=True)
class SimpleDate:
    """A single calendar date, possibly with unknown day or month."""

    year: int
    month: int = 0
    day: int = 0
    calendar: str = GREGORIAN

    @property
    def month_code(self) -> str:
        return MONTHS[self.month - 1] if self.month else ""

    @property
    def min_jd(self) -> int:
        return julian_day(self.year, self.month or 1, self.day or 1, self.calendar)

    @property
    def max_jd(self) -> int:
        if self.day:
            return self.min_jd
        if self.month:
            return julian_day(
                self.year,
                self.month,
                days_in_month(self.year, self.month, self.calendar),
                self.calendar,
            )
        return julian_day(self.year, 12, 31, self.calendar)

    def display(self, translate: Callable[[str], str]) -> str:
        parts = []
        if self.day:
            parts.append(str(self.day))
        if self.month:
            parts.append(translate(MONTH_NAMES[self.month_code]))
        parts.append(year_display(self.year, translate))
        return " ".join(parts)


@dataclass(frozen=True)
class GedcomDate:
    """
    A parsed GEDCOM date phrase.

    Attributes:
        text: Raw phrase as stored
        qualifier: ABT, BEF, BET, FROM, ... or '' for a plain date
        start: First (or only) date
        end: Second date of a BET/FROM-TO range
    """

    text: str
    qualifier: str = ""
    start: Optional[SimpleDate] = None
    end: Optional[SimpleDate] = field(default=None)

    @property
    def is_known(self) -> bool:
        return self.start is not None

    @property
    def jd1(self) -> int:
        return self.start.min_jd if self.start else UNKNOWN_JD

    @property
    def jd2(self) -> int:
        if self.end:
            return self.end.max_jd
        return self.start.max_jd if self.start else UNKNOWN_JD

    @property
    def year(self) -> int:
        return self.start.year if self.start else 0

    @property
    def month(self) -> str:
        return self.start.month_code if self.start else ""

    @property
    def day(self) -> int:
        return self.start.day if self.start else 0

    @property
    def calendar(self) -> str:
        return self.start.calendar if self.start else ""

    def display(self, translate: Callable[[str], str] = str) -> str:
        """
        Render the date for humans.

        Args:
            translate: Catalog lookup for month names and qualifiers

        Returns:
            e.g. "12 January 1900", "about 1900", "between 1850 and 1860"
        """
        if not self.start:
            return self.text
        first = self.start.display(translate)
        if self.qualifier == "BET" and self.end:
            return (
                f"{translate('between')} {first} "
                f"{translate('and')} {self.end.display(translate)}"
            )
        if self.qualifier == "FROM" and self.end:
            return (
                f"{translate('from')} {first} "
                f"{translate('to')} {self.end.display(translate)}"
            )
        if self.qualifier:
            return f"{translate(QUALIFIERS[self.qualifier])} {first}"
        return first


def _parse_simple(text: str, calendar: str = GREGORIAN) -> Optional[SimpleDate]:
    escape = _ESCAPE_RE.match(text)
    if escape:
        calendar = escape.group(1)
        text = text[escape.end():]
    if calendar not in CALENDARS:
        return None

    match = _SIMPLE_RE.match(text.strip())
    if not match:
        return None
    day_text, month_text, year_text, bc = match.groups()

    year = int(year_text)
    if year == 0:
        return None
    if bc:
        year = -year

    month = 0
    if month_text:
        if month_text not in MONTHS:
            return None
        month = MONTHS.index(month_text) + 1

    day = int(day_text) if day_text else 0
    if day and not 1 <= day <= days_in_month(year, month, calendar):
        return None
    return SimpleDate(year=year, month=month, day=day, calendar=calendar)


def parse_gedcom_date(text: Optional[str]) -> GedcomDate:
    """
    Parse a GEDCOM date phrase.

    Unparseable input yields a date whose comparable values are the
    sentinel 0; the raw text is preserved for display.

    Args:
        text: Raw GEDCOM date, e.g. "ABT 12 JAN 1900" or "BET 1850 AND 1860"

    Returns:
        GedcomDate instance
    """
    raw = (text or "").strip()
    normalized = _PHRASE_RE.sub("", raw).strip().upper()
    normalized = re.sub(r"\s+", " ", normalized)
    if not normalized:
        return GedcomDate(text=raw)

    calendar = GREGORIAN
    escape = _ESCAPE_RE.match(normalized)
    if escape:
        calendar = escape.group(1)
        normalized = normalized[escape.end():]

    for pattern, qualifier in ((_RANGE_RE, "BET"), (_PERIOD_RE, "FROM")):
        match = pattern.match(normalized)
        if match:
            start = _parse_simple(match.group(1), calendar)
            end = _parse_simple(match.group(2), calendar)
            if start is None or end is None:
                return GedcomDate(text=raw)
            return GedcomDate(text=raw, qualifier=qualifier, start=start, end=end)

    qualifier = ""
    head, _, rest = normalized.partition(" ")
    if head in QUALIFIERS and rest:
        qualifier = head
        normalized = rest

    start = _parse_simple(normalized, calendar)
    if start is None:
        return GedcomDate(text=raw)
    return GedcomDate(text=raw, qualifier=qualifier, start=start)


def to_comparable(text: Optional[str]) -> int:
    """Comparable scalar (first Julian day) for a date phrase, 0 if unknown."""
    return parse_gedcom_date(text).jd1


# ----- Ages -----
def age_in_days(later: int, earlier: int) -> int:
    """
    Span between two comparable dates.

    May be negative when the inputs are inverted; ranking callers filter
    such pairs before they get here.
    """
    return later - earlier


def classify_age(days: float) -> str:
    """
    Classify a span of days into an age code.

    Units are truncated, never rounded: 365.25 days per year and 30.4375
    days per month. Non-positive spans yield "0d".

    Examples:
        >>> classify_age(400)
        '1y'
        >>> classify_age(45)
        '1m'
        >>> classify_age(-3)
        '0d'
    """
    years = int(days / DAYS_PER_YEAR)
    if years >= 1:
        return f"{years}y"
    months = int(days / DAYS_PER_MONTH)
    if months >= 1:
        return f"{months}m"
    return f"{max(int(days), 0)}d"


def age_display(code: str, translate: Callable[[str], str] = str) -> str:
    """
    Turn an age code into words.

    Args:
        code: "80y", "5m" or "3d"
        translate: Catalog lookup for the unit words

    Returns:
        "80 years", "1 month", ... or "" for an unrecognized code
    """
    match = _AGE_CODE_RE.match(code or "")
    if not match:
        return ""
    count = int(match.group(1))
    unit = {"y": "year", "m": "month", "d": "day"}[match.group(2)]
    word = unit if count == 1 else f"{unit}s"
    return f"{count} {translate(word)}"


def year_display(year: int, translate: Callable[[str], str] = str) -> str:
    """Render a year, negative years as B.C."""
    if year < 0:
        return f"{-year} {translate('B.C.')}"
    return str(year)


# ----- Centuries -----
def century_of(year: int) -> int:
    """Century bucket of a year: floor(year / 100) + 1, so 1799 -> 18 and 1800 -> 19."""
    return year // 100 + 1


def _ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def century_name(century: int, translate: Callable[[str], str] = str) -> str:
    """
    Human name of a century bucket.

    Examples:
        >>> century_name(19)
        '19th century'
        >>> century_name(0)
        '1st century B.C.'
    """
    if century <= 0:
        return f"{_ordinal(1 - century)} {translate('century')} {translate('B.C.')}"
    return f"{_ordinal(century)} {translate('century')}"
