"""
Tests for date arithmetic.

Covers Julian day conversion, GEDCOM date parsing, age classification
and century bucketing.
"""
import re
from datetime import date

import pytest

from lineage.stats.dates import (
    JULIAN,
    age_display,
    age_in_days,
    calendar_date,
    century_name,
    century_of,
    classify_age,
    days_in_month,
    julian_day,
    parse_gedcom_date,
    to_comparable,
    today_julian_day,
    year_display,
)


class TestJulianDay:
    """Tests for Julian day conversion."""

    def test_known_gregorian_date(self):
        """1 January 1900 is Julian day 2415021."""
        assert julian_day(1900, 1, 1) == 2415021

    def test_calendar_switch_is_contiguous(self):
        """Julian 4 October 1582 is the day before Gregorian 15 October 1582."""
        assert julian_day(1582, 10, 4, JULIAN) + 1 == julian_day(1582, 10, 15)

    def test_calendar_date_inverts_julian_day(self):
        """calendar_date should give back the original date."""
        assert calendar_date(julian_day(1987, 6, 30)) == (1987, 6, 30)

    def test_days_in_february(self):
        """February has 29 days in leap years only."""
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2000, 2) == 29
        assert days_in_month(1900, 2, JULIAN) == 29

    def test_today_matches_calendar(self):
        """today_julian_day should agree with julian_day for today's date."""
        today = date.today()
        assert today_julian_day() == julian_day(today.year, today.month, today.day)


class TestParseGedcomDate:
    """Tests for GEDCOM date phrase parsing."""

    def test_full_date(self):
        """A full date has equal first and last days."""
        parsed = parse_gedcom_date("12 JAN 1900")
        assert parsed.jd1 == parsed.jd2 == julian_day(1900, 1, 12)
        assert parsed.year == 1900
        assert parsed.month == "JAN"
        assert parsed.day == 12

    def test_year_only_spans_the_year(self):
        """A bare year spans 1 January to 31 December."""
        parsed = parse_gedcom_date("1900")
        assert parsed.jd1 == julian_day(1900, 1, 1)
        assert parsed.jd2 == julian_day(1900, 12, 31)
        assert parsed.month == ""

    def test_month_only_spans_the_month(self):
        """A month and year span the whole month."""
        parsed = parse_gedcom_date("FEB 1900")
        assert parsed.jd2 == julian_day(1900, 2, 28)

    def test_qualified_date(self):
        """Qualifiers are kept and do not change the comparable value."""
        parsed = parse_gedcom_date("ABT 1900")
        assert parsed.qualifier == "ABT"
        assert parsed.jd1 == julian_day(1900, 1, 1)

    def test_range(self):
        """BET ... AND ... spans from the first to the second date."""
        parsed = parse_gedcom_date("BET 1850 AND 1860")
        assert parsed.qualifier == "BET"
        assert parsed.jd1 == julian_day(1850, 1, 1)
        assert parsed.jd2 == julian_day(1860, 12, 31)

    def test_before_christ(self):
        """B.C. years are negative."""
        assert parse_gedcom_date("44 B.C.").year == -44

    def test_julian_calendar_escape(self):
        """The calendar escape selects the Julian calendar."""
        parsed = parse_gedcom_date("@#DJULIAN@ 4 OCT 1582")
        assert parsed.calendar == JULIAN
        assert parsed.jd1 == julian_day(1582, 10, 4, JULIAN)

    def test_phrase_is_ignored(self):
        """Parenthesised phrases do not prevent parsing."""
        assert parse_gedcom_date("INT 1900 (from the census)").year == 1900

    @pytest.mark.parametrize("text", ["", None, "UNKNOWN", "30 FEB 1900", "0", "13 XYZ 1900"])
    def test_unparseable_is_unknown(self, text):
        """Unparseable input yields the 0 sentinel."""
        assert to_comparable(text) == 0

    def test_unknown_keeps_raw_text(self):
        """Unknown dates display their raw text."""
        assert parse_gedcom_date("sometime").display() == "sometime"

    def test_display(self):
        """Dates render with month names and qualifier words."""
        assert parse_gedcom_date("12 JAN 1900").display() == "12 January 1900"
        assert parse_gedcom_date("ABT 1900").display() == "about 1900"
        assert parse_gedcom_date("BET 1850 AND 1860").display() == "between 1850 and 1860"
        assert parse_gedcom_date("FROM 1900 TO 1910").display() == "from 1900 to 1910"

    def test_display_translates(self):
        """Month names go through the translation callable."""
        catalog = {"January": "janvier"}
        assert parse_gedcom_date("1 JAN 1900").display(lambda key: catalog.get(key, key)) == (
            "1 janvier 1900"
        )


class TestClassifyAge:
    """Tests for age classification."""

    @pytest.mark.parametrize(
        "days, code",
        [
            (29220, "80y"),
            (400, "1y"),
            (365, "11m"),
            (45, "1m"),
            (30, "30d"),
            (0, "0d"),
            (-3, "0d"),
        ],
    )
    def test_codes_truncate(self, days, code):
        """Units are truncated, never rounded."""
        assert classify_age(days) == code

    @pytest.mark.parametrize(
        "earlier",
        [julian_day(1900, 1, 1), julian_day(1899, 12, 31), julian_day(2000, 2, 29)],
    )
    def test_monotonic_with_one_unit(self, earlier):
        """Codes carry one unit and never decrease as the gap grows."""
        offsets = sorted(
            set(range(0, 95)) | set(range(300, 400)) | set(range(700, 760)) | {3652, 29220, 36525}
        )
        ranks = []
        for offset in offsets:
            code = classify_age(age_in_days(earlier + offset, earlier))
            match = re.fullmatch(r"(\d+)([dmy])", code)
            assert match, code
            ranks.append(("dmy".index(match.group(2)), int(match.group(1))))
        assert ranks == sorted(ranks)
        assert ranks[0] == (0, 0)
        assert ranks[-1] == (2, 100)

    def test_age_in_days(self):
        """Spans are the difference of comparable dates."""
        assert age_in_days(julian_day(1980, 1, 13), julian_day(1900, 1, 12)) == 29220
        assert age_in_days(julian_day(1900, 1, 1), julian_day(1900, 1, 2)) == -1

    def test_age_display(self):
        """Age codes become words with singular and plural units."""
        assert age_display("1y") == "1 year"
        assert age_display("80y") == "80 years"
        assert age_display("5m") == "5 months"
        assert age_display("1d") == "1 day"

    def test_age_display_rejects_garbage(self):
        """Unknown codes render as an empty string."""
        assert age_display("soon") == ""


class TestCenturies:
    """Tests for century helpers."""

    @pytest.mark.parametrize("year, century", [(1799, 18), (1800, 19), (1, 1), (2024, 21)])
    def test_century_of(self, year, century):
        """Centuries are floor(year / 100) + 1."""
        assert century_of(year) == century

    def test_century_names(self):
        """Century names use English ordinals."""
        assert century_name(19) == "19th century"
        assert century_name(21) == "21st century"
        assert century_name(11) == "11th century"
        assert century_name(0) == "1st century B.C."

    def test_year_display(self):
        """Negative years render as B.C."""
        assert year_display(1900) == "1900"
        assert year_display(-44) == "44 B.C."
