#!/usr/bin/env python3
"""
formatting.py
--------------------
Locale-aware formatting of statistics output.

LocaleFormatter is the only place that knows about the viewer's locale:
number grouping, percentages, the translation catalog, text direction
and the RTL list fixup.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Dict, Optional, Tuple

# --- Local imports ---
from .dates import GedcomDate, age_display

PRIVATE = "This information is private and cannot be shown."
NO_DATA = "Not available"
NOT_APPLICABLE = "N/A"

RTL_LANGUAGES = frozenset({"ar", "dv", "fa", "he", "ps", "ur", "yi"})

# language -> (thousands separator, decimal separator)
SEPARATORS: Dict[str, Tuple[str, str]] = {
    "en": (",", "."),
    "ar": ("٬", "٫"),
    "cs": ("\xa0", ","),
    "da": (".", ","),
    "de": (".", ","),
    "es": (".", ","),
    "fa": ("٬", "٫"),
    "fi": ("\xa0", ","),
    "fr": (" ", ","),
    "he": (",", "."),
    "it": (".", ","),
    "nb": ("\xa0", ","),
    "nl": (".", ","),
    "pl": ("\xa0", ","),
    "pt": (".", ","),
    "ru": ("\xa0", ","),
    "sv": ("\xa0", ","),
}

_RTL_MARKED = re.compile(r"([\[\]()+])")


class LocaleFormatter:
    """
    Number, percentage and text formatting for one locale.

    Attributes:
        locale: Locale code as given ("en", "fr_CA", "he-IL")
        catalog: Optional translations keyed by the English text
    """

    def __init__(self, locale: str = "en", catalog: Optional[Dict[str, str]] = None) -> None:
        self.locale = locale or "en"
        self.catalog = dict(catalog or {})
        self.thousands, self.decimal = SEPARATORS.get(self.language, SEPARATORS["en"])

    @property
    def language(self) -> str:
        return re.split(r"[-_]", self.locale)[0].lower()

    def translate(self, key: str) -> str:
        return self.catalog.get(key, key)

    def text_direction(self) -> str:
        return "rtl" if self.language in RTL_LANGUAGES else "ltr"

    def format_number(self, number: float, decimals: int = 0) -> str:
        """
        Format a number with the locale's separators.

        Examples:
            >>> LocaleFormatter("de").format_number(1234567)
            '1.234.567'
        """
        text = f"{number:,.{decimals}f}"
        return (
            text.replace(",", "\x00")
            .replace(".", self.decimal)
            .replace("\x00", self.thousands)
        )

    def format_percentage(self, ratio: float, decimals: int = 1) -> str:
        return f"{self.format_number(ratio * 100, decimals)}%"

    def percentage(self, part: float, whole: float, decimals: int = 1) -> str:
        """
        Share of ``part`` in ``whole`` as a percentage.

        A zero whole yields "N/A" instead of dividing by zero.
        """
        if not whole:
            return self.translate(NOT_APPLICABLE)
        return self.format_percentage(part / whole, decimals)

    def age(self, code: str) -> str:
        return age_display(code, self.translate)

    def date(self, date: GedcomDate) -> str:
        return date.display(self.translate)

    def rtl_fixup(self, text: str) -> str:
        """Insert right-to-left marks before brackets and '+' for RTL locales."""
        if self.text_direction() != "rtl":
            return text
        return _RTL_MARKED.sub(r"&rlm;\1", text)

    def private(self) -> str:
        return self.translate(PRIVATE)

    def no_data(self) -> str:
        return self.translate(NO_DATA)
