#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities.

Provides type-safe conversion of the loosely typed values that reach the
statistics engine: positional tag arguments (always strings), YAML
configuration values and CLI options.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Optional

from .exceptions import MalformedArgumentError, ValidationError


_SIZE_RE = re.compile(r"^\s*(\d{1,4})\s*x\s*(\d{1,4})\s*$", re.IGNORECASE)
_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


class DataValidator:
    """Centralized data validation for statistics inputs."""

    @staticmethod
    def validate_known_keys(data: Dict[str, Any], allowed: Iterable[str]) -> None:
        """
        Reject keys that are not part of a schema.

        Raises:
            ValidationError: If an unknown key is present
        """
        unknown = sorted(set(data) - set(allowed))
        if unknown:
            raise ValidationError(f"Unknown keys: {', '.join(unknown)}")

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert various inputs to boolean.

        Args:
            value: Value to convert

        Returns:
            Boolean value or None

        Raises:
            MalformedArgumentError: If conversion fails
        """
        if isinstance(value, bool):
            return value
        elif isinstance(value, (int, float)):
            if value == 0:
                return False
            elif value == 1:
                return True
            else:
                raise MalformedArgumentError(
                    f"Cannot convert numeric '{value}' to boolean"
                )
        elif isinstance(value, str):
            if value.strip().lower() in ("true", "1", "yes", "on", "y"):
                return True
            elif value.strip().lower() in ("false", "0", "no", "off", "n", ""):
                return False
            else:
                raise MalformedArgumentError(f"Cannot convert '{value}' to boolean")
        elif value is not None:
            return bool(value)
        return None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer.

        Accepts ints and numeric strings with surrounding whitespace or a
        leading sign. Floats are truncated.

        Returns:
            Integer value or None for None/empty input

        Raises:
            MalformedArgumentError: If the value is not numeric
        """
        if value is None:
            return None
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            try:
                return int(value)
            except (ValueError, OverflowError):
                raise MalformedArgumentError(f"Expected an integer, got '{value}'")
        text = str(value).strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            try:
                return int(float(text))
            except (ValueError, OverflowError):
                raise MalformedArgumentError(f"Expected an integer, got '{value}'")

    @staticmethod
    def parse_size(value: Any) -> Optional[tuple]:
        """
        Parse a chart size of the form ``WxH``.

        Returns:
            (width, height) tuple or None when malformed
        """
        match = _SIZE_RE.match(str(value or ""))
        if not match:
            return None
        width, height = int(match.group(1)), int(match.group(2))
        if width == 0 or height == 0:
            return None
        return width, height

    @staticmethod
    def normalize_color(value: Any) -> Optional[str]:
        """
        Normalize a hex colour (``ff0000`` or ``#ff0000``).

        Returns:
            Lowercase six digit hex string without '#', or None
        """
        match = _COLOR_RE.match(str(value or "").strip())
        return match.group(1).lower() if match else None
