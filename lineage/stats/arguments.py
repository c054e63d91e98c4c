#!/usr/bin/env python3
"""
arguments.py
--------------------
Positional tag arguments.

Tags arrive as ``#name:arg1:arg2#`` in user-authored text, so every
argument is a raw string. TagArgs gives handlers typed accessors with an
explicit default per call; a malformed value falls back to that default
and never raises.

Usage:
    args = TagArgs(["5", "yes"])
    args.integer(0, 10)   # 5
    args.flag(1)          # True
    args.integer(2, 10)   # 10 (missing)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Iterator, List, Optional, Sequence, Tuple

# --- Local imports ---
from lineage.core.exceptions import MalformedArgumentError
from lineage.core.validators import DataValidator

# Largest magnitude handed on to queries (LIMIT, year bounds)
INTEGER_LIMIT = 2**31 - 1


class TagArgs:
    """Lenient, typed view over a tag's positional string arguments."""

    def __init__(self, values: Sequence[str] = ()) -> None:
        self._values: Tuple[str, ...] = tuple(values)

    @classmethod
    def of(cls, *values: str) -> "TagArgs":
        return cls(values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"TagArgs({list(self._values)!r})"

    def raw(self, index: int) -> Optional[str]:
        """Argument at ``index`` or None when absent or blank."""
        if index >= len(self._values):
            return None
        value = self._values[index].strip()
        return value or None

    def text(self, index: int, default: str = "") -> str:
        value = self.raw(index)
        return default if value is None else value

    def integer(self, index: int, default: int, minimum: Optional[int] = None) -> int:
        """
        Integer argument.

        Args:
            index: Position
            default: Value used when missing or not numeric
            minimum: Values below it also fall back to the default

        Returns:
            Parsed integer clamped to +-INTEGER_LIMIT, or the default
        """
        try:
            value = DataValidator.normalize_int(self.raw(index))
        except MalformedArgumentError:
            return default
        if value is None or (minimum is not None and value < minimum):
            return default
        return max(-INTEGER_LIMIT, min(value, INTEGER_LIMIT))

    def flag(self, index: int, default: bool = False) -> bool:
        """Boolean argument; any other non-empty word counts as set."""
        value = self.raw(index)
        if value is None:
            return default
        try:
            return bool(DataValidator.normalize_bool(value))
        except MalformedArgumentError:
            return True

    def choice(self, index: int, choices: Sequence[str], default: str) -> str:
        value = self.raw(index)
        if value is None:
            return default
        lowered = value.lower()
        for choice in choices:
            if choice.lower() == lowered:
                return choice
        return default

    def size(self, index: int, default: str) -> Tuple[int, int]:
        """Chart size ``WxH``; a malformed value falls back to the default."""
        parsed = DataValidator.parse_size(self.raw(index))
        if parsed is None:
            parsed = DataValidator.parse_size(default)
        return parsed or (0, 0)

    def color(self, index: int, default: str) -> str:
        return DataValidator.normalize_color(self.raw(index)) or default

    def rest(self, start: int = 0) -> List[str]:
        """All non-blank arguments from ``start`` on."""
        return [value.strip() for value in self._values[start:] if value.strip()]
