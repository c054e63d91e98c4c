#!/usr/bin/env python3
"""
visibility.py
--------------------
Record visibility gates.

Every name-bearing statistic asks a gate whether the ranked record may be
disclosed to the current viewer. Denied records are redacted by the caller;
aggregate numbers stay visible.

Gates:
    - ShowAllGate: everything is visible (administrative tools, tests)
    - LivingPrivacyGate: living individuals are hidden from non-members
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Optional, Protocol

# --- Local imports ---
from lineage.database.models import DEATH_EVENTS, Family, Individual
from .dates import DAYS_PER_YEAR


@dataclass(frozen=True)
class ViewerContext:
    """
    Who is looking at the statistics.

    Attributes:
        user_id: Account id, None for anonymous visitors
        is_member: Viewer is a member of the tree
        is_manager: Viewer manages the tree
    """

    user_id: Optional[int] = None
    is_member: bool = False
    is_manager: bool = False

    @classmethod
    def anonymous(cls) -> "ViewerContext":
        return cls()

    @property
    def is_privileged(self) -> bool:
        return self.is_member or self.is_manager


class RecordVisibilityGate(Protocol):
    """Predicate deciding whether a record's details may be shown."""

    def can_show(self, record: Any, viewer: ViewerContext) -> bool: ...


class ShowAllGate:
    """Gate that shows every record."""

    def can_show(self, record: Any, viewer: ViewerContext) -> bool:
        return True


class LivingPrivacyGate:
    """
    Hide living individuals from non-members.

    An individual is dead when a death, burial or cremation fact exists,
    or when the birth lies more than ``max_alive_age`` years before the
    reference date. A family is visible only when each present spouse is.
    """

    def __init__(self, reference_jd: int, max_alive_age: int = 120) -> None:
        self.reference_jd = reference_jd
        self.max_alive_age = max_alive_age

    def is_dead(self, individual: Individual) -> bool:
        if individual.has_fact(*DEATH_EVENTS):
            return True
        birth = individual.fact("BIRT")
        if birth is not None and birth.julian_day1:
            return self.reference_jd - birth.julian_day1 > self.max_alive_age * DAYS_PER_YEAR
        return False

    def can_show(self, record: Any, viewer: ViewerContext) -> bool:
        if viewer.is_privileged:
            return True
        if isinstance(record, Individual):
            return self.is_dead(record)
        if isinstance(record, Family):
            return all(self.can_show(spouse, viewer) for spouse in record.spouses)
        return True
