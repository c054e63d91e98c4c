#!/usr/bin/env python3
"""
families.py
-----------
Aggregation queries over families.

Family sizes, grandchildren, childless families, age gaps between spouses
and between siblings, and marriage durations.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import desc, distinct, func, or_
from sqlalchemy.orm import aliased

from lineage.database.decorators import handle_db_errors, log_database_operation
from lineage.database.models import (
    DEATH_EVENTS,
    MARRIAGE_END_EVENTS,
    DateFact,
    Family,
    Individual,
    family_children,
    family_sources,
)
from lineage.stats.dates import CALENDARS
from .base import TreeQueries


@dataclass(frozen=True)
class RankedFamily:
    """A family with the value it was ranked by (a count or a span in days)."""

    family: Family
    value: int


@dataclass(frozen=True)
class SiblingGap:
    """Two siblings of one family and the days between their births."""

    family: Family
    elder: Individual
    younger: Individual
    days: int


class FamilyQueries(TreeQueries):
    """Queries over the families of one tree."""

    def _families(self):
        return self.session.query(Family).filter(Family.tree_id == self.tree_id)

    # ---- Totals ----
    @handle_db_errors
    @log_database_operation("count_families")
    def count(self) -> int:
        return self._families().count()

    @handle_db_errors
    @log_database_operation("count_families_with_sources")
    def count_with_sources(self) -> int:
        return (
            self.session.query(func.count(distinct(family_sources.c.family_id)))
            .join(Family, Family.id == family_sources.c.family_id)
            .filter(Family.tree_id == self.tree_id)
            .scalar()
            or 0
        )

    @handle_db_errors
    @log_database_operation("total_children")
    def total_children(self) -> int:
        return (
            self.session.query(func.sum(Family.num_children))
            .filter(Family.tree_id == self.tree_id)
            .scalar()
            or 0
        )

    @handle_db_errors
    @log_database_operation("average_children")
    def average_children(self) -> float:
        return float(
            self.session.query(func.avg(Family.num_children))
            .filter(Family.tree_id == self.tree_id)
            .scalar()
            or 0
        )

    # ---- Family size ----
    @handle_db_errors
    @log_database_operation("largest_families")
    def largest(self, limit: int = 10) -> List[RankedFamily]:
        """Families ranked by stored child count, largest first."""
        rows = (
            self._families()
            .order_by(Family.num_children.desc())
            .limit(limit)
            .all()
        )
        return [RankedFamily(family, family.num_children) for family in rows]

    @handle_db_errors
    @log_database_operation("most_grandchildren")
    def most_grandchildren(self, limit: int = 10) -> List[RankedFamily]:
        """
        Families ranked by number of grandchildren.

        Walks family -> child -> the child's own families -> their children.
        """
        child_link = family_children.alias("child_link")
        grandchild_link = family_children.alias("grandchild_link")
        child_family = aliased(Family)
        total = func.count(grandchild_link.c.individual_id).label("total")
        rows = (
            self.session.query(Family, total)
            .join(child_link, child_link.c.family_id == Family.id)
            .join(
                child_family,
                or_(
                    child_family.husband_id == child_link.c.individual_id,
                    child_family.wife_id == child_link.c.individual_id,
                ),
            )
            .join(grandchild_link, grandchild_link.c.family_id == child_family.id)
            .filter(Family.tree_id == self.tree_id)
            .group_by(Family.id)
            .order_by(desc("total"))
            .limit(limit)
            .all()
        )
        return [RankedFamily(family, int(count)) for family, count in rows]

    # ---- Childless families ----
    @handle_db_errors
    @log_database_operation("count_childless")
    def count_childless(self) -> int:
        return self._families().filter(Family.num_children == 0).count()

    @handle_db_errors
    @log_database_operation("childless_families")
    def childless(self) -> List[Family]:
        return self._families().filter(Family.num_children == 0).order_by(Family.id).all()

    @handle_db_errors
    @log_database_operation("childless_marriage_years")
    def childless_marriage_years(
        self, year1: Optional[int] = None, year2: Optional[int] = None
    ) -> Dict[int, int]:
        """
        Childless families per marriage year (Gregorian and Julian dates).

        Returns:
            year -> count
        """
        query = (
            self.session.query(DateFact.year, func.count(distinct(Family.id)))
            .join(DateFact, DateFact.family_id == Family.id)
            .filter(
                Family.tree_id == self.tree_id,
                Family.num_children == 0,
                DateFact.fact == "MARR",
                DateFact.calendar.in_(CALENDARS),
            )
        )
        query = self._filter_years(query, DateFact.year, year1, year2)
        return {year: count for year, count in query.group_by(DateFact.year).all()}

    # ---- Age gaps ----
    @handle_db_errors
    @log_database_operation("spouse_age_gaps")
    def spouse_age_gaps(self, elder: str = "M", limit: int = 10) -> List[RankedFamily]:
        """
        Families ranked by the age gap between the spouses.

        Args:
            elder: 'M' ranks husbands older than their wives, 'F' the reverse
            limit: Number of rows

        Returns:
            Families with the gap in days, widest first
        """
        husband_birth = aliased(DateFact)
        wife_birth = aliased(DateFact)
        if elder == "F":
            gap = husband_birth.julian_day1 - wife_birth.julian_day1
        else:
            gap = wife_birth.julian_day1 - husband_birth.julian_day1
        gap = func.max(gap).label("gap")
        rows = (
            self.session.query(Family, gap)
            .join(husband_birth, husband_birth.individual_id == Family.husband_id)
            .join(wife_birth, wife_birth.individual_id == Family.wife_id)
            .filter(
                Family.tree_id == self.tree_id,
                husband_birth.fact == "BIRT",
                wife_birth.fact == "BIRT",
                husband_birth.julian_day1 != 0,
                wife_birth.julian_day1 != 0,
            )
            .group_by(Family.id)
            .order_by(desc("gap"))
            .all()
        )
        ranked = [RankedFamily(family, int(days)) for family, days in rows if days > 0]
        return ranked[:limit]

    @handle_db_errors
    @log_database_operation("sibling_age_gaps")
    def sibling_age_gaps(self, limit: int = 10, one_per_family: bool = False) -> List[SiblingGap]:
        """
        Sibling pairs ranked by the days between their births.

        Args:
            limit: Number of rows
            one_per_family: Keep only the widest gap of each family

        Returns:
            Sibling gaps, widest first
        """
        link_a = family_children.alias("link_a")
        link_b = family_children.alias("link_b")
        birth_a = aliased(DateFact)
        birth_b = aliased(DateFact)
        elder = aliased(Individual)
        younger = aliased(Individual)
        gap = (birth_b.julian_day1 - birth_a.julian_day1).label("gap")
        rows = (
            self.session.query(Family, elder, younger, gap)
            .join(link_a, link_a.c.family_id == Family.id)
            .join(link_b, link_b.c.family_id == Family.id)
            .join(elder, elder.id == link_a.c.individual_id)
            .join(younger, younger.id == link_b.c.individual_id)
            .join(birth_a, birth_a.individual_id == elder.id)
            .join(birth_b, birth_b.individual_id == younger.id)
            .filter(
                Family.tree_id == self.tree_id,
                elder.id != younger.id,
                birth_a.fact == "BIRT",
                birth_b.fact == "BIRT",
                birth_a.julian_day1 != 0,
                birth_b.julian_day1 != 0,
                birth_b.julian_day1 > birth_a.julian_day1,
            )
            .order_by(desc("gap"))
            .all()
        )

        gaps: List[SiblingGap] = []
        seen = set()
        for family, first, second, days in rows:
            if one_per_family:
                if family.id in seen:
                    continue
                seen.add(family.id)
            gaps.append(SiblingGap(family, first, second, int(days)))
            if len(gaps) >= limit:
                break
        return gaps

    # ---- Marriage durations ----
    def _marriage_ends(self, end_join, end_filter) -> Dict[int, int]:
        married = aliased(DateFact)
        ended = aliased(DateFact)
        duration = func.min(ended.julian_day2 - married.julian_day1)
        rows = (
            self.session.query(Family.id, duration)
            .join(married, married.family_id == Family.id)
            .join(ended, end_join(ended))
            .filter(
                Family.tree_id == self.tree_id,
                married.fact == "MARR",
                married.julian_day1 != 0,
                end_filter(ended),
                ended.julian_day2 > married.julian_day1,
            )
            .group_by(Family.id)
            .all()
        )
        return {family_id: int(days) for family_id, days in rows}

    @staticmethod
    def _end_known(family: Family) -> bool:
        """Both spouses present, and a dead spouse has a dated death unless the other lives."""
        husband, wife = family.husband, family.wife
        if husband is None or wife is None:
            return False

        def dated_death(spouse: Individual) -> bool:
            death = spouse.fact("DEAT")
            return death is not None and death.julian_day1 != 0

        if dated_death(husband) and dated_death(wife):
            return True
        return not husband.has_fact(*DEATH_EVENTS) or not wife.has_fact(*DEATH_EVENTS)

    @handle_db_errors
    @log_database_operation("marriage_durations")
    def marriage_durations(self, longest: bool = True, limit: int = 10) -> List[RankedFamily]:
        """
        Families ranked by how long the marriage lasted.

        A marriage ends at a divorce, annulment or separation, or at the
        death of either spouse, whichever comes first.

        Args:
            longest: Rank longest first instead of shortest first
            limit: Number of rows

        Returns:
            Families with the duration in days
        """
        sources = (
            self._marriage_ends(
                lambda ended: ended.family_id == Family.id,
                lambda ended: ended.fact.in_(MARRIAGE_END_EVENTS),
            ),
            self._marriage_ends(
                lambda ended: ended.individual_id == Family.husband_id,
                lambda ended: ended.fact == "DEAT",
            ),
            self._marriage_ends(
                lambda ended: ended.individual_id == Family.wife_id,
                lambda ended: ended.fact == "DEAT",
            ),
        )
        durations: Dict[int, int] = {}
        for ends in sources:
            for family_id, days in ends.items():
                if family_id not in durations or days < durations[family_id]:
                    durations[family_id] = days
        candidates = sorted(durations.items(), key=lambda item: item[1], reverse=longest)

        ranked: List[RankedFamily] = []
        for family_id, days in candidates:
            family = self.session.get(Family, family_id)
            if not self._end_known(family):
                continue
            ranked.append(RankedFamily(family, days))
            if len(ranked) >= limit:
                break
        return ranked
