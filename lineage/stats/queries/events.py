#!/usr/bin/env python3
"""
events.py
---------
Aggregation queries over dated facts.

Earliest/latest events, event totals, and per-year, per-month and
first-child distributions. Rows whose comparable date is the unknown
sentinel are filtered explicitly wherever dates are ranked.
"""
from typing import Dict, Optional, Sequence

from sqlalchemy import func, or_

from lineage.database.decorators import handle_db_errors, log_database_operation
from lineage.database.models import (
    ALL_VITAL_EVENTS,
    NON_EVENTS,
    DateFact,
    Individual,
    Sex,
    family_children,
)
from lineage.stats.dates import CALENDARS, MONTHS
from .base import TreeQueries


def _empty_months() -> Dict[str, int]:
    return {month: 0 for month in MONTHS}


class EventQueries(TreeQueries):
    """Queries over the dates table of one tree."""

    def _dates(self):
        return self.session.query(DateFact).filter(DateFact.tree_id == self.tree_id)

    @handle_db_errors
    @log_database_operation("extremal_event")
    def extremal_event(self, facts: Sequence[str], latest: bool = False) -> Optional[DateFact]:
        """
        Earliest or latest dated fact of the given types.

        Ties on the comparable date are broken by storage order, which
        is stable but otherwise undefined.

        Args:
            facts: GEDCOM tags to consider
            latest: Rank descending instead of ascending

        Returns:
            The ranked fact, or None when no dated fact exists
        """
        order = DateFact.julian_day1.desc() if latest else DateFact.julian_day1.asc()
        return (
            self._dates()
            .filter(
                DateFact.fact.in_(facts),
                DateFact.julian_day1 != 0,
                or_(DateFact.individual_id.isnot(None), DateFact.family_id.isnot(None)),
            )
            .order_by(order)
            .first()
        )

    @handle_db_errors
    @log_database_operation("count_events")
    def count_events(
        self, include: Sequence[str] = (), exclude: Sequence[str] = ()
    ) -> int:
        """
        Count facts, dated or not.

        Args:
            include: Only these tags (all when empty)
            exclude: Never these tags; HEAD and CHAN are always excluded
        """
        query = self._dates().filter(DateFact.fact.notin_(list(NON_EVENTS) + list(exclude)))
        if include:
            query = query.filter(DateFact.fact.in_(list(include)))
        return query.count()

    @handle_db_errors
    @log_database_operation("count_other_events")
    def count_other_events(self) -> int:
        """Count facts outside the birth, death, marriage and divorce groups."""
        return (
            self._dates()
            .filter(DateFact.fact.notin_(list(ALL_VITAL_EVENTS) + list(NON_EVENTS)))
            .count()
        )

    @handle_db_errors
    @log_database_operation("year_counts")
    def year_counts(
        self,
        facts: Sequence[str],
        year1: Optional[int] = None,
        year2: Optional[int] = None,
    ) -> Dict[int, int]:
        """
        Number of facts per year, for Gregorian and Julian dates.

        Returns:
            year -> count
        """
        query = self.session.query(DateFact.year, func.count(DateFact.id)).filter(
            DateFact.tree_id == self.tree_id,
            DateFact.fact.in_(list(facts)),
            DateFact.calendar.in_(CALENDARS),
        )
        query = self._filter_years(query, DateFact.year, year1, year2)
        return {year: count for year, count in query.group_by(DateFact.year).all()}

    @handle_db_errors
    @log_database_operation("month_counts")
    def month_counts(
        self,
        fact: str = "BIRT",
        split_by_sex: bool = False,
        year1: Optional[int] = None,
        year2: Optional[int] = None,
    ):
        """
        Distribution of individuals' facts over the twelve months.

        Months without facts are filled with zero.

        Returns:
            month -> count, or sex -> (month -> count) when split by sex
        """
        query = (
            self.session.query(DateFact.month, Individual.sex, func.count(DateFact.id))
            .join(Individual, Individual.id == DateFact.individual_id)
            .filter(
                DateFact.tree_id == self.tree_id,
                DateFact.fact == fact,
                DateFact.month.in_(MONTHS),
            )
        )
        query = self._filter_years(query, DateFact.year, year1, year2)
        rows = query.group_by(DateFact.month, Individual.sex).all()
        return self._fill_months(rows, split_by_sex)

    @handle_db_errors
    @log_database_operation("first_child_month_counts")
    def first_child_month_counts(
        self,
        split_by_sex: bool = False,
        year1: Optional[int] = None,
        year2: Optional[int] = None,
    ):
        """
        Birth month of the first child of each family.

        The first child is the one with the earliest birth; children
        without a known birth month are ignored.

        Returns:
            month -> count, or sex -> (month -> count) when split by sex
        """
        query = (
            self.session.query(
                family_children.c.family_id,
                Individual.sex,
                DateFact.month,
            )
            .join(Individual, Individual.id == family_children.c.individual_id)
            .join(DateFact, DateFact.individual_id == Individual.id)
            .filter(
                DateFact.tree_id == self.tree_id,
                DateFact.fact == "BIRT",
                DateFact.julian_day1 != 0,
                DateFact.month.in_(MONTHS),
            )
        )
        query = self._filter_years(query, DateFact.year, year1, year2)

        counts: Dict[tuple, int] = {}
        seen = set()
        for family_id, sex, month in query.order_by(DateFact.julian_day2, DateFact.id):
            if family_id in seen:
                continue
            seen.add(family_id)
            counts[(month, sex)] = counts.get((month, sex), 0) + 1
        rows = [(month, sex, count) for (month, sex), count in counts.items()]
        return self._fill_months(rows, split_by_sex)

    @staticmethod
    def _fill_months(rows, split_by_sex: bool):
        if split_by_sex:
            result = {sex: _empty_months() for sex in Sex.choices()}
            for month, sex, count in rows:
                result[sex][month] += count
            return result
        months = _empty_months()
        for month, _sex, count in rows:
            months[month] += count
        return months

    @handle_db_errors
    @log_database_operation("latest_fact")
    def latest_fact(self, fact: str) -> Optional[DateFact]:
        """Dated fact of the given type with the latest date (e.g. CHAN)."""
        return (
            self._dates()
            .filter(DateFact.fact == fact, DateFact.julian_day1 != 0)
            .order_by(DateFact.julian_day1.desc())
            .first()
        )

    @handle_db_errors
    @log_database_operation("tree_fact")
    def tree_fact(self, fact: str) -> Optional[DateFact]:
        """Tree-level fact without an owning record (e.g. HEAD)."""
        return (
            self._dates()
            .filter(
                DateFact.fact == fact,
                DateFact.individual_id.is_(None),
                DateFact.family_id.is_(None),
            )
            .first()
        )
