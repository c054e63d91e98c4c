#!/usr/bin/env python3
"""
individuals.py
--------------
Aggregation queries over individuals.

Lifespans, oldest living individuals, and ages of spouses at marriage and
of parents at a child's birth. Spans are computed in SQL from the
comparable date columns; pairs with an unknown date or a non-positive
span never reach the ranking.
"""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import asc, desc, distinct, exists, func
from sqlalchemy.orm import aliased

from lineage.database.decorators import handle_db_errors, log_database_operation
from lineage.database.models import (
    DEATH_EVENTS,
    DateFact,
    Family,
    Individual,
    family_children,
    individual_sources,
)
from lineage.stats.dates import age_in_days
from .base import TreeQueries


@dataclass(frozen=True)
class RankedIndividual:
    """An individual with the span (in days) it was ranked by."""

    individual: Individual
    days: int
    family: Optional[Family] = None


class IndividualQueries(TreeQueries):
    """Queries over the individuals of one tree."""

    # ---- Totals ----
    @handle_db_errors
    @log_database_operation("count_individuals")
    def count(self, sex: Optional[str] = None) -> int:
        query = self.session.query(Individual).filter(Individual.tree_id == self.tree_id)
        return self._filter_sex(query, Individual.sex, sex).count()

    @handle_db_errors
    @log_database_operation("count_deceased")
    def count_deceased(self) -> int:
        """Individuals with a death, burial or cremation fact."""
        return (
            self.session.query(func.count(distinct(DateFact.individual_id)))
            .filter(
                DateFact.tree_id == self.tree_id,
                DateFact.individual_id.isnot(None),
                DateFact.fact.in_(DEATH_EVENTS),
            )
            .scalar()
            or 0
        )

    @handle_db_errors
    @log_database_operation("count_individuals_with_sources")
    def count_with_sources(self) -> int:
        return (
            self.session.query(func.count(distinct(individual_sources.c.individual_id)))
            .join(Individual, Individual.id == individual_sources.c.individual_id)
            .filter(Individual.tree_id == self.tree_id)
            .scalar()
            or 0
        )

    @handle_db_errors
    @log_database_operation("count_married")
    def count_married(self, sex: str) -> int:
        """Distinct husbands ('M') or wives ('F') of families with a marriage fact."""
        spouse = Family.wife_id if sex == "F" else Family.husband_id
        married = exists().where(DateFact.family_id == Family.id, DateFact.fact == "MARR")
        return (
            self.session.query(func.count(distinct(spouse)))
            .filter(Family.tree_id == self.tree_id, spouse.isnot(None), married)
            .scalar()
            or 0
        )

    # ---- Lifespans ----
    def _lifespan_filters(self, birth, death):
        return (
            Individual.tree_id == self.tree_id,
            birth.individual_id == Individual.id,
            death.individual_id == Individual.id,
            birth.fact == "BIRT",
            death.fact == "DEAT",
            birth.julian_day1 != 0,
            death.julian_day1 != 0,
            death.julian_day1 > birth.julian_day2,
        )

    @handle_db_errors
    @log_database_operation("longest_lived")
    def longest_lived(self, sex: Optional[str] = None, limit: int = 1) -> List[RankedIndividual]:
        """
        Individuals with the longest lifespans.

        Lifespan is death.julian_day2 - birth.julian_day1, only where the
        death lies after the birth.

        Args:
            sex: 'M', 'F' or None for both
            limit: Number of rows

        Returns:
            Ranked individuals, longest first (ties in storage order)
        """
        birth = aliased(DateFact)
        death = aliased(DateFact)
        span = func.max(death.julian_day2 - birth.julian_day1).label("days")
        query = self.session.query(Individual, span).filter(
            *self._lifespan_filters(birth, death)
        )
        rows = (
            self._filter_sex(query, Individual.sex, sex)
            .group_by(Individual.id)
            .order_by(desc("days"))
            .limit(limit)
            .all()
        )
        return [RankedIndividual(individual, int(days)) for individual, days in rows]

    @handle_db_errors
    @log_database_operation("average_lifespan")
    def average_lifespan(self, sex: Optional[str] = None) -> float:
        """Average lifespan in days, 0 when no individual qualifies."""
        birth = aliased(DateFact)
        death = aliased(DateFact)
        query = self.session.query(
            func.avg(death.julian_day2 - birth.julian_day1)
        ).filter(*self._lifespan_filters(birth, death))
        return float(self._filter_sex(query, Individual.sex, sex).scalar() or 0)

    @handle_db_errors
    @log_database_operation("oldest_alive")
    def oldest_alive(
        self, reference_jd: int, sex: Optional[str] = None, limit: int = 10
    ) -> List[RankedIndividual]:
        """
        Oldest individuals without any death fact.

        Args:
            reference_jd: Julian day the ages are measured against
            sex: 'M', 'F' or None for both
            limit: Number of rows

        Returns:
            Ranked individuals, earliest birth first
        """
        birth = aliased(DateFact)
        death = aliased(DateFact)
        has_death = (
            exists()
            .where(death.individual_id == Individual.id, death.fact.in_(DEATH_EVENTS))
        )
        query = (
            self.session.query(Individual, func.min(birth.julian_day1).label("born"))
            .join(birth, birth.individual_id == Individual.id)
            .filter(
                Individual.tree_id == self.tree_id,
                birth.fact == "BIRT",
                birth.julian_day1 != 0,
                ~has_death,
            )
        )
        rows = (
            self._filter_sex(query, Individual.sex, sex)
            .group_by(Individual.id)
            .order_by(asc("born"))
            .limit(limit)
            .all()
        )
        return [
            RankedIndividual(individual, age_in_days(reference_jd, int(born)))
            for individual, born in rows
        ]

    # ---- Ages at family events ----
    @handle_db_errors
    @log_database_operation("age_at_marriage")
    def age_at_marriage(
        self, sex: str, youngest: bool, limit: int = 1
    ) -> List[RankedIndividual]:
        """
        Husbands ('M') or wives ('F') ranked by their age at marriage.

        Age is marriage.julian_day2 - birth.julian_day1 and must be positive.
        """
        birth = aliased(DateFact)
        married = aliased(DateFact)
        spouse = Family.wife_id if sex == "F" else Family.husband_id
        span = (married.julian_day2 - birth.julian_day1).label("days")
        rows = (
            self.session.query(Family, Individual, span)
            .select_from(Family)
            .join(Individual, Individual.id == spouse)
            .join(married, married.family_id == Family.id)
            .join(birth, birth.individual_id == Individual.id)
            .filter(
                Family.tree_id == self.tree_id,
                Individual.sex == sex,
                married.fact == "MARR",
                birth.fact == "BIRT",
                birth.julian_day1 != 0,
                married.julian_day1 != 0,
                married.julian_day2 > birth.julian_day1,
            )
            .order_by(asc("days") if youngest else desc("days"))
            .limit(limit)
            .all()
        )
        return [
            RankedIndividual(individual, int(days), family)
            for family, individual, days in rows
        ]

    @handle_db_errors
    @log_database_operation("age_at_child_birth")
    def age_at_child_birth(
        self, sex: str, youngest: bool, limit: int = 1
    ) -> List[RankedIndividual]:
        """
        Fathers ('M') or mothers ('F') ranked by their age at a child's birth.

        Age is child_birth.julian_day2 - parent_birth.julian_day1 and must
        be positive.
        """
        birth = aliased(DateFact)
        child_birth = aliased(DateFact)
        parent = Family.wife_id if sex == "F" else Family.husband_id
        span = (child_birth.julian_day2 - birth.julian_day1).label("days")
        rows = (
            self.session.query(Family, Individual, span)
            .select_from(Family)
            .join(Individual, Individual.id == parent)
            .join(birth, birth.individual_id == Individual.id)
            .join(family_children, family_children.c.family_id == Family.id)
            .join(child_birth, child_birth.individual_id == family_children.c.individual_id)
            .filter(
                Family.tree_id == self.tree_id,
                birth.fact == "BIRT",
                child_birth.fact == "BIRT",
                birth.julian_day1 != 0,
                child_birth.julian_day1 != 0,
                child_birth.julian_day2 > birth.julian_day1,
            )
            .order_by(asc("days") if youngest else desc("days"))
            .limit(limit)
            .all()
        )
        return [
            RankedIndividual(individual, int(days), family)
            for family, individual, days in rows
        ]
