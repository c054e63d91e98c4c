#!/usr/bin/env python3
"""
base.py
-------
Common ground for the tree-scoped aggregation query classes.
"""
from typing import Optional

from sqlalchemy.orm import Query, Session

from lineage.core.logging_manager import LineageLogger


class TreeQueries:
    """
    Base class for aggregation queries over one tree.

    Attributes:
        session: SQLAlchemy session (a consistent snapshot for one computation)
        tree_id: Dataset identifier every query filters by
        logger: Optional logger used by the database decorators
    """

    def __init__(
        self, session: Session, tree_id: int, logger: Optional[LineageLogger] = None
    ) -> None:
        """
        Initialize the query helper.

        Args:
            session: SQLAlchemy session
            tree_id: Tree to aggregate over
            logger: Optional logger for query operations
        """
        self.session = session
        self.tree_id = tree_id
        self.logger = logger

    @staticmethod
    def _filter_sex(query: Query, column, sex: Optional[str]) -> Query:
        """Restrict a query to one sex; None or 'BOTH' keeps everyone."""
        if sex in ("M", "F", "U"):
            return query.filter(column == sex)
        return query

    @staticmethod
    def _filter_years(query: Query, column, year1: Optional[int], year2: Optional[int]) -> Query:
        """Restrict a query to a year range; a missing end leaves that side open."""
        if year1 is not None:
            query = query.filter(column >= year1)
        if year2 is not None:
            query = query.filter(column <= year2)
        return query
