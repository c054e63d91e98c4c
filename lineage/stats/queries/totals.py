#!/usr/bin/env python3
"""
totals.py
---------
Record totals, tree metadata and the latest registered user.
"""
from typing import Optional

from lineage.database.decorators import handle_db_errors, log_database_operation
from lineage.database.models import Family, Individual, Note, Repository, Source, Tree, User
from .base import TreeQueries


class TotalsQueries(TreeQueries):
    """Counts of whole record types and tree-level lookups."""

    RECORD_MODELS = {
        "individuals": Individual,
        "families": Family,
        "sources": Source,
        "notes": Note,
        "repositories": Repository,
    }

    @handle_db_errors
    @log_database_operation("count_records")
    def count(self, kind: str) -> int:
        """
        Count records of one kind.

        Args:
            kind: individuals, families, sources, notes or repositories

        Raises:
            KeyError: For an unknown kind
        """
        model = self.RECORD_MODELS[kind]
        return self.session.query(model).filter(model.tree_id == self.tree_id).count()

    def count_all(self) -> int:
        """Individuals, families, sources, notes and repositories together."""
        return sum(self.count(kind) for kind in self.RECORD_MODELS)

    @handle_db_errors
    @log_database_operation("get_tree")
    def tree(self) -> Optional[Tree]:
        return self.session.get(Tree, self.tree_id)

    @handle_db_errors
    @log_database_operation("latest_user")
    def latest_user(self) -> Optional[User]:
        """Most recently registered account (highest id on equal dates)."""
        return (
            self.session.query(User)
            .order_by(User.registered_at.desc(), User.id.desc())
            .first()
        )
