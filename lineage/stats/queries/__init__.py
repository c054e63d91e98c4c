"""
Aggregation Queries Package
----------------------------

Tree-scoped aggregation queries over the genealogy tables.

Every query class takes a session, a tree id and an optional logger.
Methods are wrapped by ``handle_db_errors`` (SQLAlchemy failures become
StorageFailure) and ``log_database_operation``.

Modules:
    - events: Earliest/latest events, event totals, month and year counts
    - individuals: Lifespans, oldest alive, ages at marriage and parenthood
    - families: Family sizes, grandchildren, childless families, age gaps
    - names: Surname and given-name frequencies
    - totals: Record totals, tree metadata, latest user
"""
from .base import TreeQueries
from .events import EventQueries
from .families import FamilyQueries, RankedFamily, SiblingGap
from .individuals import IndividualQueries, RankedIndividual
from .names import NameCount, NameQueries, collation_key
from .totals import TotalsQueries

__all__ = [
    "TreeQueries",
    "EventQueries",
    "FamilyQueries",
    "IndividualQueries",
    "NameQueries",
    "TotalsQueries",
    "RankedFamily",
    "RankedIndividual",
    "SiblingGap",
    "NameCount",
    "collation_key",
]
