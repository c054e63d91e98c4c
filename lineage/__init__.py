"""
Lineage
=======

Genealogy statistics and tag substitution.

This package computes statistics over GEDCOM-derived relational tables
(individuals, families, dated facts, names) and substitutes embedded
``#tag:arg1:arg2#`` tokens in user-authored text with display-ready values.

Main Components:
    - stats: Date arithmetic, aggregation queries, chart series, the tag
      registry and the macro interpreter
    - database: SQLAlchemy ORM models and the LineageDB manager
    - core: Logging, validation, paths and exceptions
    - cli: Administrative command-line interface

Primary Interfaces:
    - lineage.database.manager.LineageDB: Storage and entry points
    - lineage.stats.facade.Stats: Programmatic access to each statistic
    - lineage.stats.interpreter.resolve_tags: Tag substitution

Example Usage:
    >>> from lineage import LineageDB
    >>> db = LineageDB(db_path=DB_PATH, log_dir=LOG_DIR)
    >>> db.resolve_tags("Earliest birth: #firstBirthYear#", tree_id=1)
"""

__version__ = "1.0.0"
__author__ = "Lineage Project"

# Expose primary interfaces for convenience
from lineage.database.manager import LineageDB
from lineage.core.paths import CONFIG_PATH, DATA_DIR, DB_PATH, LOG_DIR

__all__ = [
    "LineageDB",
    "CONFIG_PATH",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
]
