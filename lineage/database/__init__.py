#!/usr/bin/env python3
"""
Lineage Database Package
------------------------
Storage collaborator of the statistics engine.

This package provides:
- ORM models of the genealogy tables (models)
- The LineageDB engine and session manager (manager)
- Shared decorators for query logging and error translation (decorators)
"""

from .manager import LineageDB
from lineage.core.exceptions import (
    DatabaseError,
    StorageFailure,
    ValidationError,
)

__all__ = [
    "LineageDB",
    "DatabaseError",
    "StorageFailure",
    "ValidationError",
]
