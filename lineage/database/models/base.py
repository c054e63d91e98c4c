"""
Base Classes
------------

Foundational ORM class for the Lineage database.

Classes:
    - Base: Declarative base for all SQLAlchemy models

Every genealogy table carries a ``tree_id`` column; the statistics engine
always filters by it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation.
    """

    pass
