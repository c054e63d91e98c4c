"""
Association Tables
-------------------

Many-to-many relationship tables for the Lineage database.

This module contains all association tables that connect:
- Families with their children
- Individuals and families with the sources citing them

These are pure association tables with no additional metadata.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Integer, Table

# --- Local imports ---
from .base import Base

family_children = Table(
    "family_children",
    Base.metadata,
    Column(
        "family_id",
        Integer,
        ForeignKey("families.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "individual_id",
        Integer,
        ForeignKey("individuals.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


individual_sources = Table(
    "individual_sources",
    Base.metadata,
    Column(
        "individual_id",
        Integer,
        ForeignKey("individuals.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("source_id", Integer, ForeignKey("sources.id", ondelete="CASCADE"), primary_key=True),
)


family_sources = Table(
    "family_sources",
    Base.metadata,
    Column(
        "family_id",
        Integer,
        ForeignKey("families.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("source_id", Integer, ForeignKey("sources.id", ondelete="CASCADE"), primary_key=True),
)
