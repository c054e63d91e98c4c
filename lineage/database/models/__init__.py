"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Lineage genealogy database.

This package provides a modular organization of database models:
- base: Declarative base
- associations: Many-to-many relationship tables
- enums: Sex enumeration and GEDCOM fact groups
- genealogy: Tree, Individual, Family, DateFact, Name and supporting records

Usage:
    from lineage.database.models import Individual, Family, DateFact
"""
# Base class
from .base import Base

# Enumerations
from .enums import (
    ALL_VITAL_EVENTS,
    BIRTH_EVENTS,
    DEATH_EVENTS,
    DIVORCE_EVENTS,
    EVENT_LABELS,
    MARRIAGE_END_EVENTS,
    MARRIAGE_EVENTS,
    NON_EVENTS,
    Sex,
)

# Association tables
from .associations import family_children, family_sources, individual_sources

# Genealogy models
from .genealogy import (
    UNKNOWN_NAME,
    DateFact,
    Family,
    Individual,
    Name,
    Note,
    Repository,
    Source,
    Tree,
    User,
)

__all__ = [
    # Base
    "Base",
    # Enums
    "Sex",
    "ALL_VITAL_EVENTS",
    "BIRTH_EVENTS",
    "DEATH_EVENTS",
    "DIVORCE_EVENTS",
    "EVENT_LABELS",
    "MARRIAGE_END_EVENTS",
    "MARRIAGE_EVENTS",
    "NON_EVENTS",
    # Associations
    "family_children",
    "family_sources",
    "individual_sources",
    # Models
    "UNKNOWN_NAME",
    "Tree",
    "Individual",
    "Family",
    "DateFact",
    "Name",
    "Source",
    "Note",
    "Repository",
    "User",
]
