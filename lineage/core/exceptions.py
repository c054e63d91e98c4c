#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Lineage project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all database-related errors
    │   └── StorageFailure - The data source failed mid-computation
    ├── ValidationError - Data validation failures
    │   └── MalformedArgumentError - A tag argument could not be parsed
    └── StatsError - Base for statistics engine errors
        ├── UnknownTagError - Tag name is not registered
        └── TagComputationError - A macro blob could not be resolved

Usage:
    from lineage.core.exceptions import DatabaseError, TagComputationError

    try:
        html = db.resolve_tags(text, tree_id=1)
    except TagComputationError as e:
        logger.error(f"Statistics unavailable: {e}")
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other database problems.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
    """

    pass


class StorageFailure(DatabaseError):
    """
    Exception for failures of the relational data source.

    Raised by query helpers when SQLAlchemy reports an error (lost
    connection, missing table, malformed schema). Statistics callers
    treat it as fatal for the whole computation.

    Examples:
        >>> raise StorageFailure("count_records failed: no such table: dates")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Invalid date formats
    - Missing required fields
    - Unknown configuration keys

    Examples:
        >>> raise ValidationError("Required field 'xref' missing or empty")
    """

    pass


class MalformedArgumentError(ValidationError):
    """
    Exception for tag arguments that cannot be coerced.

    Only raised by strict coercion helpers; tag handlers use the lenient
    variants, which fall back to documented defaults instead.

    Examples:
        >>> raise MalformedArgumentError("Expected an integer, got 'ten'")
    """

    pass


class StatsError(Exception):
    """Base exception for the statistics engine."""

    pass


class UnknownTagError(StatsError):
    """
    Exception for tag names missing from the registry.

    Raised by ``TagResolver.require``. The macro interpreter never raises
    it; unknown tags stay verbatim in the output.
    """

    pass


class TagComputationError(StatsError):
    """
    Exception for a macro blob that could not be resolved.

    Wraps the underlying ``DatabaseError``. When it is raised no partially
    substituted text is returned to the caller.
    """

    pass
