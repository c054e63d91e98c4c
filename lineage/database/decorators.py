#!/usr/bin/env python3
"""
decorators.py
--------------------
Decorators for the tree-scoped aggregation queries.

Query classes carry ``tree_id`` and an optional ``logger``. Each query is
logged under its name together with the tree, the tag being resolved when
there is one, the size of its result and how long it ran.
"""
import time
from functools import wraps
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from lineage.core.exceptions import StorageFailure


def _result_size(result: Any) -> Optional[int]:
    if isinstance(result, (list, tuple, dict)):
        return len(result)
    if result is None:
        return 0
    return None


def log_database_operation(query_name: str):
    """
    Log one aggregation query.

    Records ``<query_name>`` at debug level before it runs, then
    ``<query_name>_completed`` with the row count and duration, or the
    error with the same context when it fails.

    Args:
        query_name: Name the query is logged under
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", None)
            if logger is None:
                return function(self, *args, **kwargs)

            context = {
                "query": query_name,
                "tree_id": getattr(self, "tree_id", None),
                "tag": logger.current_tag,
            }
            arguments = [repr(arg) for arg in args]
            arguments += [f"{key}={value!r}" for key, value in kwargs.items()]
            logger.log_debug(query_name, {**context, "args": arguments})

            started = time.perf_counter()
            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                context["ms"] = round((time.perf_counter() - started) * 1000, 2)
                logger.log_error(e, context)
                raise

            context["ms"] = round((time.perf_counter() - started) * 1000, 2)
            context["rows"] = _result_size(result)
            logger.log_operation(f"{query_name}_completed", context)
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """Raise StorageFailure, naming the query, for any SQLAlchemy error."""

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except SQLAlchemyError as e:
            raise StorageFailure(f"{function.__name__} failed: {e}") from e

    return wrapper
