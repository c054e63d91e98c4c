"""Tests for the query decorators."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from lineage.core.exceptions import StorageFailure
from lineage.core.logging_manager import LineageLogger
from lineage.database.decorators import handle_db_errors, log_database_operation


class Queries:
    """Minimal query holder with the attributes the decorators read."""

    def __init__(self, logger=None, error=None):
        self.logger = logger
        self.tree_id = 7
        self.error = error

    @handle_db_errors
    @log_database_operation("count_things")
    def count(self, value, limit=None):
        if self.error is not None:
            raise self.error
        return [value] * value


@pytest.fixture
def logger():
    mock_logger = MagicMock(spec=LineageLogger)
    mock_logger.current_tag = "topTenOldest"
    return mock_logger


class TestLogDatabaseOperation:
    """Tests for log_database_operation."""

    def test_start_logged_with_arguments(self, logger):
        """The query name, tree, tag and arguments are logged first."""
        Queries(logger).count(2, limit=5)
        message, details = logger.log_debug.call_args[0]
        assert message == "count_things"
        assert details["tree_id"] == 7
        assert details["tag"] == "topTenOldest"
        assert details["args"] == ["2", "limit=5"]

    def test_completion_logged_with_rows(self, logger):
        """Completion records the row count and duration."""
        assert Queries(logger).count(3) == [3, 3, 3]
        name, details = logger.log_operation.call_args[0]
        assert name == "count_things_completed"
        assert details["query"] == "count_things"
        assert details["rows"] == 3
        assert details["ms"] >= 0

    def test_without_logger(self):
        """A missing logger is skipped."""
        assert Queries().count(1) == [1]

    def test_failure_logged_and_reraised(self, logger):
        """Failures are logged with the query context and propagate."""
        with pytest.raises(KeyError):
            Queries(logger, KeyError("x")).count(1)
        logger.log_error.assert_called_once()
        context = logger.log_error.call_args[0][1]
        assert context["query"] == "count_things"
        assert context["tag"] == "topTenOldest"
        logger.log_operation.assert_not_called()


class TestHandleDbErrors:
    """Tests for handle_db_errors."""

    @pytest.mark.parametrize(
        "error",
        [
            IntegrityError("statement", {}, Exception("duplicate")),
            OperationalError("SELECT", {}, Exception("no such table")),
        ],
    )
    def test_sqlalchemy_errors(self, error):
        """SQLAlchemy errors become StorageFailure naming the query."""
        with pytest.raises(StorageFailure, match="count failed") as exc_info:
            Queries(error=error).count(1)
        assert exc_info.value.__cause__ is error

    def test_other_exceptions_propagate(self):
        """Non-SQLAlchemy exceptions pass through unchanged."""
        with pytest.raises(ValueError):
            Queries(error=ValueError("bad")).count(1)
