#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for tag resolution and the aggregation queries behind it.

Every record of one component goes to ``<component>.log``; errors are
copied to ``errors.log`` with their traceback. While a tag is being
resolved, the logger remembers it so the query records written on its
behalf can name the tag that asked for them.

Usage:
    logger = LineageLogger(LOG_DIR, "stats")
    with logger.tag_scope("topTenOldest", ["5"]):
        ...  # queries logged here carry tag=topTenOldest
    logger.log_tag("topTenOldest", ["5"], "resolved")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

# --- Third party imports ---
import click


# Outcome of one tag substitution -> level it is logged at
TAG_OUTCOMES = {
    "resolved": logging.DEBUG,
    "unknown": logging.DEBUG,
    "fallback": logging.WARNING,
    "failed": logging.WARNING,
}

RECORD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _dump(details: Dict[str, Any]) -> str:
    return json.dumps(details, default=str, sort_keys=True)


def format_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> str:
    """
    One-line message for a failed command.

    Examples:
        >>> format_error(UnknownTagError("Unknown tag: foo"))
        '❌ UnknownTagError: Unknown tag: foo'
        >>> format_error(StorageFailure("no such table"), {"tag": "firstBirth"})
        '❌ StorageFailure: no such table (tag firstBirth)'
    """
    message = f"❌ {type(error).__name__}: {error}"
    tag = (context or {}).get("tag")
    if tag and tag not in str(error):
        message += f" (tag {tag})"
    return message


class LineageLogger:
    """
    Rotating file logger for one component ('database', 'stats', ...).

    Attributes:
        log_dir: Directory for log files
        component_name: Logger name suffix and log file stem
        logger: Underlying ``logging.Logger``
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "stats",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._tag: Optional[Dict[str, Any]] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger(f"lineage.{self.component_name}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(RECORD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        for file_name, level in (
            (f"{self.component_name}.log", logging.DEBUG),
            ("errors.log", logging.ERROR),
        ):
            handler = RotatingFileHandler(
                self.log_dir / file_name,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    # ---- Tag context ----
    @property
    def current_tag(self) -> Optional[str]:
        """Name of the tag being resolved, if any."""
        return self._tag["tag"] if self._tag else None

    @contextmanager
    def tag_scope(self, tag: str, params: List[str]) -> Iterator[None]:
        """Attach a tag to every record written inside the block."""
        previous = self._tag
        self._tag = {"tag": tag, "params": list(params)}
        try:
            yield
        finally:
            self._tag = previous

    def _with_tag(self, details: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = dict(self._tag or {})
        merged.update(details or {})
        return merged

    # ---- Records ----
    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Completed query or database operation."""
        self.logger.info(f"{operation}: {_dump(self._with_tag(details))}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        merged = self._with_tag(details)
        self.logger.debug(f"{message}: {_dump(merged)}" if merged else message)

    def log_tag(self, tag: str, params: List[str], outcome: str) -> None:
        """
        Record the outcome of one tag substitution.

        Args:
            tag: Tag name as written in the text
            params: Raw string arguments
            outcome: One of TAG_OUTCOMES
        """
        level = TAG_OUTCOMES.get(outcome, logging.INFO)
        self.logger.log(level, f"#{tag}# {outcome}: {_dump({'params': list(params)})}")

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Error with its context; the traceback is kept when one exists."""
        exc_info = (type(error), error, error.__traceback__) if error.__traceback__ else None
        self.logger.error(
            f"{type(error).__name__}: {error} {_dump(self._with_tag(context))}",
            exc_info=exc_info,
        )


class NullLogger:
    """Stand-in with the LineageLogger interface that records nothing."""

    current_tag = None

    @contextmanager
    def tag_scope(self, tag: str, params: List[str]) -> Iterator[None]:
        yield

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_tag(self, tag: str, params: List[str], outcome: str) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[LineageLogger]) -> LineageLogger:
    """
    Return the provided logger or the shared NullLogger.

    Usage:
        safe_logger(self.logger).log_tag(name, params, "unknown")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    command: str,
    context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed ``tag``/``embed``/``init`` command and exit.

    The error goes to the context logger with the command, tree and tag;
    the terminal gets a one-line message, followed by the traceback
    under ``--verbose``.

    Args:
        ctx: Click context holding 'logger' and 'verbose'
        error: Exception raised by the command
        command: CLI command name
        context: Tree and tag the command was working on
        exit_code: Process exit code
    """
    details = {"command": command, **(context or {})}
    safe_logger(ctx.obj.get("logger")).log_error(error, details)

    click.echo(format_error(error, details), err=True)
    if ctx.obj.get("verbose") and error.__traceback__ is not None:
        click.echo("".join(traceback.format_tb(error.__traceback__)), err=True)
    sys.exit(exit_code)
