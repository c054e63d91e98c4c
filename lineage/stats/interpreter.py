#!/usr/bin/env python3
"""
interpreter.py
--------------------
Macro substitution for ``#tag:arg1:arg2#`` tokens.

The interpreter scans user-authored text left to right. Each ``#...#``
candidate is split on ':' into a tag name and raw string arguments, the
name is resolved against the whitelist, and the token is replaced by the
handler's output. Substituted values are never rescanned.

Failure handling:
    - Unknown or denied tag: the candidate stays verbatim and scanning
      resumes at its closing '#', which may open the next token
    - ValidationError / ValueError in a handler: the token becomes ''
    - DatabaseError in a handler: the whole call fails with
      TagComputationError and no partial text is returned
    - Any other error in a handler is logged and the token stays verbatim
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, List, Optional

# --- Local imports ---
from lineage.core.exceptions import DatabaseError, TagComputationError, ValidationError
from lineage.core.logging_manager import LineageLogger, safe_logger
from .arguments import TagArgs
from .registry import TagResolver

if TYPE_CHECKING:
    from .facade import Stats

DELIMITER = "#"
SEPARATOR = ":"


class MacroInterpreter:
    """
    Resolve embedded tags against one Stats instance.

    Attributes:
        stats: Statistics facade the handlers run against
        resolver: Tag whitelist
        logger: Optional logger (defaults to the stats context's logger)
    """

    def __init__(
        self,
        stats: "Stats",
        resolver: Optional[TagResolver] = None,
        logger: Optional[LineageLogger] = None,
    ) -> None:
        self.stats = stats
        self.resolver = resolver or TagResolver()
        self.logger = logger or stats.context.logger

    def resolve(self, text: str) -> str:
        """
        Substitute every resolvable tag in a text blob.

        Args:
            text: User-authored text

        Returns:
            Text with tags replaced by their values

        Raises:
            TagComputationError: If the data source failed during any tag
        """
        if DELIMITER not in text:
            return text

        output: List[str] = []
        position = 0
        while True:
            start = text.find(DELIMITER, position)
            end = text.find(DELIMITER, start + 1) if start != -1 else -1
            if end == -1:
                output.append(text[position:])
                break

            output.append(text[position:start])
            candidate = text[start + 1:end]
            name, *params = candidate.split(SEPARATOR)
            handler = self.resolver.resolve(name)
            if handler is None:
                safe_logger(self.logger).log_tag(name, params, "unknown")
                output.append(DELIMITER + candidate)
                position = end
                continue

            value = self._invoke(name, handler, params)
            output.append(DELIMITER + candidate + DELIMITER if value is None else value)
            position = end + 1

        return "".join(output)

    def _invoke(self, name: str, handler, params: List[str]) -> Optional[str]:
        """Run one handler; None keeps the token as written."""
        logger = safe_logger(self.logger)
        try:
            with logger.tag_scope(name, params):
                value = handler(self.stats, TagArgs(params))
        except DatabaseError as e:
            logger.log_error(e, {"operation": "resolve_tags", "tag": name, "params": params})
            raise TagComputationError(f"Tag '{name}' could not be computed: {e}") from e
        except (ValidationError, ValueError) as e:
            logger.log_tag(name, params, "fallback")
            logger.log_debug(f"Tag '{name}' fell back to empty output", {"error": str(e)})
            return ""
        except Exception as e:
            logger.log_error(e, {"operation": "resolve_tags", "tag": name, "params": params})
            logger.log_tag(name, params, "failed")
            return None
        logger.log_tag(name, params, "resolved")
        return value


def resolve_tags(text: str, stats: "Stats", resolver: Optional[TagResolver] = None) -> str:
    """
    Resolve the tags of a text blob.

    Args:
        text: User-authored text with ``#tag:args#`` tokens
        stats: Statistics facade for the tree and viewer
        resolver: Optional whitelist override

    Returns:
        Fully resolved text

    Raises:
        TagComputationError: If the data source failed
    """
    return MacroInterpreter(stats, resolver).resolve(text)
