#!/usr/bin/env python3
"""
renderer.py
-----------
Jinja2 template engine for statistics HTML fragments.

Configures the Jinja2 environment with autoescaping, template loading and
the output-shape adapters used by the statistics facade. Supports both
filesystem-based templates (production) and dict-based templates (testing).

Key Features:
    - One aggregation, several shapes: list, inline and table
    - Support for DictLoader (tests) and FileSystemLoader (production)
    - Fragments are returned without surrounding whitespace

Usage:
    from lineage.stats.renderer import StatsRenderer, OutputShape

    renderer = StatsRenderer()
    html = renderer.top_list(items, OutputShape.LIST)

    # Testing: supply templates as dict
    renderer = StatsRenderer(templates={"test.jinja2": "Hello {{ name }}"})
    content = renderer.render("test.jinja2", {"name": "World"})

Dependencies:
    - jinja2>=3.1.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# --- Third-party imports ---
from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader

# --- Local imports ---
from lineage.core.paths import STATS_TEMPLATES_DIR


class OutputShape(str, Enum):
    """
    How a ranked list is rendered.
    - LIST: <ul><li>..</li></ul>
    - INLINE: entries joined by "; "
    - TABLE: two-column <table>
    """

    LIST = "list"
    INLINE = "inline"
    TABLE = "table"


@dataclass(frozen=True)
class ListItem:
    """
    One rendered row of a ranked list.

    Attributes:
        name: Display name (already redacted when private)
        url: Record link, None for redacted or unlinked rows
        detail: Secondary text (age, count, date)
    """

    name: str
    url: Optional[str] = None
    detail: str = ""


class StatsRenderer:
    """
    Jinja2-based renderer for statistics fragments.

    Attributes:
        env: Configured Jinja2 Environment instance
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the renderer.

        Provide either a filesystem templates directory or a dict of
        template strings. If neither is provided, defaults to the
        package's statistics templates directory.

        Args:
            templates_dir: Path to templates directory (FileSystemLoader)
            templates: Dict of template_name -> template_string (DictLoader)

        Raises:
            ValueError: If both templates_dir and templates are provided
        """
        if templates_dir and templates:
            raise ValueError(
                "Provide either templates_dir or templates, not both"
            )

        loader: BaseLoader
        if templates is not None:
            loader = DictLoader(templates)
        elif templates_dir is not None:
            loader = FileSystemLoader(str(templates_dir))
        else:
            loader = FileSystemLoader(str(STATS_TEMPLATES_DIR))

        self.env = Environment(
            loader=loader,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self,
        template_name: str,
        context: Dict[str, Any],
    ) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Template path relative to templates root
            context: Template variables

        Returns:
            Rendered HTML fragment, stripped of surrounding whitespace
        """
        template = self.env.get_template(template_name)
        return template.render(**context).strip()

    def link(self, name: str, url: Optional[str]) -> str:
        return self.render("record_link.jinja2", {"name": name, "url": url})

    def record(self, name: str, url: Optional[str], detail: str = "") -> str:
        return self.render(
            "record_full.jinja2", {"name": name, "url": url, "detail": detail}
        )

    def top_list(
        self,
        items: Sequence[ListItem],
        shape: OutputShape,
        headers: Sequence[str] = ("", ""),
        css_class: str = "list-table",
    ) -> str:
        """
        Render ranked rows in the requested shape.

        Args:
            items: Rows in rank order
            shape: LIST, INLINE or TABLE
            headers: Column headers for TABLE
            css_class: Table class for TABLE

        Returns:
            HTML fragment
        """
        rows: List[ListItem] = list(items)
        return self.render(
            "top_list.jinja2",
            {
                "items": rows,
                "shape": OutputShape(shape).value,
                "headers": list(headers),
                "css_class": css_class,
                "separator": "; ",
            },
        )
