#!/usr/bin/env python3
"""
config.py
--------------------
Statistics configuration.

StatsConfig holds the tunable defaults of the statistics engine. It can be
loaded from a YAML mapping; unknown keys are rejected so that typos do not
silently fall back to defaults.

Example lineage.yaml:
    default_top_n: 5
    max_alive_age: 110
    record_url: "/genealogy/{tree}/{kind}/{xref}"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from lineage.core.exceptions import ValidationError
from lineage.core.paths import CONFIG_PATH
from lineage.core.validators import DataValidator


@dataclass(frozen=True)
class StatsConfig:
    """
    Tunable defaults of the statistics engine.

    Attributes:
        chart_max: Upper bound of encoded chart values
        default_top_n: Number of rows of top lists when no count is given
        max_alive_age: Years after birth at which an undated individual counts as dead
        default_locale: Locale used when the caller gives none
        small_chart_size: Default size (``WxH``) of pie charts
        large_chart_size: Default size of bar charts
        color_from / color_to: Gradient end points
        color_female / color_male / color_unknown: Sex chart colours
        color_living / color_dead: Mortality chart colours
        chart_base_url: Chart image service
        record_url: Pattern for record links, with ``tree``, ``kind`` and ``xref``
    """

    chart_max: int = 4095
    default_top_n: int = 10
    max_alive_age: int = 120
    default_locale: str = "en"
    small_chart_size: str = "440x125"
    large_chart_size: str = "900x200"
    color_from: str = "ffffff"
    color_to: str = "84beff"
    color_female: str = "ffd1dc"
    color_male: str = "84beff"
    color_unknown: str = "777777"
    color_living: str = "ffffff"
    color_dead: str = "cccccc"
    chart_base_url: str = "https://chart.googleapis.com/chart"
    record_url: str = "/tree/{tree}/{kind}/{xref}"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StatsConfig":
        """
        Build a config from a plain mapping.

        Raises:
            ValidationError: On unknown keys or non-numeric integer settings
        """
        data = dict(data or {})
        known = {f.name: f for f in fields(cls)}
        DataValidator.validate_known_keys(data, known)

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if known[key].type in ("int", int):
                number = DataValidator.normalize_int(value)
                if number is None or number < 1:
                    raise ValidationError(f"'{key}' must be a positive integer")
                values[key] = number
            else:
                values[key] = str(value)
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "StatsConfig":
        """
        Load a config from a YAML file.

        Raises:
            ValidationError: If the file is not a mapping or holds unknown keys
        """
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError(f"{path}: expected a mapping of settings")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[Union[str, Path]] = None) -> StatsConfig:
    """
    Load the configuration, falling back to defaults when no file exists.

    Args:
        path: Explicit file; when None the project default is used if present
    """
    if path is None:
        if not CONFIG_PATH.exists():
            return StatsConfig()
        path = CONFIG_PATH
    return StatsConfig.from_yaml(path)
