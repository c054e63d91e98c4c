#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Lineage project.

All paths are Path objects relative to the project root:
    ROOT/
    ├── lineage/       # Package code (stats templates live inside)
    ├── data/          # Genealogy database
    ├── logs/          # Application logs
    └── lineage.yaml   # Optional statistics configuration
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/lineage/core/paths.py.

    Returns:
        Path object for project root
    """
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"

# --- Database ---
DB_DIR = DATA_DIR / "db"
DB_PATH = DB_DIR / "lineage.db"

# --- Statistics ---
STATS_TEMPLATES_DIR = PACKAGE_DIR / "stats" / "templates"
CONFIG_PATH = ROOT / "lineage.yaml"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
