#!/usr/bin/env python3
"""
Lineage Command-Line Interface
------------------------------

Administrative commands around the statistics engine.

Command Structure:
    - Setup (init)
    - Tags (tags, tag, embed)

Usage:
    # List every embeddable tag
    lineage tags

    # Evaluate one tag
    lineage tag topTenOldestList 5 --tree 1

    # Resolve a text blob
    lineage embed "Born first: #firstBirthName# in #firstBirthYear#"
"""
import click
from pathlib import Path

from lineage.core.paths import DB_PATH, LOG_DIR
from lineage.database import LineageDB
from lineage.stats.config import load_config


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Statistics configuration file (YAML)",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, config_path, verbose):
    """Lineage genealogy statistics CLI"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["verbose"] = verbose


def get_db(ctx) -> LineageDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        db = LineageDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
            config=load_config(ctx.obj["config_path"]),
        )
        ctx.obj["db"] = db
        ctx.obj["logger"] = db.logger
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .tags import embed, tag, tags  # noqa: E402

cli.add_command(init)
cli.add_command(tags)
cli.add_command(tag)
cli.add_command(embed)


if __name__ == "__main__":
    cli(obj={})
