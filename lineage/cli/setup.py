"""
Setup Commands
--------------

Database initialization.

Commands:
    - init: Create the schema of a new database
"""
import click

from lineage.core.exceptions import DatabaseError
from lineage.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Create missing database tables."""
    try:
        db = get_db(ctx)
        click.echo("🗄️  Initializing database schema...")
        db.create_schema()
        click.echo(f"✅ Database ready: {db.url}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
