"""
Tag Commands
------------

Inspect and evaluate embeddable statistics tags.

Commands:
    - tags: List the registered tag names
    - tag: Evaluate one tag with positional arguments
    - embed: Resolve every tag of a text blob
"""
import click

from lineage.core.exceptions import DatabaseError, StatsError, ValidationError
from lineage.core.logging_manager import handle_cli_error
from lineage.stats.registry import TagResolver
from . import get_db
from .options import locale_option, member_option, tree_option, viewer_for


def _tree_id(db, tree: str) -> int:
    with db.session_scope() as session:
        found = db.find_tree(session, tree)
        if found is None:
            raise ValidationError(f"Tree not found: {tree}")
        return found.id


@click.command()
@click.option("--prefix", default="", help="Only names starting with this text")
def tags(prefix):
    """List the registered tag names."""
    names = [name for name in TagResolver().names() if name.startswith(prefix)]
    for name in names:
        click.echo(name)
    click.echo(f"📊 {len(names)} tags")


@click.command()
@click.argument("name")
@click.argument("args", nargs=-1)
@tree_option
@locale_option
@member_option
@click.pass_context
def tag(ctx, name, args, tree, locale, member):
    """Evaluate the tag NAME with positional ARGS."""
    try:
        db = get_db(ctx)
        tree_id = _tree_id(db, tree)
        click.echo(db.evaluate_tag(name, list(args), tree_id, viewer_for(member), locale))

    except (DatabaseError, StatsError, ValidationError) as e:
        handle_cli_error(ctx, e, "tag", {"tag": name, "tree": tree})


@click.command()
@click.argument("text")
@tree_option
@locale_option
@member_option
@click.pass_context
def embed(ctx, text, tree, locale, member):
    """Resolve the #tag:args# tokens of TEXT ('-' reads standard input)."""
    if text == "-":
        with click.open_file("-") as stream:
            text = stream.read()
    try:
        db = get_db(ctx)
        tree_id = _tree_id(db, tree)
        click.echo(db.resolve_tags(text, tree_id, viewer_for(member), locale))

    except (DatabaseError, StatsError, ValidationError) as e:
        handle_cli_error(ctx, e, "embed", {"tree": tree})
