#!/usr/bin/env python3
"""
options.py
-------------------
Reusable Click options for the tag commands.

Usage:
    @click.command()
    @tree_option
    @locale_option
    @member_option
    def my_command(tree, locale, member):
        pass
"""
import click

from lineage.stats.visibility import ViewerContext


tree_option = click.option(
    "--tree",
    default="1",
    show_default=True,
    help="Tree id or name",
)

locale_option = click.option(
    "--locale",
    default=None,
    help="Output locale (default: the configured locale)",
)

member_option = click.option(
    "--member",
    is_flag=True,
    help="Compute as a tree member (living individuals are shown)",
)


def viewer_for(member: bool) -> ViewerContext:
    """Viewer context for the --member flag."""
    return ViewerContext(is_member=True) if member else ViewerContext.anonymous()
