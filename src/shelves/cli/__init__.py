# ABOUTME: CLI package for Shelves, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from shelves.cli.commands import (
    book_cmd,
    catalog_cmd,
    config_cmd,
    fav_cmd,
    info_cmd,
    insights_cmd,
    loan_cmd,
    ls_cmd,
    search_cmd,
    workspace_cmd,
)


@click.group()
@click.version_option(package_name="shelves")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Shelves - a library catalog with shared workspaces."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(ls_cmd.ls)
cli.add_command(search_cmd.search)
cli.add_command(info_cmd.info)
cli.add_command(book_cmd.add)
cli.add_command(book_cmd.edit)
cli.add_command(book_cmd.rm)
cli.add_command(loan_cmd.checkout)
cli.add_command(loan_cmd.checkin)
cli.add_command(loan_cmd.overdue)
cli.add_command(loan_cmd.loans)
cli.add_command(fav_cmd.fav)
cli.add_command(insights_cmd.stats)
cli.add_command(insights_cmd.insights)
cli.add_command(insights_cmd.recommend)
cli.add_command(insights_cmd.summary)
cli.add_command(catalog_cmd.catalog)
cli.add_command(workspace_cmd.workspace)
cli.add_command(config_cmd.config)
