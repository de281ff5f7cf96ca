# ABOUTME: Shared Click options for Shelves CLI commands.
# ABOUTME: Store path, acting user, and workspace scope, each readable from the environment.

from pathlib import Path

import click

from shelves.config import DEFAULT_USER, STORE_ENV, USER_ENV
from shelves.storage.sqlite import DEFAULT_STORE_PATH

store_option = click.option(
    "--store",
    "store_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar=STORE_ENV,
    help=f"Path to the Shelves store (default: {DEFAULT_STORE_PATH})",
)

user_option = click.option(
    "--user",
    "user_id",
    default=DEFAULT_USER,
    show_default=True,
    envvar=USER_ENV,
    help="User id to act as.",
)

workspace_option = click.option(
    "--workspace",
    "-w",
    "workspace_id",
    default=None,
    help="Operate on a workspace's collection instead of the global library.",
)
