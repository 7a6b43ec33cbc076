"""This file implements the pyboxer cli.

It registers the subcommands of pyboxer.
"""

from __future__ import annotations

import click

from pyboxer.cli.info import info_cli
from pyboxer.cli.users import users_cli


@click.group("pyboxer")
def cli():
    """pyboxer CLI."""


cli.add_command(info_cli)
cli.add_command(users_cli)
if __name__ == "__main__":
    cli()
