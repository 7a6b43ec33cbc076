"""`pyboxer users` cli."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from pyboxer.clients.users import DEFAULT_USERS_PAGE_SIZE
from pyboxer.config.context import BoxContext
from pyboxer.errors.meta import BoxerError
from pyboxer.resources.user import User
from pyboxer.utils.api_types import USER_ALL_FIELDS
from pyboxer.utils.cli import _split_fields

if TYPE_CHECKING:
    from collections.abc import Iterable

USER_TABLE_COLUMNS = ("id", "login", "name", "status", "role")

profile_option = click.option("-p", "--profile", help="The config profile to select.")
fields_option = click.option(
    "-f",
    "--fields",
    help=(
        "Comma separated list of fields to fetch, e.g. 'login,name,space_used' or 'all'. "
        "Default fields if not set."
    ),
)


def _user_table(users: Iterable[User], columns: Iterable[str]) -> Table:
    columns = list(columns)
    table = Table(*columns)
    for user in users:
        table.add_row(*(_cell(getattr(user, c, None)) for c in columns))
    return table


def _cell(value) -> str:  # noqa: ANN001
    return "" if value is None else str(value)


def _fields(fields: str | None) -> list[str]:
    split = _split_fields(fields)
    if split == ["all"]:
        return list(USER_ALL_FIELDS)
    return split


def _columns(fields: list[str]) -> list[str]:
    if not fields:
        return list(USER_TABLE_COLUMNS)
    return ["id", *(f for f in fields if f != "id")]


def _context(profile: str | None) -> BoxContext:
    try:
        return BoxContext(profile=profile)
    except BoxerError as e:
        raise click.ClickException(str(e)) from e


@click.group("users")
def users_cli():
    """Commands for Box users."""


@users_cli.command("me")
@profile_option
@fields_option
def me_cli(profile: str | None, fields: str | None):
    """Shows the user the access token belongs to."""
    _me_cli(_context(profile), _fields(fields), Console())


def _me_cli(ctx: BoxContext, fields: list[str], console: Console):
    """Extra method for testing."""
    try:
        user = ctx.get_current_user(fields=fields)
    except BoxerError as e:
        raise click.ClickException(str(e)) from e
    console.print(_user_table([user], _columns(fields)))


@users_cli.command("list")
@profile_option
@click.option("-t", "--filter-term", help="Only users whose name or login starts with this term.")
@click.option("-o", "--offset", type=int, default=0, show_default=True, help="Index of the first user.")
@click.option(
    "-l", "--limit", type=int, default=DEFAULT_USERS_PAGE_SIZE, show_default=True, help="Maximum number of users."
)
@click.option("-a", "--all", "all_pages", is_flag=True, help="Fetch every page, starting at the offset.")
@fields_option
def list_cli(
    profile: str | None,
    filter_term: str | None,
    offset: int,
    limit: int,
    all_pages: bool,
    fields: str | None,
):
    """Lists the users of the enterprise."""
    _list_cli(_context(profile), filter_term, offset, limit, all_pages, _fields(fields), Console())


def _list_cli(
    ctx: BoxContext,
    filter_term: str | None,
    offset: int,
    limit: int,
    all_pages: bool,
    fields: list[str],
    console: Console,
):
    """Extra method for testing."""
    try:
        page = ctx.get_enterprise_users(filter_term=filter_term, offset=offset, limit=limit, fields=fields)
        users = list(page)
        while all_pages and page.has_more:
            page = ctx.get_enterprise_users(
                filter_term=filter_term, offset=page.next_offset, limit=limit, fields=fields
            )
            users.extend(page)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    except BoxerError as e:
        raise click.ClickException(str(e)) from e
    console.print(_user_table(users, _columns(fields)))
    console.print(f"{len(users)} of {page.total_count} users, offset {offset}")
