"""`pyboxer info` cli."""

from __future__ import annotations

import importlib.metadata
import os
import platform
import sys

import click
from packaging.requirements import Requirement
from rich.console import Console
from rich.table import Table, box
from rich.tree import Tree

from pyboxer.__about__ import __version__
from pyboxer.config.config import get_config_dict, load_config, parse_credentials_config, parse_general_config
from pyboxer.config.context import BoxContext
from pyboxer.errors.meta import BoxerError
from pyboxer.utils.cli import _bool_color, _bool_icon
from pyboxer.utils.config import cfg_files

HIGHLIGHT_BEGIN = "[bold color(5)]"
HIGHLIGHT_END = "[/bold color(5)]"


def _highlight(s: str) -> str:
    return HIGHLIGHT_BEGIN + s + HIGHLIGHT_END


def _environment_section() -> Tree:
    node = Tree("[bold]Environment")
    table = Table(show_header=False, box=box.ROUNDED)
    table.add_row("[bold]pyboxer", _highlight("v" + __version__))
    table.add_row("[bold]Python", _highlight(f"v{sys.version}, {platform.python_implementation()}"))
    table.add_row("[bold]OS", _highlight(f"{platform.system()} {platform.release()} ({platform.machine()})"))
    node.add(table)
    return node


def _installed_version(name: str) -> str | None:
    try:
        return importlib.metadata.version(name)
    except importlib.metadata.PackageNotFoundError:
        return None


def _dependency_section() -> Tree:
    node = Tree("[bold]Dependencies")
    try:
        requires = importlib.metadata.requires("pyboxer") or []
    except importlib.metadata.PackageNotFoundError:
        node.add(_bool_color(False, "pyboxer is not installed as a package."))
        return node

    table = Table("Requirement", "Installed")
    for requirement in map(Requirement, requires):
        # skips the test extra and dependencies for other python versions
        if requirement.marker is not None and not requirement.marker.evaluate({"extra": ""}):
            continue
        version = _installed_version(requirement.name)
        installed = _highlight("v" + version) if version else "not installed"
        table.add_row(str(requirement), f"{installed} {_bool_icon(bool(version))}")
    node.add(table)
    return node


def _credentials_table(config_dict: dict | None) -> tuple[Table, BoxContext]:
    token_provider = parse_credentials_config(config_dict)
    table = Table(
        "Credential Configuration Name",
        "Value",
        title=f"Using the {token_provider.__class__.__name__} implementation for authentication.",
    )
    for name, value in vars(token_provider).items():
        # private attributes hold the token, only show whether it is set
        if name.startswith("_"):
            table.add_row(
                name.lstrip("_"), _bool_color(value is not None, "Is set, but not shown for security reasons.")
            )
        else:
            table.add_row(name, str(value))
    return table, BoxContext(config=parse_general_config(config_dict), token_provider=token_provider)


def _config_section(profile: str | None) -> Tree:
    profile = profile or load_config().get("profile")
    node = Tree("[bold]Configuration" + (f" (Profile '{profile}')" if profile else ""))

    try:
        config_dict = get_config_dict(profile=profile)
        config_table = Table("Config Name", "Value")
        for name, value in vars(parse_general_config(config_dict)).items():
            config_table.add_row(name, _bool_icon(value) if isinstance(value, bool) else str(value))
        node.add(config_table)

        credentials_table, ctx = _credentials_table(config_dict)
        node.add(credentials_table)
    except (BoxerError, AttributeError) as e:
        node.add(
            _bool_icon(False) + " Can't create a TokenProvider,"
            " please refer to the README how to configure pyboxer for authentication.\n"
            f"Following Error was raised: {e}"
        )
    else:
        try:
            login = ctx.get_current_user(fields=["login"]).login
        except BoxerError:
            login = None
        node.add(
            _bool_color(bool(login), f"Successfully authenticated as '{login}'" if login else "Failed to authenticate")
        )

    files_table = Table("Config File Path", "Exists")
    for cfg_file in cfg_files():
        files_table.add_row(os.fspath(cfg_file), _bool_icon(cfg_file.is_file()))
    node.add(files_table)
    return node


@click.command("info")
@click.option("-p", "--profile", help="The config profile to select.")
def info_cli(profile: str | None):
    """Prints useful information about the pyboxer installation."""
    tree = Tree("[bold]pyboxer Information")
    tree.add(_environment_section())
    tree.add(_dependency_section())
    tree.add(_config_section(profile=profile))
    Console(highlight=False).print(tree)
