"""Config file locations, `PYBOXER_` environment variables and config value checks."""

from __future__ import annotations

import inspect
import os
import warnings
from functools import cache
from pathlib import Path
from typing import Any

import platformdirs

from pyboxer.errors.config import BoxConfigError

ENVIRONMENT_VARIABLE_PREFIX = "PYBOXER_"
CFG_FILE_NAME = "config.toml"


@cache
def cfg_files() -> dict[Path, None]:
    """Returns the config file paths in the order they are loaded, later files override earlier ones.

    The first one is the site config of :py:mod:`platformdirs`, followed by the user config files.
    """
    dirs = platformdirs.PlatformDirs("pyboxer")
    return dict.fromkeys(
        [
            dirs.site_config_path / CFG_FILE_NAME,
            Path.home() / ".pyboxer" / CFG_FILE_NAME,
            Path.home() / ".config" / "pyboxer" / CFG_FILE_NAME,
            dirs.user_config_path / CFG_FILE_NAME,
        ]
    )


def merge_dicts(a: dict, b: dict) -> dict:
    """Merges b into a, nested dicts are merged recursively and b wins otherwise."""
    if isinstance(a, dict) and isinstance(b, dict):
        for k, v in b.items():
            a[k] = merge_dicts(a[k], v) if k in a else v
        return a
    return a if b is None else b


def _env_value(value: str) -> str | bool:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def get_environment_variable_config() -> dict:
    """Returns the `PYBOXER_*` environment variables as a config dict.

    ``PYBOXER_CONFIG__DEBUG=true`` becomes ``{"config": {"debug": True}}``,
    ``PYBOXER_PROFILE`` selects the profile, an empty value unsets it.
    """
    env_config: dict = {}
    for name, value in os.environ.items():
        if not name.startswith(ENVIRONMENT_VARIABLE_PREFIX):
            continue
        *sections, key = name[len(ENVIRONMENT_VARIABLE_PREFIX) :].lower().split("__")
        if not sections:
            if key != "profile":
                warnings.warn(f"{name} is not a valid pyboxer configuration environment variable.")
                continue
            env_config["profile"] = value or None
            continue
        section = env_config
        for s in sections:
            if not isinstance(section.get(s), dict):
                section[s] = {}
            section = section[s]
        section[key] = _env_value(value)
    return env_config


def check_init(init_class: type, config_path: str, kwargs: dict[str, Any]) -> dict:
    """Returns the config values that are parameters of init_class.

    Values of the wrong type are cast to the annotated type with a warning,
    unknown options are dropped with a warning.

    Args:
        init_class: the class that will be created with the returned kwargs
        config_path: the config section, used in the warnings and errors, e.g. `config` or `credentials`
        kwargs: the values from the config

    Raises:
        BoxConfigError: if a required parameter is missing or a value can't be cast
    """
    kwargs = dict(kwargs)
    valid_kwargs = {}
    for name, parameter in inspect.signature(init_class).parameters.items():
        if parameter.kind in (parameter.VAR_KEYWORD, parameter.VAR_POSITIONAL):
            continue
        conf_name = f"{config_path}.{name}"
        if name not in kwargs:
            if parameter.default is parameter.empty:
                msg = f"{conf_name} is missing to create {init_class!s}."
                raise BoxConfigError(msg)
            continue
        value = kwargs.pop(name)
        annotation = parameter.annotation
        # string annotations (postponed evaluation) can't be checked
        if isinstance(annotation, type) and not isinstance(value, annotation):
            try:
                cast_value = annotation(value)
            except (TypeError, ValueError) as e:
                msg = (
                    f"To initialize {init_class!s}, the config option {conf_name} needs to be of type"
                    f" {annotation!s}, but it is type {type(value)!s}"
                )
                raise BoxConfigError(msg) from e
            warnings.warn(
                f"{conf_name} was type {type(value)!s} but has been cast to"
                f" {annotation!s}, this was needed to instantiate {init_class!s}.",
            )
            value = cast_value
        valid_kwargs[name] = value
    for name in kwargs:
        warnings.warn(f"{config_path}.{name} is not a valid config option for {init_class!s}")
    return valid_kwargs
