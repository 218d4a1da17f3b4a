"""Settings commands for the org-graph CLI."""

from pathlib import Path

from cyclopts import App

from org_graph.config import DEFAULT_STORAGE_PATH, SETTINGS, check_setting_key, get_config, validate_setting

config_app = App(name="config", help="Manage storage and DOT settings")

DEFAULTS = {"storage.path": DEFAULT_STORAGE_PATH}


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set storage.path or dot.config.

    A dot.config file is loaded and validated before it is saved, and stored
    as an absolute path so it resolves from any directory.

    Args:
        key: storage.path or dot.config
        value: Directory for storage.path, YAML file of DOT options for dot.config
        global_: If True, set in global config. If False, set in local config.
    """
    validate_setting(key, value)
    if key == "dot.config":
        value = str(Path(value).resolve())

    get_config(use_global=global_).set(key, value)
    scope = "global" if global_ else "local"
    print(f"Set {key} = {value} ({scope})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Unset a setting, returning it to its default.

    Args:
        key: storage.path or dot.config
        global_: If True, unset from global config. If False, unset from local config.
    """
    check_setting_key(key)
    get_config(use_global=global_).unset(key)
    scope = "global" if global_ else "local"
    print(f"Unset {key} ({scope})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Show the effective value of a setting.

    Args:
        key: storage.path or dot.config
        global_: If True, read global config only. If False, read local config with global fallback.
    """
    check_setting_key(key)
    value = get_config(use_global=global_).get(key)
    if value is not None:
        print(f"{key} = {value}")
    elif key in DEFAULTS:
        print(f"{key} = {DEFAULTS[key]} (default)")
    else:
        print(f"{key} is not set")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List every setting with its effective value.

    Args:
        global_: If True, list global config only. If False, list merged config.
    """
    settings = get_config(use_global=global_).list()

    for key, description in SETTINGS.items():
        if key in settings:
            shown = settings[key]
        elif key in DEFAULTS:
            shown = f"{DEFAULTS[key]} (default)"
        else:
            shown = "(not set)"
        print(f"{key} = {shown}  # {description}")
