"""Storage commands for the org-graph CLI."""

from pathlib import Path

from cyclopts import App

store_app = App(name="store", help="Manage stored DOT sources")


@store_app.command
def save(key: str, path: Path) -> None:
    """Store the contents of a file under a key."""
    from org_graph.cli import get_storage

    get_storage().save(key, path.read_bytes())
    print(f"Saved {path} as {key}")


@store_app.command
def load(key: str) -> None:
    """Print the data stored under a key."""
    from org_graph.cli import get_storage

    print(get_storage().load(key).decode("utf-8"), end="")


@store_app.command
def delete(*keys: str) -> None:
    """Delete one or more stored keys."""
    from org_graph.cli import get_storage

    storage = get_storage()
    for key in keys:
        storage.delete(key)
    print(f"Deleted {len(keys)} key(s)")


@store_app.command
def exists(key: str) -> None:
    """Report whether a key is stored."""
    from org_graph.cli import get_storage

    if get_storage().exists(key):
        print(f"{key} exists")
    else:
        print(f"{key} does not exist")
