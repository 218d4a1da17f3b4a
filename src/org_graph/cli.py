"""CLI for org-graph."""

from dataclasses import replace
from pathlib import Path
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from org_graph.backends import FileStorage
from org_graph.config import DEFAULT_STORAGE_PATH, DotConfig, get_config, load_dot_config
from org_graph.config_commands import config_app
from org_graph.dot import to_dot
from org_graph.renderers import GraphvizRenderer
from org_graph.schema import schema_json
from org_graph.serialize import load_organization
from org_graph.storage import Storage
from org_graph.store_commands import store_app

logger = structlog.get_logger()

app = App(
    help="org-graph - Render organization structures as Graphviz DOT",
)

app.command(config_app)
app.command(store_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_storage() -> Storage:
    """Get the configured storage backend."""
    config = get_config()
    return FileStorage(config.get("storage.path", DEFAULT_STORAGE_PATH))


def get_dot_config(
    config_file: Path | None = None,
    layout: Literal["hierarchical", "clustered", "flat"] | None = None,
    rankdir: Literal["TB", "LR", "BT", "RL"] | None = None,
    show_status: bool | None = None,
) -> DotConfig:
    """Build the DOT configuration from a YAML file and command line overrides."""
    path = config_file or get_config().get("dot.config")
    dot_config = load_dot_config(path) if path else DotConfig()

    if layout is not None:
        dot_config = replace(
            dot_config,
            use_hierarchical_layout=layout == "hierarchical",
            use_subgraphs=layout == "clustered",
        )
    if rankdir is not None:
        dot_config = replace(dot_config, rankdir=rankdir)
    if show_status is not None:
        dot_config = replace(dot_config, show_status=show_status)
    return dot_config


@app.command
def dot(
    path: Path,
    config_file: Path | None = None,
    layout: Literal["hierarchical", "clustered", "flat"] | None = None,
    rankdir: Literal["TB", "LR", "BT", "RL"] | None = None,
    show_status: bool | None = None,
    key: str | None = None,
) -> None:
    """Generate DOT for an organization file.

    Args:
        path: Organization file (.json, .yaml or .yml)
        config_file: YAML file with DOT options
        layout: Override the layout strategy
        rankdir: Override the graph direction
        show_status: Override whether statuses are shown in labels
        key: Save the DOT source in storage under this key instead of printing it
    """
    org = load_organization(path)
    source = to_dot(org, get_dot_config(config_file, layout, rankdir, show_status))

    if key is None:
        print(source, end="")
        return

    get_storage().save(key, source.encode("utf-8"))
    print(f"Saved DOT for {org.name} as {key}")


@app.command
def render(
    path: Path,
    output: Path,
    config_file: Path | None = None,
    layout: Literal["hierarchical", "clustered", "flat"] | None = None,
    engine: str = "dot",
    fmt: str = "svg",
) -> None:
    """Render an organization file to an image with Graphviz.

    Args:
        path: Organization file (.json, .yaml or .yml)
        output: File to write the rendered image to
        config_file: YAML file with DOT options
        layout: Override the layout strategy
        engine: Graphviz layout engine
        fmt: Output format, text (svg) or binary (png, pdf)
    """
    org = load_organization(path)
    source = to_dot(org, get_dot_config(config_file, layout))
    output.write_bytes(GraphvizRenderer(engine=engine, fmt=fmt).render_bytes(source))
    print(f"Rendered {org.name} to {output}")


@app.command
def schema() -> None:
    """Print the JSON Schema of the organization format."""
    print(schema_json())


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
