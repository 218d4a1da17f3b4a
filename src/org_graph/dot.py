"""DOT graph generation for organization structures."""

import re

import structlog

from org_graph.config import DotConfig
from org_graph.display import NodeStyle, resolve_edge, resolve_node
from org_graph.layout import Cluster, LayoutStrategy, flat_nodes, plan_hierarchy, select_layout, type_clusters
from org_graph.models import ID, Entity, Organization

logger = structlog.get_logger()

_BARE_ID = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")


def escape_dot(text: str) -> str:
    """Escape text for use inside a double-quoted DOT string.

    Backslashes are escaped first so the escapes added for quotes and
    newlines are not doubled.
    """
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def quote(text: str) -> str:
    return f'"{escape_dot(text)}"'


def keyword(value: str) -> str:
    """Write a keyword-like attribute value bare, quoting anything else."""
    if _BARE_ID.match(value):
        return value
    return quote(value)


def format_weight(weight: float) -> str:
    return f"{weight:.15g}"


class DotWriter:
    """Accumulates DOT statements for a single ``to_dot`` call."""

    def __init__(self, config: DotConfig) -> None:
        self.config = config
        self._lines: list[str] = []

    def line(self, text: str = "") -> None:
        self._lines.append(text)

    def node(self, entity_id: ID, entity: Entity, indent: str = "    ") -> None:
        style: NodeStyle = resolve_node(entity, self.config)
        self.line(
            f"{indent}{quote(entity_id)} [label={quote(style.label)}, "
            f"shape={keyword(style.shape)}, fillcolor={quote(style.fillcolor)}];"
        )

    def invisible_edge(self, source: ID, target: ID, indent: str) -> None:
        # Relies on the enclosing "edge [style=invis, weight=10]" default
        self.line(f"{indent}{quote(source)} -> {quote(target)};")

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"

    def header(self, org: Organization) -> None:
        if self.config.use_template_mode:
            self.line("digraph Organization {")
            self.line("    graph [")
            self.line("        newrank = true,")
            self.line("        nodesep = 0.3,")
            self.line("        ranksep = 0.5,")
            self.line("        splines = false")
            self.line("    ]")
            self.line()
            self.line("    node [")
            self.line("        shape = box,")
            self.line("        style = filled,")
            self.line("        fillcolor = lightblue")
            self.line("    ]")
            self.line()
            self.line("    edge [")
            self.line("        weight = 10")
            self.line("    ]")
            self.line()
            return

        self.line("digraph organization {")
        self.line(f"  rankdir={keyword(self.config.rankdir)};")
        self.line("  node [style=filled];")
        self.line(f"  label={quote(org.name)};")
        self.line("  labelloc=t;")
        self.line("  compound=true;")
        self.line("  newrank=true;")
        self.line()

    def flat(self, org: Organization) -> None:
        for entity_id, entity in flat_nodes(org):
            self.node(entity_id, entity)

    def clusters(self, org: Organization) -> None:
        for cluster in type_clusters(org):
            self.line(f"  subgraph cluster_{cluster.name} {{")
            self.line(f"    label={quote(cluster.label)};")
            self.line("    style=dashed;")
            for entity_id, entity in cluster.members:
                self.node(entity_id, entity)
            self.line("  }")
            self.line()

    def _tier(self, cluster: Cluster) -> None:
        self.line(f"  // {cluster.label} cluster")
        self.line(f"  subgraph cluster_{cluster.name} {{")
        self.line(f"    label={quote(cluster.label)};")
        self.line("    style=filled;")
        self.line(f"    fillcolor={keyword(cluster.fillcolor or 'lightgray')};")
        for entity_id, entity in cluster.members:
            self.node(entity_id, entity)
        for source, target in cluster.chain():
            self.invisible_edge(source, target, indent="    ")
        self.line("  }")
        self.line()

    def hierarchy(self, org: Organization) -> None:
        plan = plan_hierarchy(org)

        self.line("  graph [newrank=true, nodesep=0.3, ranksep=0.5, splines=false];")
        self.line("  edge [style=invis, weight=10];")
        self.line()

        for tier in plan.tiers:
            self._tier(tier)

        self.line("  // Horizontal alignment")
        for group in plan.rank_groups:
            members = "".join(f"{quote(entity_id)}; " for entity_id in group)
            self.line(f"  {{ rank=same; {members}}}")
        self.line()

        self.line("  // Vertical tier ordering")
        for source, target in plan.tier_edges:
            self.invisible_edge(source, target, indent="  ")

    def edges(self, org: Organization) -> None:
        for relationship in org.relationships:
            style = resolve_edge(relationship)
            attrs = [
                f"label={quote(style.label)}",
                f"style={keyword(style.style)}",
                f"color={quote(style.color)}",
            ]
            if style.xlabel is not None:
                attrs.append(f"xlabel={quote(style.xlabel)}")
            if style.weight is not None:
                attrs.append(f"weight={format_weight(style.weight)}")
            self.line(
                f"  {quote(relationship.subject_id)} -> {quote(relationship.object_id)} [{', '.join(attrs)}];"
            )


def to_dot(org: Organization, config: DotConfig | None = None) -> str:
    """Generate a DOT digraph for an organization.

    Never fails on well-typed input: relationship endpoints are not checked
    against the entity collections, so dangling IDs simply become implicit
    nodes in the rendered graph.

    Args:
        org: Organization to render
        config: DOT options, defaults to DotConfig()

    Returns:
        Complete DOT document text
    """
    config = config or DotConfig()
    strategy = select_layout(config)
    logger.debug(
        "Generating DOT",
        organization=org.name,
        layout=strategy.value,
        relationships=len(org.relationships),
    )

    writer = DotWriter(config)
    writer.header(org)

    if strategy is LayoutStrategy.HIERARCHICAL:
        writer.hierarchy(org)
    elif strategy is LayoutStrategy.CLUSTERED:
        writer.clusters(org)
    else:
        writer.flat(org)

    writer.line()
    writer.edges(org)
    writer.line("}")
    return writer.text()
