"""Resolution of the effective visual style for nodes and edges.

Precedence for node fill color is: the entity's own ``display.color``, then a
status default (projects and production systems), then the per-type default
from :class:`~org_graph.config.ColorConfig`. Node shape always comes from
:class:`~org_graph.config.NodeShapeConfig`; ``display.shape`` is not consulted.
"""

from dataclasses import dataclass

from org_graph.config import DotConfig
from org_graph.models import (
    Entity,
    Person,
    ProductionSystem,
    ProgressMetric,
    Project,
    ProjectStatus,
    PropertyItem,
    Purpose,
    Relationship,
    SystemStatus,
)

PURPOSE_LABEL_LENGTH = 30

DEFAULT_EDGE_STYLE = "solid"
DEFAULT_EDGE_COLOR = "black"


@dataclass(frozen=True)
class NodeStyle:
    """Final attributes of one DOT node statement, unescaped."""

    label: str
    shape: str
    fillcolor: str


@dataclass(frozen=True)
class EdgeStyle:
    """Final attributes of one DOT edge statement, unescaped."""

    label: str
    style: str
    color: str
    xlabel: str | None = None
    weight: float | None = None


def truncate(text: str, max_len: int = PURPOSE_LABEL_LENGTH) -> str:
    """Shorten text to at most max_len characters, ending in "..." when cut."""
    if len(text) <= max_len:
        return text
    return text[: max(max_len - 3, 0)] + "..."


def project_color(status: ProjectStatus, config: DotConfig) -> str:
    colors = config.colors
    return {
        ProjectStatus.PLANNING: colors.project_planning,
        ProjectStatus.ACTIVE: colors.project_active,
        ProjectStatus.COMPLETED: colors.project_completed,
        ProjectStatus.ON_HOLD: colors.project_onhold,
    }[status]


def system_color(status: SystemStatus, config: DotConfig) -> str:
    colors = config.colors
    return {
        SystemStatus.OPERATIONAL: colors.production_operational,
        SystemStatus.MAINTENANCE: colors.production_maintenance,
        SystemStatus.DEGRADED: colors.production_degraded,
        SystemStatus.OFFLINE: colors.production_offline,
    }[status]


def _with_status(name: str, status: ProjectStatus | SystemStatus, config: DotConfig) -> str:
    if config.show_status:
        return f"{name}\n[{status.value}]"
    return name


def resolve_node(entity: Entity, config: DotConfig) -> NodeStyle:
    """Compute label, shape and fill color for an entity.

    Args:
        entity: Any organization entity
        config: DOT configuration supplying shape and color defaults

    Returns:
        NodeStyle with every attribute set
    """
    shapes = config.node_shapes
    colors = config.colors
    override = entity.display.label_override

    if isinstance(entity, Purpose):
        label = truncate(entity.description)
        shape = shapes.purpose
        default_color = colors.purpose
    elif isinstance(entity, Person):
        label = f"{entity.name}\n{entity.title}" if entity.title else entity.name
        shape = shapes.person
        default_color = colors.person
    elif isinstance(entity, Project):
        label = _with_status(entity.name, entity.status, config)
        shape = shapes.project
        default_color = project_color(entity.status, config)
    elif isinstance(entity, ProductionSystem):
        label = _with_status(entity.name, entity.status, config)
        shape = shapes.production
        default_color = system_color(entity.status, config)
    elif isinstance(entity, PropertyItem):
        label = entity.name
        shape = shapes.property
        default_color = colors.property
    elif isinstance(entity, ProgressMetric):
        label = entity.name
        shape = shapes.progress
        default_color = colors.progress
    else:
        raise TypeError(f"Unsupported entity type: {type(entity).__name__}")

    return NodeStyle(
        label=override if override is not None else label,
        shape=shape,
        fillcolor=entity.display.color or default_color,
    )


def resolve_edge(relationship: Relationship) -> EdgeStyle:
    """Compute the attributes of a relationship edge."""
    display = relationship.display
    return EdgeStyle(
        label=relationship.predicate.value,
        style=display.style or DEFAULT_EDGE_STYLE,
        color=display.color or DEFAULT_EDGE_COLOR,
        xlabel=display.label,
        weight=display.weight,
    )
