"""Organization data model and DOT graph generation."""

from org_graph.config import ColorConfig, DotConfig, NodeShapeConfig
from org_graph.dot import escape_dot, to_dot
from org_graph.models import (
    DisplayAttributes,
    EdgeDisplayAttributes,
    EntityType,
    Organization,
    Person,
    ProductionSystem,
    ProgressMetric,
    Project,
    ProjectStatus,
    PropertyItem,
    PropertyType,
    Purpose,
    RelationType,
    Relationship,
    SystemStatus,
)
from org_graph.schema import organization_schema

__all__ = [
    "ColorConfig",
    "DisplayAttributes",
    "DotConfig",
    "EdgeDisplayAttributes",
    "EntityType",
    "NodeShapeConfig",
    "Organization",
    "Person",
    "ProductionSystem",
    "ProgressMetric",
    "Project",
    "ProjectStatus",
    "PropertyItem",
    "PropertyType",
    "Purpose",
    "RelationType",
    "Relationship",
    "SystemStatus",
    "escape_dot",
    "organization_schema",
    "to_dot",
]
