"""Data models for organization graphs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from org_graph.config import DotConfig

ID = str


class EntityType(str, Enum):
    """Kinds of nodes in an organization graph."""

    PURPOSE = "Purpose"
    PERSON = "Person"
    PROJECT = "Project"
    PRODUCTION_SYSTEM = "ProductionSystem"
    PROPERTY = "Property"
    PROGRESS_METRIC = "ProgressMetric"


class RelationType(str, Enum):
    """Predicates for subject -> object relationships."""

    # Person relationships
    WORKS_ON = "WorksOn"
    MANAGES = "Manages"
    LEADS = "Leads"

    # Project relationships
    SERVES = "Serves"
    DEPENDS_ON = "DependsOn"
    USES = "Uses"
    TRANSITIONS_TO = "TransitionsTo"

    # Production relationships
    MAINTAINS = "Maintains"
    REQUIRES = "Requires"
    SUPPORTS = "Supports"

    PART_OF = "PartOf"


class ProjectStatus(str, Enum):
    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "OnHold"


class SystemStatus(str, Enum):
    OPERATIONAL = "Operational"
    MAINTENANCE = "Maintenance"
    DEGRADED = "Degraded"
    OFFLINE = "Offline"


class PropertyType(str, Enum):
    PHYSICAL = "Physical"
    INTELLECTUAL = "Intellectual"
    FINANCIAL = "Financial"


@dataclass(frozen=True)
class DisplayAttributes:
    """Visual overrides for a node. Unset fields fall back to configured defaults."""

    color: str | None = None
    shape: str | None = None
    style: str | None = None
    label_override: str | None = None


@dataclass(frozen=True)
class EdgeDisplayAttributes:
    """Visual overrides for an edge."""

    color: str | None = None
    style: str | None = None  # "solid", "dashed", "dotted"
    label: str | None = None
    weight: float | None = None


@dataclass(frozen=True)
class Purpose:
    id: ID
    description: str
    display: DisplayAttributes = field(default_factory=DisplayAttributes)


@dataclass(frozen=True)
class Person:
    id: ID
    name: str
    title: str = ""
    display: DisplayAttributes = field(default_factory=DisplayAttributes)


@dataclass(frozen=True)
class Project:
    id: ID
    name: str
    status: ProjectStatus = ProjectStatus.PLANNING
    display: DisplayAttributes = field(default_factory=DisplayAttributes)


@dataclass(frozen=True)
class ProductionSystem:
    id: ID
    name: str
    status: SystemStatus = SystemStatus.OPERATIONAL
    display: DisplayAttributes = field(default_factory=DisplayAttributes)


@dataclass(frozen=True)
class PropertyItem:
    id: ID
    name: str
    property_type: PropertyType = PropertyType.PHYSICAL
    display: DisplayAttributes = field(default_factory=DisplayAttributes)


@dataclass(frozen=True)
class ProgressMetric:
    id: ID
    name: str
    metric_type: str = ""
    display: DisplayAttributes = field(default_factory=DisplayAttributes)


Entity = Purpose | Person | Project | ProductionSystem | PropertyItem | ProgressMetric


@dataclass(frozen=True)
class Relationship:
    """Directed edge following the subject-predicate-object pattern."""

    subject_id: ID
    subject_type: EntityType
    predicate: RelationType
    object_id: ID
    object_type: EntityType
    display: EdgeDisplayAttributes = field(default_factory=EdgeDisplayAttributes)


@dataclass(frozen=True)
class Organization:
    """Organization structure optimized for graph visualization.

    Entities live in one mapping per type, keyed by ID. Relationships keep
    their input order, which is also the order edges are emitted in.
    """

    name: str
    purposes: dict[ID, Purpose] = field(default_factory=dict)
    people: dict[ID, Person] = field(default_factory=dict)
    projects: dict[ID, Project] = field(default_factory=dict)
    production_systems: dict[ID, ProductionSystem] = field(default_factory=dict)
    property_items: dict[ID, PropertyItem] = field(default_factory=dict)
    progress_metrics: dict[ID, ProgressMetric] = field(default_factory=dict)
    relationships: list[Relationship] = field(default_factory=list)

    def collections(self) -> dict[EntityType, dict[ID, Entity]]:
        """Return every entity mapping keyed by its entity type."""
        return {
            EntityType.PURPOSE: self.purposes,
            EntityType.PERSON: self.people,
            EntityType.PROJECT: self.projects,
            EntityType.PRODUCTION_SYSTEM: self.production_systems,
            EntityType.PROPERTY: self.property_items,
            EntityType.PROGRESS_METRIC: self.progress_metrics,
        }

    def nodes_by_type(self) -> dict[EntityType, list[ID]]:
        """Get node IDs grouped by type, sorted, omitting empty types."""
        return {
            entity_type: sorted(entities)
            for entity_type, entities in self.collections().items()
            if entities
        }

    def get_entity(self, entity_id: ID, entity_type: EntityType) -> Entity | None:
        """Look up an entity in the mapping for its declared type."""
        return self.collections()[entity_type].get(entity_id)

    def get_node_label(self, entity_id: ID, entity_type: EntityType) -> str:
        """Get a plain node label, or an empty string for unknown IDs.

        Args:
            entity_id: ID of the entity
            entity_type: Collection to look the ID up in

        Returns:
            Label text without any escaping applied
        """
        entity = self.get_entity(entity_id, entity_type)
        if entity is None:
            return ""
        if isinstance(entity, Purpose):
            return entity.display.label_override or entity.description
        if isinstance(entity, Person):
            return f"{entity.name}\n{entity.title}" if entity.title else entity.name
        if isinstance(entity, (Project, ProductionSystem)):
            return f"{entity.name}\n[{entity.status.value}]"
        return entity.name

    def entity_ids(self) -> list[ID]:
        """Return all entity IDs across every collection, sorted."""
        return sorted({entity_id for entities in self.collections().values() for entity_id in entities})

    def find_id_collisions(self) -> dict[ID, list[EntityType]]:
        """Find IDs used by more than one entity collection.

        Node names share a single namespace in DOT, so an ID reused across
        collections renders as one node.
        """
        seen: dict[ID, list[EntityType]] = {}
        for entity_type, entities in self.collections().items():
            for entity_id in entities:
                seen.setdefault(entity_id, []).append(entity_type)
        return {entity_id: types for entity_id, types in seen.items() if len(types) > 1}

    def to_dot(self, config: "DotConfig | None" = None) -> str:
        """Generate a DOT graph for this organization."""
        from org_graph.dot import to_dot

        return to_dot(self, config)
