"""Layout strategies for placing organization entities in a DOT graph."""

from dataclasses import dataclass, field
from enum import Enum

import structlog

from org_graph.config import DotConfig
from org_graph.models import ID, Entity, Organization

logger = structlog.get_logger()


class LayoutStrategy(str, Enum):
    """How nodes are grouped when written to DOT."""

    HIERARCHICAL = "hierarchical"
    CLUSTERED = "clustered"
    FLAT = "flat"


def select_layout(config: DotConfig) -> LayoutStrategy:
    """Pick the layout strategy for a config.

    Hierarchical layout takes priority over subgraphs; flat is the fallback.
    """
    if config.use_hierarchical_layout:
        return LayoutStrategy.HIERARCHICAL
    if config.use_subgraphs:
        return LayoutStrategy.CLUSTERED
    return LayoutStrategy.FLAT


def sorted_entities(entities: dict[ID, Entity]) -> list[tuple[ID, Entity]]:
    """Return mapping items ordered by ID so output is stable across calls."""
    return sorted(entities.items(), key=lambda item: item[0])


@dataclass(frozen=True)
class Cluster:
    """A group of same-typed nodes written as ``subgraph cluster_<name>``."""

    name: str
    label: str
    members: list[tuple[ID, Entity]]
    fillcolor: str | None = None

    @property
    def ids(self) -> list[ID]:
        return [entity_id for entity_id, _ in self.members]

    @property
    def first(self) -> ID | None:
        return self.members[0][0] if self.members else None

    @property
    def last(self) -> ID | None:
        return self.members[-1][0] if self.members else None

    def chain(self) -> list[tuple[ID, ID]]:
        """Consecutive member pairs, linked by invisible edges to fix stacking order."""
        ids = self.ids
        return list(zip(ids, ids[1:]))


def flat_nodes(org: Organization) -> list[tuple[ID, Entity]]:
    """All entities for flat emission, grouped by type in a fixed order.

    Progress metrics only take part in the hierarchical layout.
    """
    nodes: list[tuple[ID, Entity]] = []
    for entities in (org.purposes, org.people, org.projects, org.production_systems, org.property_items):
        nodes.extend(sorted_entities(entities))
    return nodes


def type_clusters(org: Organization) -> list[Cluster]:
    """Per-type clusters for clustered emission, skipping empty collections."""
    candidates = [
        Cluster("purpose", "Purpose", sorted_entities(org.purposes)),
        Cluster("people", "People", sorted_entities(org.people)),
        Cluster("projects", "Projects", sorted_entities(org.projects)),
        Cluster("production", "Production", sorted_entities(org.production_systems)),
        Cluster("property", "Property", sorted_entities(org.property_items)),
    ]
    return [cluster for cluster in candidates if cluster.members]


@dataclass(frozen=True)
class HierarchicalPlan:
    """Tiers, rank alignment and tier-ordering edges for the hierarchical layout.

    Tier order is purpose, people, projects, progress, production, property.
    ``tier_edges`` are invisible layout edges, never domain relationships.
    """

    purpose: Cluster
    people: Cluster
    projects: Cluster
    progress: Cluster
    production: Cluster
    property: Cluster
    rank_groups: list[list[ID]] = field(default_factory=list)
    tier_edges: list[tuple[ID, ID]] = field(default_factory=list)

    @property
    def tiers(self) -> list[Cluster]:
        return [self.purpose, self.people, self.projects, self.progress, self.production, self.property]


def plan_hierarchy(org: Organization) -> HierarchicalPlan:
    """Arrange entities into tiers for the hierarchical layout.

    Purpose sits on top, people/projects/progress/production form the middle
    band and property sits at the bottom. Within a tier, members are chained in
    ID order.

    Args:
        org: Organization to arrange

    Returns:
        HierarchicalPlan describing clusters, rank groups and ordering edges
    """
    purpose = Cluster("purpose", "Purpose", sorted_entities(org.purposes), fillcolor="lightgray")
    people = Cluster("people", "People", sorted_entities(org.people), fillcolor="lightyellow")
    projects = Cluster("projects", "Projects", sorted_entities(org.projects), fillcolor="lightgreen")
    progress = Cluster("progress", "Progress", sorted_entities(org.progress_metrics), fillcolor="lightpink")
    production = Cluster(
        "production", "Production", sorted_entities(org.production_systems), fillcolor="lightcyan"
    )
    property_tier = Cluster("property", "Property", sorted_entities(org.property_items), fillcolor="lightgray")

    rank_groups: list[list[ID]] = []
    if purpose.members:
        rank_groups.append(purpose.ids)
    # First node of each middle column shares a row
    top_middle = [tier.first for tier in (people, projects, progress) if tier.first is not None]
    if top_middle:
        rank_groups.append(top_middle)
    if property_tier.members:
        rank_groups.append(property_tier.ids)

    tier_edges: list[tuple[ID, ID]] = []
    middle_head = people.first if people.first is not None else projects.first
    if purpose.first is not None and middle_head is not None:
        tier_edges.append((purpose.first, middle_head))
    if projects.last is not None and production.first is not None:
        tier_edges.append((projects.last, production.first))
    middle_tail = people.last if people.last is not None else production.last
    if middle_tail is not None and property_tier.first is not None:
        tier_edges.append((middle_tail, property_tier.first))

    plan = HierarchicalPlan(
        purpose=purpose,
        people=people,
        projects=projects,
        progress=progress,
        production=production,
        property=property_tier,
        rank_groups=rank_groups,
        tier_edges=tier_edges,
    )
    logger.debug(
        "Planned hierarchical layout",
        tiers={tier.name: len(tier.members) for tier in plan.tiers},
        rank_groups=len(rank_groups),
        tier_edges=len(tier_edges),
    )
    return plan
