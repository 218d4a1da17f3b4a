"""Build an organization in memory and print its DOT representation.

Usage:
    python examples/dot_generation.py
"""

from org_graph import (
    DotConfig,
    EdgeDisplayAttributes,
    EntityType,
    Organization,
    Person,
    ProductionSystem,
    Project,
    ProjectStatus,
    PropertyItem,
    Purpose,
    Relationship,
    RelationType,
    SystemStatus,
    to_dot,
)


def build_organization() -> Organization:
    return Organization(
        name="Acme Corp",
        purposes={"mission": Purpose(id="mission", description="Mission")},
        people={
            "person1": Person(id="person1", name="Person 1"),
            "person2": Person(id="person2", name="Person 2", title="Engineer"),
        },
        projects={"project1": Project(id="project1", name="Project 1", status=ProjectStatus.ACTIVE)},
        production_systems={"prod1": ProductionSystem(id="prod1", name="Prod 1", status=SystemStatus.DEGRADED)},
        property_items={"asset1": PropertyItem(id="asset1", name="Asset 1")},
        relationships=[
            Relationship("person1", EntityType.PERSON, RelationType.WORKS_ON, "project1", EntityType.PROJECT),
            Relationship(
                "project1",
                EntityType.PROJECT,
                RelationType.TRANSITIONS_TO,
                "prod1",
                EntityType.PRODUCTION_SYSTEM,
                EdgeDisplayAttributes(style="dashed", label="deploys"),
            ),
        ],
    )


if __name__ == "__main__":
    org = build_organization()
    print(to_dot(org, DotConfig()))
    print(to_dot(org, DotConfig(use_hierarchical_layout=False, rankdir="LR")))
