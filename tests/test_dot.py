"""Tests for DOT generation."""

import re

import pytest

from org_graph.config import DotConfig
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
    Purpose,
    Relationship,
    RelationType,
    SystemStatus,
)

FLAT = DotConfig(use_hierarchical_layout=False, use_subgraphs=False)
CLUSTERED = DotConfig(use_hierarchical_layout=False, use_subgraphs=True)
HIERARCHICAL = DotConfig()

QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')


def unescape(text: str) -> str:
    """Decode a DOT quoted string body."""
    return re.sub(r"\\(.)", lambda m: "\n" if m.group(1) == "n" else m.group(1), text)


def quoted_strings(line: str) -> list[str]:
    return [unescape(body) for body in QUOTED.findall(line)]


def minimal_org() -> Organization:
    return Organization(
        name="Acme",
        people={"P1": Person(id="P1", name="Alice", title="Founder")},
        projects={"X1": Project(id="X1", name="Project X", status=ProjectStatus.ACTIVE)},
        relationships=[Relationship("P1", EntityType.PERSON, RelationType.WORKS_ON, "X1", EntityType.PROJECT)],
    )


def full_org() -> Organization:
    return Organization(
        name="Acme Corp",
        purposes={"mission": Purpose(id="mission", description="Mission"), "vision": Purpose(id="vision", description="Vision")},
        people={"person1": Person(id="person1", name="Person 1"), "person2": Person(id="person2", name="Person 2")},
        projects={"project1": Project(id="project1", name="Project 1")},
        progress_metrics={"metric1": ProgressMetric(id="metric1", name="Metric 1")},
        production_systems={"prod1": ProductionSystem(id="prod1", name="Prod 1", status=SystemStatus.DEGRADED)},
        property_items={"asset1": PropertyItem(id="asset1", name="Asset 1")},
        relationships=[
            Relationship("person1", EntityType.PERSON, RelationType.WORKS_ON, "project1", EntityType.PROJECT),
            Relationship("project1", EntityType.PROJECT, RelationType.SERVES, "mission", EntityType.PURPOSE),
        ],
    )


def test_escape_dot() -> None:
    """Test backslashes are escaped before quotes and newlines."""
    assert escape_dot('a\\b"c\nd') == 'a\\\\b\\"c\\nd'
    assert escape_dot('\\"') == '\\\\\\"'
    assert escape_dot("plain") == "plain"


def test_minimal_graph_flat() -> None:
    """Test the person-works-on-project scenario in flat layout."""
    dot = to_dot(minimal_org(), FLAT)
    lines = dot.splitlines()

    person_nodes = [line for line in lines if line.strip().startswith('"P1" [')]
    assert person_nodes == ['    "P1" [label="Alice\\nFounder", shape=box, fillcolor="lightgreen"];']

    project_nodes = [line for line in lines if line.strip().startswith('"X1" [')]
    assert len(project_nodes) == 1
    assert "Project X" in project_nodes[0]
    assert "[Active]" in project_nodes[0]

    assert '  "P1" -> "X1" [label="WorksOn", style=solid, color="black"];' in lines
    assert "subgraph" not in dot


def test_edge_display_overlay() -> None:
    """Test edge overlays render style and xlabel without a weight."""
    org = Organization(
        name="Acme",
        relationships=[
            Relationship(
                "x",
                EntityType.PROJECT,
                RelationType.TRANSITIONS_TO,
                "s",
                EntityType.PRODUCTION_SYSTEM,
                EdgeDisplayAttributes(style="dashed", label="deploys"),
            )
        ],
    )
    edge = [line for line in to_dot(org, FLAT).splitlines() if "->" in line]
    assert edge == ['  "x" -> "s" [label="TransitionsTo", style=dashed, color="black", xlabel="deploys"];']
    assert "weight" not in edge[0]


def test_edge_weight() -> None:
    """Test weights are emitted in compact numeric form."""
    org = Organization(
        name="Acme",
        relationships=[
            Relationship("a", EntityType.PROJECT, RelationType.DEPENDS_ON, "b", EntityType.PROJECT, EdgeDisplayAttributes(weight=2.0)),
            Relationship("b", EntityType.PROJECT, RelationType.DEPENDS_ON, "c", EntityType.PROJECT, EdgeDisplayAttributes(weight=1.5)),
        ],
    )
    dot = to_dot(org, FLAT)
    assert "weight=2]" in dot
    assert "weight=1.5]" in dot


def test_edge_weight_full_precision() -> None:
    """Test large and precise weights are written without rounding."""
    org = Organization(
        name="Acme",
        relationships=[
            Relationship("a", EntityType.PROJECT, RelationType.USES, "b", EntityType.PROPERTY, EdgeDisplayAttributes(weight=1234567.0)),
            Relationship("b", EntityType.PROJECT, RelationType.USES, "c", EntityType.PROPERTY, EdgeDisplayAttributes(weight=0.1234567)),
        ],
    )
    edges = [line for line in to_dot(org, FLAT).splitlines() if "->" in line]
    assert edges[0].endswith(", weight=1234567];")
    assert edges[1].endswith(", weight=0.1234567];")


def test_edges_keep_input_order() -> None:
    """Test relationship edges follow input order."""
    org = Organization(
        name="Acme",
        relationships=[
            Relationship("z", EntityType.PERSON, RelationType.MANAGES, "a", EntityType.PERSON),
            Relationship("a", EntityType.PERSON, RelationType.LEADS, "z", EntityType.PERSON),
        ],
    )
    edges = [line for line in to_dot(org, FLAT).splitlines() if "->" in line]
    assert [quoted_strings(edge)[:2] for edge in edges] == [["z", "a"], ["a", "z"]]


def test_dangling_relationship_endpoints() -> None:
    """Test relationships to unknown IDs are still written."""
    org = Organization(
        name="Acme",
        relationships=[Relationship("ghost", EntityType.PERSON, RelationType.PART_OF, "nowhere", EntityType.PURPOSE)],
    )
    assert '"ghost" -> "nowhere"' in to_dot(org, HIERARCHICAL)


@pytest.mark.parametrize(
    "value",
    ['quote " inside', "back\\slash", "multi\nline", 'all \\ of " them\n', '", shape=none, label="x'],
)
def test_escaping_round_trip(value: str) -> None:
    """Test user strings survive emission unchanged after DOT unescaping."""
    org = Organization(
        name=value,
        people={value: Person(id=value, name=value)},
        relationships=[
            Relationship(
                value,
                EntityType.PERSON,
                RelationType.WORKS_ON,
                value,
                EntityType.PROJECT,
                EdgeDisplayAttributes(label=value, color=value),
            )
        ],
    )
    lines = to_dot(org, FLAT).splitlines()

    assert quoted_strings(next(line for line in lines if line.startswith("  label=")))[0] == value

    node = next(line for line in lines if line.startswith("    ") and "shape=" in line)
    node_strings = quoted_strings(node)
    assert node_strings[0] == value
    assert node_strings[1] == value

    edge = next(line for line in lines if "xlabel=" in line)
    assert quoted_strings(edge) == [value, value, "WorksOn", value, value]


def test_unsafe_edge_style_is_quoted() -> None:
    """Test edge styles that are not plain keywords cannot inject attributes."""
    org = Organization(
        name="Acme",
        relationships=[
            Relationship(
                "a",
                EntityType.PERSON,
                RelationType.LEADS,
                "b",
                EntityType.PERSON,
                EdgeDisplayAttributes(style='dashed, color="red"'),
            )
        ],
    )
    assert 'style="dashed, color=\\"red\\""' in to_dot(org, FLAT)


def test_status_suffix_in_dot() -> None:
    """Test project status suffix appears only with show_status."""
    org = minimal_org()
    assert "[Active]" in to_dot(org, FLAT)
    no_status = DotConfig(use_hierarchical_layout=False, use_subgraphs=False, show_status=False)
    assert "[Active]" not in to_dot(org, no_status)


def test_status_colors_in_dot() -> None:
    """Test status defaults and explicit colors reach the node statement."""
    org = Organization(
        name="Acme",
        projects={
            "a": Project(id="a", name="A", status=ProjectStatus.COMPLETED),
            "b": Project(id="b", name="B", status=ProjectStatus.PLANNING, display=DisplayAttributes(color="gold")),
        },
    )
    dot = to_dot(org, FLAT)
    assert '"a" [label="A\\n[Completed]", shape=component, fillcolor="lightgray"];' in dot
    assert '"b" [label="B\\n[Planning]", shape=component, fillcolor="gold"];' in dot


def test_header_honours_rankdir() -> None:
    """Test the standard header carries rankdir and the organization name."""
    dot = to_dot(minimal_org(), DotConfig(use_hierarchical_layout=False, rankdir="LR"))
    lines = dot.splitlines()
    assert lines[0] == "digraph organization {"
    assert lines[1] == "  rankdir=LR;"
    assert '  label="Acme";' in lines
    assert dot.endswith("}\n")


def test_template_mode_header() -> None:
    """Test template mode writes the fixed header without rankdir."""
    dot = to_dot(minimal_org(), DotConfig(use_template_mode=True, rankdir="LR"))
    assert dot.startswith("digraph Organization {\n    graph [\n        newrank = true,")
    assert "rankdir" not in dot
    assert "        weight = 10" in dot


def test_clustered_layout_omits_empty_clusters() -> None:
    """Test clustered mode writes one dashed cluster per non-empty type."""
    dot = to_dot(minimal_org(), CLUSTERED)
    assert "subgraph cluster_people {" in dot
    assert "subgraph cluster_projects {" in dot
    assert "cluster_purpose" not in dot
    assert "cluster_production" not in dot
    assert "cluster_property" not in dot
    assert dot.count("style=dashed;") == 2


def test_hierarchical_layout() -> None:
    """Test tiers, invisible chains, rank groups and tier ordering."""
    dot = to_dot(full_org(), HIERARCHICAL)
    lines = dot.splitlines()

    assert "  graph [newrank=true, nodesep=0.3, ranksep=0.5, splines=false];" in lines
    assert "  edge [style=invis, weight=10];" in lines
    for name in ("purpose", "people", "projects", "progress", "production", "property"):
        assert f"  subgraph cluster_{name} {{" in lines
    assert "    fillcolor=lightpink;" in lines

    assert '    "mission" -> "vision";' in lines
    assert '    "person1" -> "person2";' in lines
    assert '  { rank=same; "mission"; "vision"; }' in lines
    assert '  { rank=same; "person1"; "project1"; "metric1"; }' in lines
    assert '  { rank=same; "asset1"; }' in lines
    assert '  "mission" -> "person1";' in lines
    assert '  "project1" -> "prod1";' in lines
    assert '  "person2" -> "asset1";' in lines

    assert '"metric1" [label="Metric 1", shape=box, fillcolor="lightblue"];' in dot
    assert '  "person1" -> "project1" [label="WorksOn", style=solid, color="black"];' in lines


def test_hierarchical_nodes_appear_once() -> None:
    """Test every entity gets exactly one node statement."""
    dot = to_dot(full_org(), HIERARCHICAL)
    for entity_id in full_org().entity_ids():
        assert dot.count(f'"{entity_id}" [label=') == 1


@pytest.mark.parametrize("config", [FLAT, CLUSTERED, HIERARCHICAL])
def test_empty_organization(config: DotConfig) -> None:
    """Test an empty organization produces a well-formed digraph without edges."""
    dot = to_dot(Organization(name="Empty"), config)
    assert dot.startswith("digraph organization {")
    assert dot.rstrip().endswith("}")
    assert dot.count("{") == dot.count("}")
    assert "[label=" not in dot
    assert "->" not in dot


@pytest.mark.parametrize("config", [FLAT, CLUSTERED, HIERARCHICAL])
def test_to_dot_idempotent(config: DotConfig) -> None:
    """Test repeated calls give byte-identical output."""
    org = full_org()
    assert to_dot(org, config) == to_dot(org, config)


def test_output_independent_of_insertion_order() -> None:
    """Test entity insertion order does not change the output."""
    forward = Organization(name="Acme", people={pid: Person(id=pid, name=pid) for pid in ("a", "b", "c")})
    backward = Organization(name="Acme", people={pid: Person(id=pid, name=pid) for pid in ("c", "b", "a")})
    assert to_dot(forward) == to_dot(backward)


def test_organization_to_dot_uses_defaults() -> None:
    """Test the Organization helper defaults to the hierarchical layout."""
    assert full_org().to_dot() == to_dot(full_org(), DotConfig())
